"""
Location Stream Segmenter

Turns an ordered stream of location samples into writer calls that
render zero or more path segments.

A segment is a run of at least two consecutive valid samples. The
first sample of a run is held back one step and written when the
second one confirms the run, so an isolated valid sample between
invalid ones is never rendered. Works in one forward pass with O(1)
state; the stream is never materialised.
"""

from dataclasses import dataclass
import logging
from typing import Iterable, Optional

from app.features.tracks.types import LocationSample
from .writers.base import TrackFormatWriter

logger = logging.getLogger(__name__)


@dataclass
class SegmentationStats:
    """Counters collected during one pass."""
    samples: int = 0
    invalid_samples: int = 0
    points_written: int = 0
    segments: int = 0


class LocationSegmenter:
    """
    Writes a location stream to a format writer as path segments.

    Usage:
        stats = LocationSegmenter(writer).write(samples)

    Call sequence produced:
        begin_track(first point of the first segment)    at most once
        (open_segment, write_point x N>=2, close_segment)*
        end_track(last processed sample)                 only after begin_track
    """

    def __init__(self, writer: TrackFormatWriter):
        self.writer = writer

    def write(self, samples: Iterable[LocationSample]) -> SegmentationStats:
        """
        Consume the stream and emit writer calls.

        Args:
            samples: Lazy forward-only sequence of samples

        Returns:
            SegmentationStats for the pass
        """
        stats = SegmentationStats()
        writer = self.writer

        previous: Optional[LocationSample] = None
        previous_was_valid = False
        wrote_begin = False
        segment_open = False

        for current in samples:
            stats.samples += 1
            is_valid = current.is_valid
            if not is_valid:
                stats.invalid_samples += 1

            bridgeable = is_valid and previous_was_valid

            if bridgeable and not wrote_begin:
                # First two consecutive valid points
                writer.begin_track(previous)
                wrote_begin = True

            if bridgeable:
                if not segment_open:
                    writer.open_segment()
                    segment_open = True
                    stats.segments += 1
                    # The held-back first point of the run
                    writer.write_point(previous)
                    stats.points_written += 1

                writer.write_point(current)
                stats.points_written += 1
            elif segment_open:
                writer.close_segment()
                segment_open = False

            previous = current
            previous_was_valid = is_valid

        if stats.samples == 0:
            logger.warning("Unable to get any points to write")

        if segment_open:
            writer.close_segment()
        if wrote_begin:
            writer.end_track(previous)

        logger.debug(
            f"Wrote {stats.points_written} of {stats.samples} samples "
            f"in {stats.segments} segments ({stats.invalid_samples} invalid)"
        )
        return stats


def write_locations(samples: Iterable[LocationSample], writer: TrackFormatWriter) -> SegmentationStats:
    """Shortcut for LocationSegmenter(writer).write(samples)."""
    return LocationSegmenter(writer).write(samples)
