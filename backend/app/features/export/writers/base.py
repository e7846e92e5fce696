"""
Base Track Format Writer

Abstract base class for all document formats.
"""

from abc import ABC, abstractmethod
from typing import Optional, TextIO

from app.config import settings
from app.features.tracks.models import Track
from app.features.tracks.types import LocationSample, WaypointSample


class TrackFormatWriter(ABC):
    """
    Abstract base class for track format writers.

    The exporter drives a writer through this protocol, in order:

        prepare(track, stream)
        write_header()
        [begin_track(anchor)]
            (open_segment()  write_point(sample)...  close_segment())*
        [end_track(anchor)]
        write_waypoint(waypoint)*
        write_footer()
        close()

    begin_track/end_track are called at most once and only when the
    track has at least one segment. Writers hold no state shared with
    other writer instances; create one writer per export.
    """

    def __init__(self, creator: Optional[str] = None):
        self.creator = creator or settings.document_creator
        self.track: Optional[Track] = None
        self.stream: Optional[TextIO] = None

    @property
    @abstractmethod
    def extension(self) -> str:
        """File extension without the dot."""
        pass

    def prepare(self, track: Track, stream: TextIO) -> None:
        """
        Bind the writer to a track and an open text stream.

        Args:
            track: Track being exported
            stream: Writable text stream owned by the exporter
        """
        self.track = track
        self.stream = stream

    def close(self) -> None:
        """Flush and close the output stream."""
        if self.stream is not None:
            self.stream.flush()
            self.stream.close()

    def _write(self, text: str) -> None:
        self.stream.write(text)

    @abstractmethod
    def write_header(self) -> None:
        pass

    @abstractmethod
    def write_footer(self) -> None:
        pass

    @abstractmethod
    def begin_track(self, anchor: LocationSample) -> None:
        """Start the track; anchor is the first point of the first segment."""
        pass

    @abstractmethod
    def end_track(self, anchor: LocationSample) -> None:
        """Finish the track; anchor is the last sample of the stream, possibly invalid."""
        pass

    @abstractmethod
    def open_segment(self) -> None:
        pass

    @abstractmethod
    def close_segment(self) -> None:
        pass

    @abstractmethod
    def write_point(self, sample: LocationSample) -> None:
        """Write one valid point of the open segment."""
        pass

    @abstractmethod
    def write_waypoint(self, waypoint: WaypointSample) -> None:
        pass
