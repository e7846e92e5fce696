"""
Track export service.

Main entry point for writing a stored track to a document. Format
neutral: it opens the output, streams the track out of the store and
leaves the formatting to a TrackFormatWriter.
"""

import asyncio
import logging
from pathlib import Path
from typing import Callable, Optional

from app.features.tracks.models import Track
from app.features.tracks.repository import TrackReadError
from .errors import ExportError
from .segmenter import LocationSegmenter
from .storage import FileSinkFactory, OutputSink
from .types import ExportErrorCode, ExportOutcome, ExportState
from .waypoints import write_waypoints
from .writers.base import TrackFormatWriter

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[ExportOutcome], None]


class TrackExporter:
    """
    Exports one track with one writer.

    Lifecycle: IDLE -> OPENING -> WRITING -> SUCCEEDED | FAILED.
    One exporter runs one attempt; there are no retries.

    Usage:
        exporter = TrackExporter(track, get_writer("gpx"), source=TrackRepository(db))
        outcome = exporter.export()
        if outcome.success:
            print(exporter.output_path)

    The source provides iter_locations(track_id) and
    iter_waypoints(track_id), both context managers yielding lazy
    iterators (TrackRepository implements them).
    """

    def __init__(
        self,
        track: Optional[Track],
        writer: TrackFormatWriter,
        source,
        sink_factory: Optional[FileSinkFactory] = None,
        directory: Optional[Path] = None,
        on_completion: Optional[CompletionCallback] = None,
    ):
        """
        Args:
            track: Track to export; None reports TRACK_NOT_FOUND
            writer: Fresh writer for the target format
            source: Location/waypoint source for the track
            sink_factory: Opens the output file (default: FileSinkFactory())
            directory: Custom target directory
            on_completion: Called once with the outcome after the export ends
        """
        self.track = track
        self.writer = writer
        self.source = source
        self.sink_factory = sink_factory or FileSinkFactory()
        self.directory = directory
        self.on_completion = on_completion

        self._state = ExportState.IDLE
        self._outcome: Optional[ExportOutcome] = None
        self._output_path: Optional[Path] = None
        self._notified = False

    @property
    def state(self) -> ExportState:
        return self._state

    @property
    def outcome(self) -> Optional[ExportOutcome]:
        """Outcome of the attempt, None until it finished."""
        return self._outcome

    @property
    def output_path(self) -> Optional[Path]:
        """Path of the written document; None unless the export succeeded."""
        if self._outcome is None or not self._outcome.success:
            return None
        return self._output_path

    def export(self) -> ExportOutcome:
        """
        Write the track. This is blocking.

        Returns:
            ExportOutcome of the attempt
        """
        try:
            return self._run()
        finally:
            self._finished()

    async def export_async(self) -> ExportOutcome:
        """
        Write the track on a worker thread. This is non-blocking.

        The completion callback runs on the awaiting event loop.
        """
        try:
            return await asyncio.to_thread(self._run)
        finally:
            self._finished()

    # =========================================================================
    # Helpers
    # =========================================================================

    def _run(self) -> ExportOutcome:
        if self._state != ExportState.IDLE:
            raise RuntimeError(f"Export already ran (state: {self._state.value})")

        if self.track is None:
            logger.warning("Export requested for a track that does not exist")
            return self._close(ExportErrorCode.TRACK_NOT_FOUND)

        self._state = ExportState.OPENING
        try:
            sink = self.sink_factory.open(self.track, self.writer, self.directory)
        except ExportError as e:
            logger.error(f"Could not open output for track {self.track.id}: {e}")
            return self._close(e.code)

        self._state = ExportState.WRITING
        try:
            with sink:
                self.writer.prepare(self.track, sink.stream)
                self._write_document()
        except (OSError, TrackReadError, ExportError) as e:
            # Partial output stays where it is
            logger.error(f"Failed writing track {self.track.id} to {sink.path}: {e}")
            return self._close(ExportErrorCode.WRITE_FAILED)
        except Exception as e:
            logger.error(
                f"Unexpected error writing track {self.track.id} to {sink.path}: "
                f"{type(e).__name__}: {e}"
            )
            return self._close(ExportErrorCode.WRITE_FAILED)

        self._output_path = sink.path
        return self._close(ExportErrorCode.SUCCESS)

    def _write_document(self) -> None:
        """Does the actual work of writing the track to the open sink."""
        logger.debug(f"Started writing track {self.track.id}")
        self.writer.write_header()

        # Locations go before waypoints, as stored
        with self.source.iter_locations(self.track.id) as samples:
            LocationSegmenter(self.writer).write(samples)
        with self.source.iter_waypoints(self.track.id) as waypoints:
            write_waypoints(waypoints, self.writer)

        self.writer.write_footer()
        self.writer.close()
        logger.debug(f"Done writing track {self.track.id}")

    def _close(self, code: ExportErrorCode) -> ExportOutcome:
        success = code == ExportErrorCode.SUCCESS
        self._state = ExportState.SUCCEEDED if success else ExportState.FAILED
        self._outcome = ExportOutcome(success=success, error_code=code)
        return self._outcome

    def _finished(self) -> None:
        """Notify the observer, once, after the attempt closed."""
        if self._notified or self._outcome is None or self.on_completion is None:
            return
        self._notified = True
        self.on_completion(self._outcome)
