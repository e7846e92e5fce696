"""
Waypoint emission pass.
"""

import logging
from typing import Iterable

from app.features.tracks.types import WaypointSample
from .writers.base import TrackFormatWriter

logger = logging.getLogger(__name__)


def write_waypoints(waypoints: Iterable[WaypointSample], writer: TrackFormatWriter) -> int:
    """
    Forward every waypoint but the first to the writer, in order.

    The first stored waypoint holds the statistics of the current/last
    segment and is skipped on purpose. No other filtering is applied.

    Returns:
        Number of waypoints written
    """
    written = 0
    iterator = iter(waypoints)

    if next(iterator, None) is None:
        return 0

    for waypoint in iterator:
        writer.write_waypoint(waypoint)
        written += 1

    logger.debug(f"Wrote {written} waypoints")
    return written
