"""
Elevation processing utilities.

This is the SINGLE SOURCE OF TRUTH for elevation calculations.
"""
from typing import List, Optional, Tuple


def calculate_elevation_changes(
    elevations: List[Optional[float]]
) -> Tuple[float, float]:
    """
    Calculate total elevation gain and loss.

    Missing elevations are skipped; the difference is taken between
    the nearest known values.

    Args:
        elevations: List of elevation values (None where unknown)

    Returns:
        Tuple of (gain_m, loss_m)
    """
    gain = 0.0
    loss = 0.0
    last: Optional[float] = None

    for elevation in elevations:
        if elevation is None:
            continue
        if last is not None:
            diff = elevation - last
            if diff > 0:
                gain += diff
            else:
                loss += abs(diff)
        last = elevation

    return gain, loss
