from __future__ import annotations
import logging

import numpy as np

from polysimpl.polyline import as_coords, copy_through
from polysimpl.sweep import simplify_perpendicular_distance

logger = logging.getLogger(__name__)


def simplify_perpendicular_distance_repeated(coords, tol, repeat: int, dim: int = 2) -> np.ndarray:
    """
    Repeatedly applies the perpendicular distance routine.

    Stops after `repeat` passes, or earlier as soon as a pass does not remove
    any point. repeat == 1 is a single pass; repeat < 1 returns the input
    unchanged. Input validation (point count, tolerance) is left to the
    single pass, which copies malformed input through.
    """
    coords = as_coords(coords)
    if repeat == 1:
        return simplify_perpendicular_distance(coords, tol, dim=dim)
    if repeat < 1:
        return copy_through(coords, "perpendicular_distance", f"repeat must be >= 1, got {repeat}")

    current = simplify_perpendicular_distance(coords, tol, dim=dim)
    logger.debug("perpendicular_distance pass 1: %d -> %d coords", coords.shape[0], current.shape[0])
    if current.shape[0] == coords.shape[0]:
        return current

    for k in range(2, int(repeat) + 1):
        nxt = simplify_perpendicular_distance(current, tol, dim=dim)
        logger.debug("perpendicular_distance pass %d: %d -> %d coords", k, current.shape[0], nxt.shape[0])
        if nxt.shape[0] == current.shape[0]:
            break
        current = nxt

    return current
