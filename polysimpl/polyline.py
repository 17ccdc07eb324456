from __future__ import annotations
import logging
from typing import Optional

import numpy as np

logger = logging.getLogger(__name__)


def as_coords(coords) -> np.ndarray:
    """
    Flat coordinate buffer x0, y0, x1, y1, ... as a 1-D array.
    An (n, D) array is flattened row by row. Unsigned integer
    coordinates are not supported (vector differences wrap around).
    """
    return np.asarray(coords).reshape(-1)


def point_count(coords: np.ndarray, dim: int) -> int:
    if dim < 1:
        return 0
    return int(coords.shape[0]) // int(dim)


def as_points(coords: np.ndarray, dim: int) -> np.ndarray:
    """
    (n, D) view of a flat buffer whose length is a multiple of dim.
    """
    return coords.reshape(-1, int(dim))


def check_polyline(coords: np.ndarray, dim: int, min_points: int) -> Optional[str]:
    """
    Returns the reason the buffer is not a usable polyline, or None.
    """
    if dim < 1:
        return f"dimension must be >= 1, got {dim}"
    if coords.shape[0] % dim:
        return f"{coords.shape[0]} coordinates is not a multiple of dim={dim}"
    n = point_count(coords, dim)
    if n < min_points:
        return f"{n} points, need at least {min_points}"
    return None


def copy_through(coords: np.ndarray, algorithm: str, reason: str) -> np.ndarray:
    logger.debug("%s: copying input unchanged (%s)", algorithm, reason)
    return coords.copy()


def keys_to_coords(points: np.ndarray, keys: np.ndarray) -> np.ndarray:
    """
    Flat buffer holding the points flagged in the boolean mask keys, in order.
    """
    return points[keys].reshape(-1)
