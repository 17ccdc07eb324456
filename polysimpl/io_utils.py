from __future__ import annotations
from typing import Any, Tuple

import numpy as np

from polysimpl.polyline import as_coords


def save_polyline_npz(path: str, coords, dim: int, **extra: Any) -> None:
    """
    Store a flat coordinate buffer and its dimension. Extra arrays (for
    instance the simplified result) are stored next to them.
    """
    coords = as_coords(coords)
    if dim < 1 or coords.shape[0] % dim:
        raise ValueError("coords length must be a multiple of dim")
    np.savez_compressed(path, coords=coords, dim=np.array([dim], dtype=np.int32), **extra)


def load_polyline_npz(path: str) -> Tuple[np.ndarray, int]:
    """
    Load (coords, dim) saved by save_polyline_npz(...).
    """
    data = np.load(path, allow_pickle=False)
    for k in ("coords", "dim"):
        if k not in data:
            raise KeyError(f"Missing key '{k}' in npz: {path}")

    coords = np.asarray(data["coords"]).reshape(-1)
    dim = int(np.asarray(data["dim"]).reshape(-1)[0])
    if dim < 1 or coords.shape[0] % dim:
        raise ValueError(f"coords length {coords.shape[0]} is not a multiple of dim={dim}")
    return coords, dim


def load_polyline_csv(path: str) -> Tuple[np.ndarray, int]:
    """
    One point per row, comma separated. The column count is the dimension.
    """
    pts = np.loadtxt(path, delimiter=",", ndmin=2, dtype=float)
    if pts.shape[0] == 0:
        raise ValueError(f"No points in {path}")
    return pts.reshape(-1), int(pts.shape[1])


def save_polyline_csv(path: str, coords, dim: int) -> None:
    coords = as_coords(coords)
    if dim < 1 or coords.shape[0] % dim:
        raise ValueError("coords length must be a multiple of dim")
    np.savetxt(path, coords.reshape(-1, dim), delimiter=",", fmt="%.17g")
