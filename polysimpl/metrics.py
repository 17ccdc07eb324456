from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from polysimpl.geometry import equal, segment_distance2
from polysimpl.polyline import as_coords, as_points, check_polyline, point_count


@dataclass(frozen=True)
class Statistics:
    max: float = 0.0
    sum: float = 0.0
    mean: float = 0.0
    std: float = 0.0    # population standard deviation


@dataclass(frozen=True)
class PositionalErrors:
    errors: np.ndarray    # (N,) squared distance of each original point to the simplification
    valid: bool


def compute_statistics(values) -> Statistics:
    """
    max, sum, mean and population std of a sequence. All zero when empty.
    """
    v = np.asarray(values, dtype=float).reshape(-1)
    if v.size == 0:
        return Statistics()
    s = float(v.sum())
    mean = s / v.size
    std = float(np.sqrt(np.mean((v - mean) ** 2)))
    return Statistics(max=float(v.max()), sum=s, mean=mean, std=std)


def compute_positional_errors2(original, simplified, dim: int = 2) -> PositionalErrors:
    """
    Squared distance of every original point to the simplification.

    Both polylines are walked in lock-step: each original point is scored
    against the simplified segment whose end point it has not reached yet.
    The simplified points must appear verbatim and in order in the original,
    ending on its last point, otherwise the result is flagged invalid and the
    errors are partial.
    """
    orig = as_coords(original)
    simp = as_coords(simplified)

    invalid = PositionalErrors(errors=np.empty(0, dtype=float), valid=False)
    if check_polyline(orig, dim, min_points=2) or check_polyline(simp, dim, min_points=2):
        return invalid
    if point_count(orig, dim) < point_count(simp, dim):
        return invalid

    op = as_points(orig, dim)
    sp = as_points(simp, dim)
    if not equal(op[0], sp[0]):
        return invalid

    No = op.shape[0]
    errors = []
    i = 0
    for s in range(1, sp.shape[0]):
        a, b = sp[s - 1], sp[s]
        # points matching a segment start score 0 against that segment
        while i < No and not equal(op[i], b):
            errors.append(segment_distance2(a, b, op[i]))
            i += 1

    # the last simplified point matched an original point
    if i < No:
        errors.append(0)
    # trailing repeats of the last point
    while i + 1 < No and equal(op[i + 1], sp[-1]):
        errors.append(0)
        i += 1
    # ... and that point is the last original one
    valid = i == No - 1

    return PositionalErrors(errors=np.asarray(errors, dtype=float), valid=valid)


def compute_positional_error_statistics(original, simplified, dim: int = 2) -> Tuple[Statistics, bool]:
    """
    Statistics over the (non squared) positional errors.
    Returns (stats, valid); stats are meaningless when valid is False.
    """
    res = compute_positional_errors2(original, simplified, dim=dim)
    return compute_statistics(np.sqrt(res.errors)), res.valid
