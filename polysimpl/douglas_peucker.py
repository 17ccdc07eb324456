from __future__ import annotations
import heapq
import itertools
import logging
from dataclasses import dataclass
from typing import Any, List, Tuple

import numpy as np

from polysimpl.geometry import segment_distance2
from polysimpl.polyline import (
    as_coords,
    as_points,
    check_polyline,
    copy_through,
    keys_to_coords,
    point_count,
)
from polysimpl.sweep import simplify_radial_distance

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubPoly:
    first: int    # point index of the first point
    last: int     # point index of the last point


@dataclass(frozen=True)
class KeyInfo:
    index: int    # point index of the key, == last when the range has no interior
    dist2: Any    # squared distance of the key to the segment (first, last)


def find_key(points: np.ndarray, first: int, last: int) -> KeyInfo:
    """
    Interior point of [first, last] furthest from the segment (first, last).
    The earliest point wins when several share the maximum distance.
    """
    if last - first < 2:
        return KeyInfo(index=last, dist2=0)

    d2 = segment_distance2(points[first], points[last], points[first + 1:last])
    k = int(np.argmax(d2))
    return KeyInfo(index=first + 1 + k, dist2=d2[k])


def approximate(points: np.ndarray, tol) -> np.ndarray:
    """
    Tolerance bounded Douglas-Peucker key selection.

    points: (N,D), N >= 2
    Returns a boolean (N,) mask of the keys.

    Sub-polylines wait on a LIFO stack instead of the call stack, so the
    depth stays bounded by the number of keys.
    """
    N = points.shape[0]
    tol2 = tol * tol

    keys = np.zeros(N, dtype=bool)
    keys[0] = True
    keys[N - 1] = True

    stack: List[SubPoly] = [SubPoly(0, N - 1)]
    while stack:
        sub = stack.pop()
        key = find_key(points, sub.first, sub.last)
        if key.index != sub.last and tol2 < key.dist2:
            keys[key.index] = True
            # left half on top so it is resolved first
            stack.append(SubPoly(key.index, sub.last))
            stack.append(SubPoly(sub.first, key.index))

    return keys


def approximate_n(points: np.ndarray, count: int) -> np.ndarray:
    """
    Point count bounded Douglas-Peucker key selection.

    Instead of resolving one sub-polyline at a time, the sub-polyline with the
    globally largest pending deviation is split next, until `count` keys
    are selected or nothing is left to split.

    points: (N,D) with N > count >= 2
    Returns a boolean (N,) mask of the keys.
    """
    N = points.shape[0]

    keys = np.zeros(N, dtype=bool)
    keys[0] = True
    keys[N - 1] = True
    key_count = 2
    if count == 2:
        return keys

    # max-heap on dist2, insertion order breaks ties
    heap: List[Tuple[Any, int, SubPoly, KeyInfo]] = []
    order = itertools.count()

    def push(sub: SubPoly) -> None:
        key = find_key(points, sub.first, sub.last)
        heapq.heappush(heap, (-key.dist2, next(order), sub, key))

    push(SubPoly(0, N - 1))
    while heap:
        _, _, sub, key = heapq.heappop(heap)
        if key.index == sub.last:
            continue

        keys[key.index] = True
        key_count += 1
        if key_count == count:
            break

        push(SubPoly(sub.first, key.index))
        push(SubPoly(key.index, sub.last))

    return keys


def simplify_douglas_peucker(coords, tol, dim: int = 2) -> np.ndarray:
    """
    Douglas-Peucker approximation with the radial distance routine as an
    O(n) preprocessing step. After that it is O(n m) worst case and
    O(n log m) on average, m being the point count left by the
    preprocessing.

    Requires at least 2 points and tol != 0.
    """
    coords = as_coords(coords)
    reason = check_polyline(coords, dim, min_points=2)
    if reason is None and tol == 0:
        reason = "tolerance is zero"
    if reason is not None:
        return copy_through(coords, "douglas_peucker", reason)

    reduced = simplify_radial_distance(coords, tol, dim=dim)
    pts = as_points(reduced, dim)
    keys = approximate(pts, tol)

    logger.debug(
        "douglas_peucker: %d points, %d after radial distance, %d keys",
        point_count(coords, dim), pts.shape[0], int(keys.sum()),
    )
    return keys_to_coords(pts, keys)


def simplify_douglas_peucker_n(coords, count: int, dim: int = 2) -> np.ndarray:
    """
    Douglas-Peucker variant producing a simplification of `count` points.
    O(n^2) worst case, O(n log n) on average; no radial distance
    preprocessing.

    Requires count >= 2 and more than `count` input points.
    """
    coords = as_coords(coords)
    reason = check_polyline(coords, dim, min_points=2)
    if reason is None and count < 2:
        reason = f"count must be >= 2, got {count}"
    if reason is None and point_count(coords, dim) <= count:
        reason = f"{point_count(coords, dim)} points is not more than count={count}"
    if reason is not None:
        return copy_through(coords, "douglas_peucker_n", reason)

    pts = as_points(coords.copy(), dim)
    keys = approximate_n(pts, int(count))

    logger.debug("douglas_peucker_n: %d points -> %d keys", pts.shape[0], int(keys.sum()))
    return keys_to_coords(pts, keys)
