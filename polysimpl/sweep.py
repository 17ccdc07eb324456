from __future__ import annotations
from typing import List

import numpy as np

from polysimpl.geometry import point_distance2, line_distance2, segment_distance2, ray_distance2
from polysimpl.polyline import as_coords, as_points, check_polyline, copy_through

# Single forward sweeps. Every routine returns a new flat coordinate buffer;
# malformed input (wrong coordinate count, too few points, zero tolerance)
# comes back unchanged.


def _emit(points: np.ndarray, keep: List[int]) -> np.ndarray:
    return points[np.asarray(keep, dtype=np.intp)].reshape(-1)


def simplify_nth_point(coords, n: int, dim: int = 2) -> np.ndarray:
    """
    Nth point routine: keeps the first point, every n-th point after it and
    the last point. With 8 points and n=3 this always yields points 0, 3, 6, 7.

    Requires at least 2 points and n >= 2.
    """
    coords = as_coords(coords)
    reason = check_polyline(coords, dim, min_points=2)
    if reason is None and n < 2:
        reason = f"n must be >= 2, got {n}"
    if reason is not None:
        return copy_through(coords, "nth_point", reason)

    pts = as_points(coords, dim)
    N = pts.shape[0]

    keep = list(range(0, N, int(n)))
    if keep[-1] != N - 1:
        keep.append(N - 1)
    return _emit(pts, keep)


def simplify_radial_distance(coords, tol, dim: int = 2) -> np.ndarray:
    """
    Radial distance routine: successive points closer than tol to the
    current key are collapsed into that key.

    Requires at least 2 points and tol != 0.
    """
    coords = as_coords(coords)
    tol2 = tol * tol
    reason = check_polyline(coords, dim, min_points=2)
    if reason is None and tol2 == 0:
        reason = "tolerance is zero"
    if reason is not None:
        return copy_through(coords, "radial_distance", reason)

    pts = as_points(coords, dim)
    N = pts.shape[0]

    keep = [0]
    current = 0
    # first and last are always keys, only the interior is tested
    for i in range(1, N - 1):
        if point_distance2(pts[current], pts[i]) < tol2:
            continue
        current = i
        keep.append(i)
    keep.append(N - 1)
    return _emit(pts, keep)


def simplify_perpendicular_distance(coords, tol, dim: int = 2) -> np.ndarray:
    """
    Single pass of the perpendicular distance routine.

    Each point p1 is tested against the segment (p0, p2) formed by its
    neighbours. When it lies within tol, p1 is dropped and p2 becomes the new
    p0, so at most every other point is removed per pass. See
    polysimpl.refinement for the repeated version.

    Requires at least 3 points and tol != 0.
    """
    coords = as_coords(coords)
    tol2 = tol * tol
    reason = check_polyline(coords, dim, min_points=3)
    if reason is None and tol2 == 0:
        reason = "tolerance is zero"
    if reason is not None:
        return copy_through(coords, "perpendicular_distance", reason)

    pts = as_points(coords, dim)
    N = pts.shape[0]

    i0, i1, i2 = 0, 1, 2
    keep = [0]
    while i2 < N:
        if segment_distance2(pts[i0], pts[i2], pts[i1]) < tol2:
            keep.append(i2)
            # move up by two points
            i0 = i2
            i1 += 2
            if i1 == N:
                break
            i2 += 2
        else:
            keep.append(i1)
            i0, i1 = i1, i2
            i2 += 1

    if i1 != N:
        keep.append(i1)
    return _emit(pts, keep)


def simplify_reumann_witkam(coords, tol, dim: int = 2) -> np.ndarray:
    """
    Reumann-Witkam routine.

    A line is defined through the current key and its successor. Points are
    absorbed while their perpendicular distance to that line stays below
    tol; the first point that breaks out makes its predecessor a key, and
    the line is redefined through that key and the breaking point.

    Requires at least 3 points and tol != 0.
    """
    coords = as_coords(coords)
    tol2 = tol * tol
    reason = check_polyline(coords, dim, min_points=3)
    if reason is None and tol2 == 0:
        reason = "tolerance is zero"
    if reason is not None:
        return copy_through(coords, "reumann_witkam", reason)

    pts = as_points(coords, dim)
    N = pts.shape[0]

    # line L(k0, k1)
    k0, k1 = 0, 1
    pi = pj = 1
    keep = [0]
    for j in range(2, N):
        pi, pj = pj, j
        if line_distance2(pts[k0], pts[k1], pts[pj]) < tol2:
            continue
        keep.append(pi)
        k0, k1 = pi, pj

    keep.append(pj)
    return _emit(pts, keep)


def simplify_opheim(coords, min_tol, max_tol, dim: int = 2) -> np.ndarray:
    """
    Opheim routine, a constrained Reumann-Witkam.

    Points within min_tol of the current key are skipped. The last of them
    (or the key's successor) defines a ray R from the key. Following points
    are absorbed while they stay within max_tol of the key and within
    min_tol of R; otherwise the previous point becomes the next key.

    Requires at least 2 points, min_tol != 0 and max_tol != 0.
    """
    coords = as_coords(coords)
    min_tol2 = min_tol * min_tol
    max_tol2 = max_tol * max_tol
    reason = check_polyline(coords, dim, min_points=2)
    if reason is None and (min_tol2 == 0 or max_tol2 == 0):
        reason = "tolerance is zero"
    if reason is not None:
        return copy_through(coords, "opheim", reason)

    pts = as_points(coords, dim)
    N = pts.shape[0]

    # ray R(r0, r1)
    r0 = r1 = 0
    ray_defined = False
    pi, pj = 0, 1
    keep = [0]
    for j in range(2, N):
        pi, pj = pj, j
        if not ray_defined:
            if point_distance2(pts[r0], pts[pj]) < min_tol2:
                continue
            r1 = pi
            ray_defined = True

        if (point_distance2(pts[r0], pts[pj]) < max_tol2
                and ray_distance2(pts[r0], pts[r1], pts[pj]) < min_tol2):
            continue

        keep.append(pi)
        r0 = pi
        ray_defined = False

    keep.append(pj)
    return _emit(pts, keep)
