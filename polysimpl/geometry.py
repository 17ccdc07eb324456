from __future__ import annotations
import numpy as np

# Points are 1-D arrays of length D. Every distance primitive also accepts a
# stack of test points p with shape (k, D) and then returns k distances.


def equal(p1: np.ndarray, p2: np.ndarray) -> bool:
    """
    True when both points have the exact same coordinates.
    """
    return bool(np.array_equal(p1, p2))


def make_vector(p1: np.ndarray, p2: np.ndarray) -> np.ndarray:
    """Vector p1 --> p2."""
    return np.asarray(p2) - np.asarray(p1)


def dot(v1: np.ndarray, v2: np.ndarray):
    return np.sum(np.asarray(v1) * np.asarray(v2), axis=-1)


def interpolate(p1: np.ndarray, p2: np.ndarray, fraction) -> np.ndarray:
    """
    p1 + fraction * (p2 - p1), cast back to the coordinate type of p1.

    fraction: scalar or (k,) for k interpolated points.
    Integer coordinates are truncated toward zero, the same way the
    projection would be stored in an integer buffer.
    """
    p1 = np.asarray(p1)
    p2 = np.asarray(p2)
    fraction = np.asarray(fraction, dtype=float)
    proj = p1 + fraction[..., None] * (p2 - p1)
    if np.issubdtype(p1.dtype, np.integer):
        with np.errstate(invalid="ignore"):
            proj = proj.astype(p1.dtype)
    return proj


def point_distance2(p1: np.ndarray, p2: np.ndarray):
    """
    Squared distance between two points.
    """
    d = np.asarray(p1) - np.asarray(p2)
    return dot(d, d)


def _fraction(cw, cv):
    # float even for integer coordinates; cv == 0 is a caller error
    with np.errstate(divide="ignore", invalid="ignore"):
        return np.asarray(cw, dtype=float) / np.asarray(cv, dtype=float)


def line_distance2(l1: np.ndarray, l2: np.ndarray, p: np.ndarray):
    """
    Squared distance between the infinite line (l1, l2) and point(s) p.
    l1 must differ from l2.
    """
    v = make_vector(l1, l2)     # l1 --> l2
    w = make_vector(l1, p)      # l1 --> p

    cv = dot(v, v)
    cw = dot(w, v)

    proj = interpolate(l1, l2, _fraction(cw, cv))
    return point_distance2(p, proj)


def segment_distance2(s1: np.ndarray, s2: np.ndarray, p: np.ndarray):
    """
    Squared distance between the segment (s1, s2) and point(s) p.

    Projections falling before s1 measure to s1, projections beyond s2
    measure to s2.
    """
    v = make_vector(s1, s2)
    w = make_vector(s1, p)

    cw = dot(w, v)
    cv = dot(v, v)

    proj = interpolate(s1, s2, _fraction(cw, cv))
    d2 = np.where(
        cw <= 0,
        point_distance2(p, s1),
        np.where(cv <= cw, point_distance2(p, s2), point_distance2(p, proj)),
    )
    return d2[()]


def ray_distance2(r1: np.ndarray, r2: np.ndarray, p: np.ndarray):
    """
    Squared distance between the ray starting at r1 through r2 and point(s) p.
    Only the r1 side is clamped.
    """
    v = make_vector(r1, r2)
    w = make_vector(r1, p)

    cv = dot(v, v)
    cw = dot(w, v)

    proj = interpolate(r1, r2, _fraction(cw, cv))
    d2 = np.where(cw <= 0, point_distance2(p, r1), point_distance2(p, proj))
    return d2[()]
