from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional
import logging

import numpy as np

from polysimpl.douglas_peucker import simplify_douglas_peucker, simplify_douglas_peucker_n
from polysimpl.metrics import compute_positional_error_statistics
from polysimpl.polyline import as_coords, point_count
from polysimpl.refinement import simplify_perpendicular_distance_repeated
from polysimpl.sweep import (
    simplify_nth_point,
    simplify_opheim,
    simplify_radial_distance,
    simplify_reumann_witkam,
)

logger = logging.getLogger(__name__)

ALGORITHMS = (
    "nth_point",
    "radial_distance",
    "perpendicular_distance",
    "reumann_witkam",
    "opheim",
    "douglas_peucker",
    "douglas_peucker_n",
)

# parameters each algorithm cannot run without
_REQUIRED = {
    "nth_point": ("n",),
    "radial_distance": ("tol",),
    "perpendicular_distance": ("tol",),
    "reumann_witkam": ("tol",),
    "opheim": ("min_tol", "max_tol"),
    "douglas_peucker": ("tol",),
    "douglas_peucker_n": ("count",),
}


@dataclass(frozen=True)
class SimplifyConfig:
    algorithm: str = "douglas_peucker"
    dim: int = 2
    tol: Optional[float] = None        # radial / perpendicular / DP tolerance
    n: Optional[int] = None            # nth point stride
    repeat: int = 1                    # perpendicular distance passes
    min_tol: Optional[float] = None    # opheim
    max_tol: Optional[float] = None    # opheim
    count: Optional[int] = None        # douglas_peucker_n target point count

    def validate(self) -> None:
        if self.algorithm not in ALGORITHMS:
            raise ValueError(f"algorithm must be one of: {', '.join(ALGORITHMS)}")
        if self.dim < 1:
            raise ValueError("dim must be >= 1")
        missing = [k for k in _REQUIRED[self.algorithm] if getattr(self, k) is None]
        if missing:
            raise ValueError(f"{self.algorithm} requires: {', '.join(missing)}")


def simplify(coords, cfg: SimplifyConfig) -> np.ndarray:
    """
    Runs the algorithm selected by cfg and returns the flat simplified buffer.
    """
    cfg.validate()
    a = cfg.algorithm
    if a == "nth_point":
        return simplify_nth_point(coords, cfg.n, dim=cfg.dim)
    if a == "radial_distance":
        return simplify_radial_distance(coords, cfg.tol, dim=cfg.dim)
    if a == "perpendicular_distance":
        return simplify_perpendicular_distance_repeated(coords, cfg.tol, cfg.repeat, dim=cfg.dim)
    if a == "reumann_witkam":
        return simplify_reumann_witkam(coords, cfg.tol, dim=cfg.dim)
    if a == "opheim":
        return simplify_opheim(coords, cfg.min_tol, cfg.max_tol, dim=cfg.dim)
    if a == "douglas_peucker":
        return simplify_douglas_peucker(coords, cfg.tol, dim=cfg.dim)
    return simplify_douglas_peucker_n(coords, cfg.count, dim=cfg.dim)


def run_simplification(coords, cfg: SimplifyConfig, *, with_errors: bool = True) -> Dict[str, Any]:
    """
    Simplify and collect point counts and (optionally) positional error
    statistics into one run dictionary.
    """
    coords = as_coords(coords)
    out = simplify(coords, cfg)

    n_in = point_count(coords, cfg.dim)
    n_out = point_count(out, cfg.dim)
    metrics: Dict[str, Any] = {
        "input_points": n_in,
        "output_points": n_out,
        "reduction": 1.0 - n_out / n_in if n_in else 0.0,
    }

    if with_errors:
        stats, valid = compute_positional_error_statistics(coords, out, dim=cfg.dim)
        metrics["errors_valid"] = valid
        metrics["error_max"] = stats.max
        metrics["error_mean"] = stats.mean
        metrics["error_std"] = stats.std
        if not valid:
            logger.warning("%s: positional errors could not be computed", cfg.algorithm)

    logger.info("%s: %d -> %d points", cfg.algorithm, n_in, n_out)
    return {
        "input": coords,
        "output": out,
        "metrics": metrics,
        "config": asdict(cfg),
    }
