from __future__ import annotations
import argparse
import os

import numpy as np
import matplotlib.pyplot as plt

from polysimpl.pipelines import SimplifyConfig, run_simplification


def synthetic_curve(N: int = 400, noise: float = 0.05, seed: int = 0) -> np.ndarray:
    """
    Noisy damped sine, (N,2).
    """
    rng = np.random.default_rng(seed)
    x = np.linspace(0.0, 20.0, N)
    y = 3.0 * np.sin(x) * np.exp(-0.08 * x)
    y = y + noise * rng.standard_normal(N)
    return np.stack([x, y], axis=1)


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--N", type=int, default=400)
    ap.add_argument("--noise", type=float, default=0.05)
    ap.add_argument("--seed", type=int, default=0)
    ap.add_argument("--tol", type=float, default=0.15)
    ap.add_argument("--count", type=int, default=40)
    ap.add_argument("--out", type=str, default=None)  # e.g. runs/compare.png
    args = ap.parse_args()

    pts = synthetic_curve(args.N, noise=args.noise, seed=args.seed)
    configs = [
        SimplifyConfig("nth_point", n=10),
        SimplifyConfig("radial_distance", tol=args.tol),
        SimplifyConfig("perpendicular_distance", tol=args.tol, repeat=5),
        SimplifyConfig("reumann_witkam", tol=args.tol),
        SimplifyConfig("opheim", min_tol=args.tol, max_tol=10 * args.tol),
        SimplifyConfig("douglas_peucker", tol=args.tol),
        SimplifyConfig("douglas_peucker_n", count=args.count),
    ]

    runs = [run_simplification(pts, cfg) for cfg in configs]

    print(f"{'algorithm':<24}{'points':>8}{'max err':>12}{'mean err':>12}")
    for cfg, run in zip(configs, runs):
        m = run["metrics"]
        print(f"{cfg.algorithm:<24}{m['output_points']:>8}{m['error_max']:>12.4f}{m['error_mean']:>12.4f}")

    if args.out is None:
        return

    os.makedirs(os.path.dirname(args.out) or ".", exist_ok=True)
    fig, axes = plt.subplots(len(runs), 1, figsize=(10, 2.2 * len(runs)), sharex=True)
    for ax, cfg, run in zip(axes, configs, runs):
        simp = run["output"].reshape(-1, 2)
        ax.plot(pts[:, 0], pts[:, 1], linewidth=1, alpha=0.35, label="input")
        ax.plot(simp[:, 0], simp[:, 1], marker="o", markersize=3, linewidth=1.5, label=cfg.algorithm)
        ax.legend(loc="upper right", fontsize=8)
    fig.tight_layout()
    fig.savefig(args.out, dpi=150)
    print("saved:", args.out)


if __name__ == "__main__":
    main()
