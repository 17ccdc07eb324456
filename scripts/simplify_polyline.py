from __future__ import annotations
import argparse
import logging
import os

from polysimpl.io_utils import load_polyline_csv, load_polyline_npz, save_polyline_csv, save_polyline_npz
from polysimpl.pipelines import ALGORITHMS, SimplifyConfig, run_simplification


def main():
    ap = argparse.ArgumentParser(description="Simplify a polyline stored as .csv (one point per row) or .npz")
    ap.add_argument("--in", dest="inp", type=str, required=True)
    ap.add_argument("--out", type=str, default=None)
    ap.add_argument("--algorithm", type=str, default="douglas_peucker", choices=ALGORITHMS)

    # algorithm params
    ap.add_argument("--tol", type=float, default=None)
    ap.add_argument("--n", type=int, default=None)
    ap.add_argument("--repeat", type=int, default=1)
    ap.add_argument("--min_tol", type=float, default=None)
    ap.add_argument("--max_tol", type=float, default=None)
    ap.add_argument("--count", type=int, default=None)

    ap.add_argument("--log_level", type=str, default="WARNING")
    args = ap.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))

    if not os.path.exists(args.inp):
        raise SystemExit(f"Could not read polyline: {args.inp}")
    if args.inp.endswith(".npz"):
        coords, dim = load_polyline_npz(args.inp)
    else:
        coords, dim = load_polyline_csv(args.inp)

    cfg = SimplifyConfig(
        algorithm=args.algorithm,
        dim=dim,
        tol=args.tol,
        n=args.n,
        repeat=args.repeat,
        min_tol=args.min_tol,
        max_tol=args.max_tol,
        count=args.count,
    )
    try:
        run = run_simplification(coords, cfg)
    except ValueError as e:
        raise SystemExit(str(e))

    m = run["metrics"]
    print(f"{cfg.algorithm}: {m['input_points']} -> {m['output_points']} points  (reduction {100.0 * m['reduction']:.1f}%)")
    if m["errors_valid"]:
        print(f"positional error: max={m['error_max']:.6g}  mean={m['error_mean']:.6g}  std={m['error_std']:.6g}")
    else:
        print("positional error: n/a")

    if args.out:
        os.makedirs(os.path.dirname(args.out) or ".", exist_ok=True)
        if args.out.endswith(".npz"):
            save_polyline_npz(args.out, run["output"], dim)
        else:
            save_polyline_csv(args.out, run["output"], dim)
        print("saved:", args.out)


if __name__ == "__main__":
    main()
