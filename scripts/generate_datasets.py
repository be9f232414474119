#!/usr/bin/env python3
from __future__ import annotations

import argparse

from sccdag.generator import DEFAULT_SEED, generate_all_datasets


def main() -> None:
    ap = argparse.ArgumentParser(description="Generate the standard random graph datasets.")
    ap.add_argument("out_dir", nargs="?", default="data", help="Output directory.")
    ap.add_argument("--seed", type=int, default=DEFAULT_SEED, help="RNG seed.")
    args = ap.parse_args()

    print(f"Generating datasets in: {args.out_dir}")
    for path in generate_all_datasets(args.out_dir, seed=args.seed):
        print(" -", path)
    print("Datasets generated successfully!")


if __name__ == "__main__":
    main()
