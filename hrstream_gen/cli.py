"""CLI: HRStream synthetic heart-rate activity generator.

Examples:
  python scripts/hrstream_synth_generate.py --out ./synthetic
  python scripts/hrstream_synth_generate.py --out ./synthetic --athlete 20000:7 --count 10
  python scripts/hrstream_synth_generate.py --out ./synthetic --config ./config.json --format both
"""
from __future__ import annotations
import argparse
import logging
from typing import List, Optional, Tuple
from .config import GeneratorConfig
from .pipeline import generate_dataset

def _athlete_arg(value: str) -> Tuple[int, int]:
    try:
        athlete_id, seed = value.split(":")
        return int(athlete_id), int(seed)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected ATHLETE_ID:SEED, got {value!r}")

def parse_args(argv: Optional[List[str]] = None):
    p = argparse.ArgumentParser(description="Generate synthetic activity summaries and HR streams.")
    p.add_argument("--out", default="./synthetic", help="Output directory")
    p.add_argument("--config", default=None, help="Optional config JSON (overrides defaults)")
    p.add_argument(
        "--athlete",
        type=_athlete_arg,
        action="append",
        default=None,
        help="ATHLETE_ID:SEED pair; repeat for several athletes (replaces the default set)",
    )
    p.add_argument("--count", type=int, default=None, help="Activities per athlete")
    p.add_argument("--reference-time", type=str, default=None,
                   help="ISO timestamp anchoring activity start times (default: now)")
    p.add_argument("--interval-intensity", type=float, default=None)
    p.add_argument("--dropout", type=float, default=None)
    p.add_argument("--threshold", type=int, default=None)
    p.add_argument("--format", type=str, default=None, choices=["csv", "parquet", "both", "none"])
    p.add_argument("--no-checks", action="store_true", help="Skip sanity checks")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p.parse_args(argv)

def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg = GeneratorConfig()
    if args.config:
        cfg = GeneratorConfig.from_json(args.config)

    # apply CLI overrides
    for key, val in {
        "athletes": args.athlete,
        "activities_per_athlete": args.count,
        "reference_time": args.reference_time,
        "interval_intensity": args.interval_intensity,
        "dropout_probability": args.dropout,
        "threshold_bpm": args.threshold,
        "out_format": args.format,
    }.items():
        if val is not None:
            setattr(cfg, key, val)

    res = generate_dataset(cfg, out_dir=args.out, run_checks=not args.no_checks)
    print("Done.")
    print(f"metadata.json: {res['metadata_path']}")
    for k, v in res["outputs"].items():
        print(f"{k}: {v}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
