#!/usr/bin/env python3
"""CLI wrapper: see hrstream_gen.cli for options.

Examples:
  python scripts/hrstream_synth_generate.py --out ./synthetic
  python scripts/hrstream_synth_generate.py --out ./synthetic --athlete 10000:40 --count 5
"""
from hrstream_gen.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
