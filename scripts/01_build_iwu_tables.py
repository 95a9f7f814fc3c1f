"""
Pipeline: Build the long and wide IWU tables.

Reads every (sw|gwa|gwd)_YYYY.csv under the raw folder with the fixed
GEOID + 20 numeric column schema, pads GEOID to 5 digits, parses the
measure.crop.year columns into rows (long), pivots the measures back out
(wide: year, county_fips, crop, sw, gwa, gwd, sustainable_gw, total) and
joins state info from the FIPS lookup.

Outputs: iwu_full_long.csv, iwu_full_wide.csv
"""

import argparse
import logging
import sys
from pathlib import Path

project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from src.configs.settings import BASE_PATH, OUTPUT_DIR
from src.table_builder.builder import (
    build_fips_lookup,
    build_iwu_long,
    build_iwu_wide,
    join_state,
    write_outputs,
)

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Build long and wide IWU tables with state info")
    parser.add_argument(
        "--out-dir",
        type=str,
        default=OUTPUT_DIR,
        help=f"Output folder relative to base path (default: {OUTPUT_DIR})",
    )
    parser.add_argument(
        "--base-path",
        type=str,
        default=None,
        help="Project root (default: IWU_BASE_PATH or project root)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress table head prints (only show INFO logs)",
    )
    args = parser.parse_args()

    base_path = Path(args.base_path) if args.base_path else BASE_PATH
    lookup = build_fips_lookup(base_path)
    long = build_iwu_long(base_path)
    wide = build_iwu_wide(long)

    tables = {
        "iwu_long": join_state(long, lookup),
        "iwu_wide": join_state(wide, lookup),
    }
    if not args.quiet:
        for name, df in tables.items():
            print(f"\n--- {name} (final) ---\n{df.head()}\n")
    write_outputs(tables, base_path / args.out_dir)


if __name__ == "__main__":
    main()
    sys.exit(0)
