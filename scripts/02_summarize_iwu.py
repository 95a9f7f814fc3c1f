"""
Pipeline: Summaries of the wide IWU table.

Input: iwu_full_wide.csv (from 01_build_iwu_tables.py) and, optionally,
usgs_iwu_wide.csv (from 01_build_usgs_table.py).

- iwu_crop_annual_avg.csv: per crop, mean over years of the national total
- iwu_by_year.csv: national totals per year
- iwu_by_state_year.csv: totals per state and year
- iwu_usgs_county_year.csv: county-year IWU totals next to USGS irrigation
  (only when the USGS table exists)
"""

import argparse
import logging
import sys
from pathlib import Path

import pandas as pd

project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from src.configs.settings import BASE_PATH, OUTPUT_DIR, OUTPUT_FILES
from src.table_builder.builder import join_usgs, write_outputs
from src.table_builder.keys import normalize_fips
from src.table_builder.reshape import KEY_COL
from src.table_builder.summary import crop_annual_average, summarize

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def _load(path: Path) -> pd.DataFrame:
    """Load a processed table with county_fips kept as a 5-digit string."""
    df = pd.read_csv(path, dtype={KEY_COL: str, "state_fips": str})
    df[KEY_COL] = normalize_fips(df[KEY_COL])
    logger.info(f"{path.name}: {len(df)} rows")
    return df


def main():
    parser = argparse.ArgumentParser(description="Summarize the wide IWU table by crop, year and state")
    parser.add_argument(
        "--out-dir",
        type=str,
        default=OUTPUT_DIR,
        help=f"Input/output folder relative to base path (default: {OUTPUT_DIR})",
    )
    parser.add_argument(
        "--base-path",
        type=str,
        default=None,
        help="Project root (default: IWU_BASE_PATH or project root)",
    )
    parser.add_argument(
        "--usgs-category",
        type=str,
        default="Irrigation",
        help="USGS use category joined to county-year IWU totals",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress table head prints (only show INFO logs)",
    )
    args = parser.parse_args()

    base_path = Path(args.base_path) if args.base_path else BASE_PATH
    out_dir = base_path / args.out_dir
    wide_path = out_dir / OUTPUT_FILES["iwu_wide"]
    if not wide_path.exists():
        print(f"Error: not found {wide_path}. Run 01_build_iwu_tables.py first.", file=sys.stderr)
        sys.exit(1)

    wide = _load(wide_path)
    tables = {
        "crop_annual_avg": crop_annual_average(wide),
        "by_year": summarize(wide, ["year"]),
        "by_state_year": summarize(wide, ["state_name", "year"]),
    }
    usgs_path = out_dir / OUTPUT_FILES["usgs_wide"]
    if usgs_path.exists():
        tables["iwu_usgs_county"] = join_usgs(wide, _load(usgs_path), category=args.usgs_category)
    else:
        logger.warning(f"{usgs_path.name} not found; skipping USGS join")

    if not args.quiet:
        print(f"\n--- crop_annual_avg ---\n{tables['crop_annual_avg']}\n")
    write_outputs(tables, out_dir)


if __name__ == "__main__":
    main()
    sys.exit(0)
