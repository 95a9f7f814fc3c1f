"""
Pipeline: Build the county -> state lookup from SOURCES_REFERENCE.

Reads the Census all-geocodes table, keeps county (050) rows, builds the
5-digit county_fips (state 2 + county 3) and attaches the state name from the
state (040) rows. Output: county_fips, state_fips, state, state_name, county_name.
"""

import argparse
import logging
import sys
from pathlib import Path

project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from src.configs.settings import BASE_PATH, OUTPUT_DIR, OUTPUT_FILES
from src.table_builder.builder import build_fips_lookup

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Build county FIPS -> state lookup from SOURCES_REFERENCE")
    parser.add_argument(
        "--output",
        type=str,
        default=f"{OUTPUT_DIR}/{OUTPUT_FILES['fips_state']}",
        help="Output CSV path (relative to base path)",
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
    output_path = base_path / args.output
    output_path.parent.mkdir(parents=True, exist_ok=True)

    print("Building FIPS state table from SOURCES_REFERENCE...")
    df = build_fips_lookup(base_path)
    if not args.quiet:
        print(f"\n--- fips_state_table (final) ---\n{df.head()}\n")
    df.to_csv(output_path, index=False)
    print(f"Saved {len(df)} rows to {output_path}")


if __name__ == "__main__":
    main()
    sys.exit(0)
