"""
Pipeline: Build the USGS county water-use table.

Reads usco*.csv (title row skipped, "--" as missing), keeps total, fresh
groundwater, fresh surface water and reclaimed wastewater withdrawals for
every use category, and writes one row per county and category with the
volumes converted from Mgal/d to km^3/year.

Output: usgs_iwu_wide.csv
"""

import argparse
import logging
import sys
from pathlib import Path

project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from src.configs.settings import BASE_PATH, OUTPUT_DIR, OUTPUT_FILES
from src.table_builder.builder import build_usgs_table

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Build USGS county water-use table (km^3/year)")
    parser.add_argument(
        "--output",
        type=str,
        default=f"{OUTPUT_DIR}/{OUTPUT_FILES['usgs_wide']}",
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

    df = build_usgs_table(base_path)
    if not args.quiet:
        print(f"\n--- usgs_iwu_wide (final) ---\n{df.head()}\n")
    df.to_csv(output_path, index=False)
    print(f"Saved {len(df)} rows to {output_path}")


if __name__ == "__main__":
    main()
    sys.exit(0)
