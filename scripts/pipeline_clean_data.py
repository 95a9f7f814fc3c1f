"""
Pipeline: Build every processed table in one run.

fips_state lookup -> IWU long/wide (with state info) -> USGS wide ->
summaries. Writes all tables to the processed folder.
"""

import argparse
import logging
import sys
from pathlib import Path

project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from src.configs.settings import BASE_PATH, OUTPUT_DIR
from src.table_builder.builder import build_all, write_outputs

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Build IWU, USGS and summary tables")
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
        "--skip-usgs",
        action="store_true",
        help="Do not read the USGS file",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress table head prints (only show INFO logs)",
    )
    args = parser.parse_args()

    base_path = Path(args.base_path) if args.base_path else BASE_PATH
    tables = build_all(base_path, include_usgs=not args.skip_usgs)
    if not args.quiet:
        for name, df in tables.items():
            print(f"\n--- {name} ---\n{df.head()}\n")
    written = write_outputs(tables, base_path / args.out_dir)
    print(f"Wrote {len(written)} tables to {base_path / args.out_dir}")


if __name__ == "__main__":
    main()
    sys.exit(0)
