"""Runtime settings. Values in a local .env override the defaults; CLI flags override both."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

# environment variables
BASE_PATH = Path(os.getenv("IWU_BASE_PATH") or PROJECT_ROOT)
OUTPUT_DIR = os.getenv("IWU_OUTPUT_DIR", "data/processed")

OUTPUT_FILES = {
    "iwu_long": "iwu_full_long.csv",
    "iwu_wide": "iwu_full_wide.csv",
    "usgs_wide": "usgs_iwu_wide.csv",
    "fips_state": "fips_state_table.csv",
    "crop_annual_avg": "iwu_crop_annual_avg.csv",
    "by_year": "iwu_by_year.csv",
    "by_state_year": "iwu_by_state_year.csv",
    "iwu_usgs_county": "iwu_usgs_county_year.csv",
}
