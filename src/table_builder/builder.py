"""
Composable builders for the IWU output tables.

Pipeline:
- fips_state: Census geocodes -> county_fips, state, state_name, county_name
- iwu_long / iwu_wide: raw measure.crop.year files reshaped, joined to fips_state
- usgs_wide: USGS county estimates per use category, in km^3/year
- summaries: crop annual averages, totals by year and by state-year,
  and county-year IWU totals next to the USGS irrigation estimates
"""

import logging
import re
from pathlib import Path

import pandas as pd

from src.configs.settings import OUTPUT_FILES
from src.configs.sources_iwu import SOURCES_IWU
from src.configs.sources_reference import SOURCES_REFERENCE, STATE_FULL_TO_ABBR
from src.table_builder.keys import check_fips, normalize_fips
from src.table_builder.reader import read_irrigation, read_reference, read_usgs
from src.table_builder.reshape import (
    KEY_COL,
    add_derived_columns,
    pivot_longer_measures,
    pivot_wider_measures,
    usgs_to_wide,
)
from src.table_builder.summary import crop_annual_average, summarize

logger = logging.getLogger(__name__)

LOOKUP_COLUMNS = [KEY_COL, "state_fips", "state", "state_name", "county_name"]


def build_fips_lookup(base_path: Path | None = None) -> pd.DataFrame:
    """Build the county -> state lookup from the Census all-geocodes table.

    county_fips is state code (2) + county code (3), normalized the same way
    as the IWU identifiers so the two join.
    """
    spec = SOURCES_REFERENCE["fips_to_state"]
    raw = read_reference("fips_to_state", base_path)
    cols = spec["columns"]
    missing = [v for v in cols.values() if v not in raw.columns]
    if missing:
        raise ValueError(f"fips_to_state missing columns: {missing}")
    df = raw.rename(columns={v: k for k, v in cols.items()})[list(cols)].copy()

    for col, width in spec["zfill"].items():
        df[col] = df[col].astype(str).str.strip().str.zfill(width)
    level = df["summary_level"].astype(str).str.strip().str.zfill(3)
    levels = spec["summary_levels"]

    states = (
        df.loc[level == levels["state"], ["state_fips", "area_name"]]
        .rename(columns={"area_name": "state_name"})
        .drop_duplicates(subset=["state_fips"])
    )
    counties = df.loc[level == levels["county"]].rename(columns={"area_name": "county_name"})
    counties[KEY_COL] = normalize_fips(counties["state_fips"] + counties["county_code"])

    lookup = counties[[KEY_COL, "state_fips", "county_name"]].merge(states, on="state_fips", how="left")
    lookup["state"] = lookup["state_name"].map(STATE_FULL_TO_ABBR).astype("string")
    if lookup[KEY_COL].duplicated().any():
        raise ValueError("fips_to_state has duplicate county_fips")
    logger.info(f"FIPS lookup: {len(lookup)} counties in {lookup['state_fips'].nunique()} states")
    return lookup[LOOKUP_COLUMNS].reset_index(drop=True)


def _check_file_tokens(path: Path, long: pd.DataFrame, file_rx: re.Pattern) -> None:
    """Warn when the columns of <measure>_<year>.csv carry another measure or year."""
    m = file_rx.match(path.name)
    if m is None or long.empty:
        return
    measures = set(long["measure"])
    years = set(long["year"])
    if measures != {m["measure"]} or years != {int(m["year"])}:
        logger.warning(
            f"{path.name}: column tokens measure={sorted(measures)} year={sorted(years)} "
            f"do not match file name"
        )


def build_iwu_long(base_path: Path | None = None, spec: dict | None = None) -> pd.DataFrame:
    """Read every IWU file, normalize county ids and stack the long tables."""
    spec = spec or SOURCES_IWU["irrigation"]
    id_col = spec["id_column"]
    file_rx = re.compile(spec["file_name"])
    frames = []
    for path, df in read_irrigation(base_path, spec):
        df[id_col] = normalize_fips(df[id_col])
        long = pivot_longer_measures(df, id_col, spec["names_sep"], spec["measures"])
        _check_file_tokens(path, long, file_rx)
        frames.append(long)
    out = pd.concat(frames, ignore_index=True)
    check_fips(out[KEY_COL], "iwu_long")
    logger.info(
        f"IWU long: {len(out)} rows, {out[KEY_COL].nunique()} counties, "
        f"years {out['year'].min()}-{out['year'].max()}"
    )
    return out


def build_iwu_wide(long: pd.DataFrame) -> pd.DataFrame:
    """Pivot the long table to one row per (year, county, crop) plus derived columns."""
    wide = add_derived_columns(pivot_wider_measures(long))
    logger.info(f"IWU wide: {len(wide)} rows")
    return wide


def join_state(df: pd.DataFrame, lookup: pd.DataFrame) -> pd.DataFrame:
    """Left-join county_fips -> state info. Unmatched counties keep missing state columns."""
    check_fips(df[KEY_COL], "left table")
    check_fips(lookup[KEY_COL], "lookup")
    out = df.merge(lookup, on=KEY_COL, how="left")
    unmatched = out.loc[out["state_name"].isna(), KEY_COL].dropna().unique()
    if len(unmatched):
        logger.warning(f"{len(unmatched)} counties not in FIPS lookup, e.g. {list(unmatched[:5])}")
    return out


def build_usgs_table(base_path: Path | None = None) -> pd.DataFrame:
    """USGS county water use per category, converted to km^3/year."""
    usgs = usgs_to_wide(read_usgs(base_path))
    logger.info(f"USGS wide: {len(usgs)} rows, {usgs[KEY_COL].nunique()} counties")
    return usgs


def join_usgs(iwu_wide: pd.DataFrame, usgs_wide: pd.DataFrame, category: str = "Irrigation") -> pd.DataFrame:
    """County-year IWU totals (summed over crops) with the USGS estimates for `category`.

    USGS columns are prefixed with usgs_. County-years without a USGS
    estimate keep missing usgs_ columns.
    """
    iwu_cols = [c for c in ("sw", "gwa", "gwd", "sustainable_gw", "total") if c in iwu_wide.columns]
    county = iwu_wide.groupby([KEY_COL, "year"], as_index=False)[iwu_cols].sum(min_count=1)

    usgs = usgs_wide[usgs_wide["category"] == category]
    if usgs.empty:
        raise ValueError(f"No USGS rows for category '{category}'")
    usgs_cols = [c for c in ("total", "gwa", "sw", "reclaimed") if c in usgs.columns]
    usgs = usgs[[KEY_COL, "year"] + usgs_cols].rename(columns={c: f"usgs_{c}" for c in usgs_cols})

    check_fips(county[KEY_COL], "iwu")
    check_fips(usgs[KEY_COL], "usgs")
    county["year"] = county["year"].astype("Int64")
    usgs = usgs.assign(year=pd.to_numeric(usgs["year"], errors="coerce").astype("Int64"))
    out = county.merge(usgs, on=[KEY_COL, "year"], how="left")
    n_matched = int(out[f"usgs_{usgs_cols[0]}"].notna().sum())
    logger.info(f"Joined USGS '{category}': {n_matched} of {len(out)} county-years matched")
    return out


def build_all(base_path: Path | None = None, include_usgs: bool = True) -> dict[str, pd.DataFrame]:
    """Build every output table. Returns dict mapping output name to DataFrame."""
    lookup = build_fips_lookup(base_path)
    long = build_iwu_long(base_path)
    wide = build_iwu_wide(long)
    wide_st = join_state(wide, lookup)

    tables = {
        "fips_state": lookup,
        "iwu_long": join_state(long, lookup),
        "iwu_wide": wide_st,
        "crop_annual_avg": crop_annual_average(wide),
        "by_year": summarize(wide, ["year"]),
        "by_state_year": summarize(wide_st, ["state_name", "year"]),
    }
    if include_usgs:
        usgs = build_usgs_table(base_path)
        tables["usgs_wide"] = usgs
        tables["iwu_usgs_county"] = join_usgs(wide, usgs)
    return tables


def write_outputs(tables: dict[str, pd.DataFrame], out_dir: Path) -> dict[str, Path]:
    """Write each table to out_dir as CSV. Returns dict mapping name to written path."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    written = {}
    for name, df in tables.items():
        path = out_dir / OUTPUT_FILES.get(name, f"{name}.csv")
        df.to_csv(path, index=False)
        logger.info(f"Saved {len(df)} rows to {path}")
        written[name] = path
    return written
