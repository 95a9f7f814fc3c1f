"""
Reshape IWU and USGS tables between their raw wide encodings and tidy tables.

IWU raw columns are named measure.crop.year (e.g. gwa.corn.2015). The long
table holds one value per (county, measure, crop, year); the wide table holds
all measures for a (year, county, crop) on one row.
"""

import logging

import pandas as pd

from src.configs.sources_iwu import SOURCES_IWU
from src.table_builder.keys import normalize_fips
from src.table_builder.units import mgal_to_km3

logger = logging.getLogger(__name__)

KEY_COL = "county_fips"
MEASURES = ("sw", "gwa", "gwd")
LONG_COLUMNS = [KEY_COL, "measure", "crop", "year", "value"]


def parse_column_name(name: str, sep: str = ".", measures=None) -> tuple[str, str, int]:
    """Split a measure.crop.year column name into its three parts.

    Raises:
        ValueError: wrong number of parts, an empty part, a measure not in
            `measures` (when given), or a year that is not an integer.
    """
    parts = str(name).split(sep)
    if len(parts) != 3:
        raise ValueError(
            f"Malformed column name '{name}': expected measure{sep}crop{sep}year, "
            f"got {len(parts)} part(s)"
        )
    measure, crop, year = (p.strip() for p in parts)
    if not measure or not crop or not year:
        raise ValueError(f"Malformed column name '{name}': empty part")
    if measures is not None and measure not in measures:
        raise ValueError(f"Unknown measure '{measure}' in column '{name}'. Expected one of {list(measures)}")
    if not year.isdigit():
        raise ValueError(f"Non-integer year '{year}' in column '{name}'")
    return measure, crop, int(year)


def pivot_longer_measures(
    df: pd.DataFrame,
    id_column: str = "GEOID",
    sep: str = ".",
    measures=None,
) -> pd.DataFrame:
    """Melt a raw IWU table into county_fips, measure, crop, year, value rows.

    The identifier column is carried through unparsed and renamed to
    county_fips; every other column is parsed with parse_column_name before
    any row is produced, so one bad name rejects the whole table.
    """
    if id_column not in df.columns:
        raise ValueError(f"Missing identifier column '{id_column}'")
    value_cols = [c for c in df.columns if c != id_column]
    parsed = {c: parse_column_name(c, sep, measures) for c in value_cols}

    if not value_cols:
        empty = pd.DataFrame(columns=LONG_COLUMNS)
        return empty.astype({"year": "int64", "value": "float64"})

    long = df.melt(id_vars=[id_column], value_vars=value_cols, var_name="_column", value_name="value")
    parts = pd.DataFrame.from_dict(parsed, orient="index", columns=["measure", "crop", "year"])
    long = long.join(parts, on="_column")
    long = long.rename(columns={id_column: KEY_COL})
    long["year"] = long["year"].astype("int64")
    return long[LONG_COLUMNS].reset_index(drop=True)


def pivot_wider_measures(long: pd.DataFrame, measures=MEASURES) -> pd.DataFrame:
    """Pivot measures out so each (year, county_fips, crop) row holds sw, gwa, gwd."""
    index = ["year", KEY_COL, "crop"]
    dupes = long.duplicated(subset=index + ["measure"], keep=False)
    if dupes.any():
        sample = long.loc[dupes, index + ["measure"]].head(3).to_dict(orient="records")
        raise ValueError(f"{int(dupes.sum())} duplicate measure rows, e.g. {sample}")

    wide = long.pivot(index=index, columns="measure", values="value").reset_index()
    wide.columns.name = None
    for m in measures:
        if m not in wide.columns:
            logger.warning(f"Measure '{m}' missing from long table; filling with NaN")
            wide[m] = float("nan")
    extra = [c for c in wide.columns if c not in index and c not in measures]
    return wide[index + list(measures) + extra]


def add_derived_columns(wide: pd.DataFrame) -> pd.DataFrame:
    """Add sustainable_gw = gwa - gwd and total = sw + gwa."""
    out = wide.copy()
    out["sustainable_gw"] = out["gwa"] - out["gwd"]
    out["total"] = out["sw"] + out["gwa"]
    return out


def wider_to_longer(wide: pd.DataFrame, measures=MEASURES, drop_missing: bool = False) -> pd.DataFrame:
    """Melt a wide table back to the long layout. Derived columns are not carried."""
    value_vars = [m for m in measures if m in wide.columns]
    long = wide.melt(
        id_vars=[KEY_COL, "crop", "year"],
        value_vars=value_vars,
        var_name="measure",
        value_name="value",
    )
    if drop_missing:
        long = long.dropna(subset=["value"])
    return long[LONG_COLUMNS].reset_index(drop=True)


# ---- USGS ----


def select_usgs_measures(df: pd.DataFrame, spec: dict | None = None) -> pd.DataFrame:
    """Keep identifier columns and the configured measures, renamed to <category>_<measure>."""
    spec = spec or SOURCES_IWU["usgs"]
    id_cols = spec["id_columns"]
    missing = [c for c in id_cols if c not in df.columns]
    if missing:
        raise ValueError(f"USGS table missing identifier columns: {missing}")

    rename = {}
    for col in df.columns:
        if col in id_cols:
            continue
        for raw, canonical in spec["measures"].items():
            suffix = f"_{raw}"
            if col.endswith(suffix):
                rename[col] = f"{col[: -len(suffix)]}_{canonical}"
                break
    if not rename:
        raise ValueError(f"No USGS measure columns found for suffixes {list(spec['measures'])}")
    return df[id_cols + list(rename)].rename(columns=rename)


def usgs_to_wide(df: pd.DataFrame, spec: dict | None = None) -> pd.DataFrame:
    """One row per county and use category with measures in km^3/year.

    Input is the clean_names USGS table. Category codes are replaced by their
    labels as an ordered categorical, and county_fips is added next to the
    raw fips column.
    """
    spec = spec or SOURCES_IWU["usgs"]
    id_cols = spec["id_columns"]
    selected = select_usgs_measures(df, spec)

    long = selected.melt(id_vars=id_cols, var_name="_column", value_name="value")
    split = long["_column"].str.split("_", n=1, expand=True)
    long["category"] = split[0]
    long["measure"] = split[1]

    wide = long.set_index(id_cols + ["category", "measure"])["value"].unstack("measure").reset_index()
    wide.columns.name = None

    labels = spec["categories"]
    unknown = sorted(set(wide["category"]) - set(labels))
    if unknown:
        logger.warning(f"Unlabelled USGS categories left missing: {unknown}")
    wide["category"] = pd.Categorical(
        wide["category"].map(labels), categories=list(labels.values()), ordered=True
    )

    measure_cols = [m for m in spec["measures"].values() if m in wide.columns]
    wide[measure_cols] = wide[measure_cols].apply(mgal_to_km3)

    fips_col = spec["keys"][KEY_COL]
    wide.insert(wide.columns.get_loc(fips_col) + 1, KEY_COL, normalize_fips(wide[fips_col]))
    wide = wide.sort_values([KEY_COL, "year", "category"]).reset_index(drop=True)
    return wide[id_cols + [KEY_COL, "category"] + measure_cols]
