"""
County identifier normalization.

Every table is keyed on county_fips, a 5-character zero-padded string of
digits. The normalization must be applied to both sides before any join; a
key stored as 1001 on one side and "01001" on the other silently drops the
match.
"""

import pandas as pd

FIPS_WIDTH = 5


def pad_fips(value, width: int = FIPS_WIDTH) -> str:
    """Left-pad a single identifier with zeros to `width` characters."""
    if pd.isna(value):
        raise ValueError("Missing identifier")
    s = str(value).strip()
    if s.endswith(".0"):
        s = s[:-2]
    if not s:
        raise ValueError("Empty identifier")
    if not s.isdigit():
        raise ValueError(f"Identifier '{s}' is not numeric")
    if len(s) > width:
        raise ValueError(f"Identifier '{s}' is longer than {width} characters")
    return s.zfill(width)


def normalize_fips(series: pd.Series, width: int = FIPS_WIDTH) -> pd.Series:
    """Normalize identifiers to `width`-digit strings; leave missing as missing."""
    s = series.astype("string").str.strip().str.replace(r"\.0$", "", regex=True)
    s = s.mask((s == "").fillna(False))
    non_digit = ~s.str.fullmatch(r"\d+").fillna(True)
    if non_digit.any():
        bad = s[non_digit].unique().tolist()[:5]
        raise ValueError(f"Non-numeric identifiers: {bad}")
    too_long = s.str.len() > width
    if too_long.fillna(False).any():
        bad = s[too_long.fillna(False)].unique().tolist()[:5]
        raise ValueError(f"Identifiers longer than {width} characters: {bad}")
    return s.str.zfill(width).astype("string")


def check_fips(series: pd.Series, name: str = "county_fips", width: int = FIPS_WIDTH) -> None:
    """Raise if any non-missing identifier is not exactly `width` digits."""
    s = series.dropna().astype(str)
    bad = s[~s.str.fullmatch(rf"\d{{{width}}}")]
    if len(bad):
        raise ValueError(
            f"{name}: {len(bad)} identifiers are not {width} characters of digits "
            f"(e.g. {bad.unique().tolist()[:5]}). Normalize before joining."
        )
