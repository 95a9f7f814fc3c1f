"""Grouped summaries of the wide IWU table."""

import numpy as np
import pandas as pd


def _value_columns(df: pd.DataFrame, exclude) -> list[str]:
    """Float columns not used as grouping keys (year is integer and never summed)."""
    return [c for c in df.select_dtypes(include=[np.floating]).columns if c not in exclude]


def crop_annual_average(wide: pd.DataFrame, decimals: int = 2) -> pd.DataFrame:
    """Average annual national total per crop.

    Measures are summed over counties for each (year, crop); a year with any
    missing county value sums to NaN. Those yearly totals are then averaged
    per crop ignoring NaN years, and rounded.
    """
    cols = _value_columns(wide, exclude={"year", "crop"})
    by_year = (
        wide.groupby(["year", "crop"])[cols]
        .agg(lambda s: s.sum(skipna=False))
        .reset_index()
    )
    by_crop = by_year.groupby("crop", as_index=False)[cols].mean()
    by_crop[cols] = by_crop[cols].round(decimals)
    return by_crop


def summarize(wide: pd.DataFrame, by, columns=None) -> pd.DataFrame:
    """Sum measure columns by the given keys (e.g. ["year"] or ["state_name", "year"]).

    A group whose values are all missing stays missing instead of becoming 0.
    Rows with a missing key (e.g. a county without a state match) form their
    own group rather than being dropped.
    """
    by = [by] if isinstance(by, str) else list(by)
    missing = [c for c in by if c not in wide.columns]
    if missing:
        raise KeyError(f"Group-by columns not in table: {missing}")
    cols = list(columns) if columns is not None else _value_columns(wide, exclude=set(by))
    return wide.groupby(by, as_index=False, observed=True, dropna=False)[cols].sum(min_count=1)
