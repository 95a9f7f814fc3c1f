from pathlib import Path

import pandas as pd

from src.table_builder.reader import _resolve_path, clean_names, list_files
from src.table_builder.reshape import parse_column_name


def _read_one(path: Path, cfg: dict) -> pd.DataFrame:
    """Read a raw file untyped so inspection still works on files the typed reader rejects."""
    fmt = cfg.get("format", "csv").lower()
    if fmt == "csv":
        return pd.read_csv(
            path,
            skiprows=cfg.get("skiprows", 0),
            na_values=cfg.get("na_values"),
            low_memory=False,
        )
    if fmt == "xlsx":
        kwargs = {"engine": "openpyxl", "skiprows": cfg.get("skiprows", 0)}
        if "sheet" in cfg:
            kwargs["sheet_name"] = cfg["sheet"]
        return pd.read_excel(path, **kwargs)
    raise ValueError(f"Unsupported format: {fmt}")


def parse_config(cfg: dict, base_path: Path | None = None) -> dict[str, pd.DataFrame]:
    """
    Load the raw table(s) of a source config, keyed by file name.
    Supports folder + pattern sources (IWU, USGS) and single-path sources (reference).
    """
    if "pattern" in cfg:
        folder = _resolve_path(cfg["folder"], base_path)
        files = list_files(folder, cfg["pattern"])
        if not files:
            raise FileNotFoundError(f"No files matching '{cfg['pattern']}' in {folder}")
    else:
        path = _resolve_path(cfg["path"], base_path)
        if not path.exists():
            raise FileNotFoundError(f"Data not found: {path}")
        files = [path]
    out = {}
    for p in files:
        df = _read_one(p, cfg)
        if "id_columns" in cfg:
            df.columns = clean_names(df.columns)
        out[p.name] = df
    return out


def inspect_dtypes(df: pd.DataFrame) -> pd.DataFrame:
    """Return a small DataFrame listing each column and its dtype."""
    return (
        df.dtypes.astype(str)
        .reset_index()
        .rename(columns={"index": "column", 0: "dtype"})
    )


def inspect_column_names(df: pd.DataFrame, id_column: str, sep: str = ".", measures=None) -> pd.DataFrame:
    """Parse every measure.crop.year column; malformed names get an error message instead of parts."""
    rows = []
    for col in df.columns:
        if col == id_column:
            continue
        try:
            measure, crop, year = parse_column_name(col, sep, measures)
            rows.append({"column": col, "measure": measure, "crop": crop, "year": year, "error": ""})
        except ValueError as e:
            rows.append({"column": col, "measure": None, "crop": None, "year": None, "error": str(e)})
    return pd.DataFrame(rows, columns=["column", "measure", "crop", "year", "error"])
