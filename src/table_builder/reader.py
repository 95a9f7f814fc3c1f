"""
Readers for the raw IWU, USGS and reference tables.

File discovery follows the raw folder naming (regex search on file names).
IWU files are read with a fixed schema: the identifier column as string and
every other column as float64, so a value that is not numeric fails the read
instead of turning the whole column into text.
"""

import logging
import re
from pathlib import Path

import pandas as pd

from src.configs.sources_iwu import SOURCES_IWU
from src.configs.sources_reference import SOURCES_REFERENCE

logger = logging.getLogger(__name__)


def _resolve_path(path_str: str, base_path: Path | None) -> Path:
    p = Path(path_str)
    if not p.is_absolute() and base_path is not None:
        return base_path / p
    return p


def _parse_read_dtypes(read_dtypes: dict) -> dict:
    """Convert schema dtype names to types usable by read_csv/read_excel."""
    type_map = {"string": str, "str": str, "float64": float, "float": float, "int64": int, "int": int}
    out = {}
    for col, dtype in read_dtypes.items():
        if isinstance(dtype, type):
            out[col] = dtype
        else:
            out[col] = type_map.get(dtype, dtype)
    return out


def _read_file(path: Path, spec: dict) -> pd.DataFrame:
    fmt = spec.get("format", "csv").lower()
    read_kw: dict = {}
    if "read_dtypes" in spec:
        read_kw["dtype"] = _parse_read_dtypes(spec["read_dtypes"])
    if "skiprows" in spec:
        read_kw["skiprows"] = spec["skiprows"]
    if fmt == "xlsx":
        read_kw["engine"] = "openpyxl"
        if "sheet" in spec:
            read_kw["sheet_name"] = spec["sheet"]
        return pd.read_excel(path, **read_kw)
    if fmt == "csv":
        return pd.read_csv(path, **read_kw)
    raise ValueError(f"Unsupported format: {fmt}")


def list_files(folder: Path, pattern: str) -> list[Path]:
    """Return files in `folder` whose name matches `pattern`, sorted by name."""
    if not folder.is_dir():
        raise FileNotFoundError(f"Data folder not found: {folder}")
    rx = re.compile(pattern)
    return sorted(p for p in folder.iterdir() if p.is_file() and rx.search(p.name))


def clean_names(columns) -> list[str]:
    """Convert column names to snake_case (e.g. 'PS-WGWFr' -> 'ps_wgw_fr')."""
    out = []
    for c in columns:
        s = str(c).strip()
        s = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", s)
        s = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s)
        s = re.sub(r"[^0-9A-Za-z]+", "_", s)
        out.append(s.strip("_").lower())
    return out


def read_irrigation_file(path: Path, spec: dict | None = None) -> pd.DataFrame:
    """Read one IWU file with the fixed identifier + numeric schema.

    Raises:
        ValueError: the identifier column is missing, the number of value
            columns is not the expected one, or a value is not numeric.
    """
    spec = spec or SOURCES_IWU["irrigation"]
    id_col = spec["id_column"]
    header = pd.read_csv(path, nrows=0).columns.tolist()
    if id_col not in header:
        raise ValueError(f"{path.name}: missing identifier column '{id_col}'")
    value_cols = [c for c in header if c != id_col]
    n_expected = spec.get("n_value_columns")
    if n_expected is not None and len(value_cols) != n_expected:
        raise ValueError(
            f"{path.name}: expected {n_expected} value columns, found {len(value_cols)}"
        )
    dtype = {id_col: str, **{c: "float64" for c in value_cols}}
    try:
        df = pd.read_csv(path, dtype=dtype)
    except ValueError as e:
        raise ValueError(f"{path.name}: {e}") from e
    logger.info(f"Read {path.name}: {len(df)} rows, {len(value_cols)} value columns")
    return df


def read_irrigation(base_path: Path | None = None, spec: dict | None = None) -> list[tuple[Path, pd.DataFrame]]:
    """Discover and read every IWU file. Returns (path, DataFrame) pairs in file-name order."""
    spec = spec or SOURCES_IWU["irrigation"]
    folder = _resolve_path(spec["folder"], base_path)
    files = list_files(folder, spec["pattern"])
    if not files:
        raise FileNotFoundError(f"No IWU files matching '{spec['pattern']}' in {folder}")
    logger.info(f"Found {len(files)} IWU files in {folder}")
    return [(p, read_irrigation_file(p, spec)) for p in files]


def read_usgs(base_path: Path | None = None, spec: dict | None = None) -> pd.DataFrame:
    """Read the USGS county water-use file(s) with snake_case column names."""
    spec = spec or SOURCES_IWU["usgs"]
    folder = _resolve_path(spec["folder"], base_path)
    files = list_files(folder, spec["pattern"])
    if not files:
        raise FileNotFoundError(f"No USGS file matching '{spec['pattern']}' in {folder}")
    dfs = []
    for p in files:
        df = pd.read_csv(
            p,
            skiprows=spec.get("skiprows", 0),
            na_values=spec.get("na_values"),
            thousands=",",
            low_memory=False,
        )
        df.columns = clean_names(df.columns)
        logger.info(f"Read {p.name}: {len(df)} rows, {len(df.columns)} columns")
        dfs.append(df)
    return dfs[0] if len(dfs) == 1 else pd.concat(dfs, ignore_index=True)


def read_reference(name: str, base_path: Path | None = None) -> pd.DataFrame:
    """Load a raw reference table from SOURCES_REFERENCE."""
    if name not in SOURCES_REFERENCE:
        raise KeyError(f"Unknown table '{name}'. Available: {list(SOURCES_REFERENCE)}")
    spec = SOURCES_REFERENCE[name]
    path = _resolve_path(spec["path"], base_path)
    if not path.exists():
        raise FileNotFoundError(f"Data not found: {path}")
    df = _read_file(path, spec)
    # Census headers sometimes carry line breaks; collapse to single spaces
    df.columns = [" ".join(str(c).split()) for c in df.columns]
    logger.info(f"Read {name}: {len(df)} rows from {path.name}")
    return df
