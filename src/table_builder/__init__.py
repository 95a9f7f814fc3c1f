"""Table builder: readers, reshapers and builders for the IWU and USGS county tables."""

from src.table_builder.keys import pad_fips, normalize_fips, check_fips
from src.table_builder.units import mgal_to_km3
from src.table_builder.reader import list_files, read_irrigation, read_usgs, read_reference
from src.table_builder.reshape import (
    parse_column_name,
    pivot_longer_measures,
    pivot_wider_measures,
    add_derived_columns,
    wider_to_longer,
    usgs_to_wide,
)
from src.table_builder.builder import (
    build_fips_lookup,
    build_iwu_long,
    build_iwu_wide,
    build_usgs_table,
    join_state,
    join_usgs,
    build_all,
    write_outputs,
)
from src.table_builder.summary import crop_annual_average, summarize

__all__ = [
    "pad_fips",
    "normalize_fips",
    "check_fips",
    "mgal_to_km3",
    "list_files",
    "read_irrigation",
    "read_usgs",
    "read_reference",
    "parse_column_name",
    "pivot_longer_measures",
    "pivot_wider_measures",
    "add_derived_columns",
    "wider_to_longer",
    "usgs_to_wide",
    "build_fips_lookup",
    "build_iwu_long",
    "build_iwu_wide",
    "build_usgs_table",
    "join_state",
    "join_usgs",
    "build_all",
    "write_outputs",
    "crop_annual_average",
    "summarize",
]
