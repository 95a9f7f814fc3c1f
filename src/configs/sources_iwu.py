"""
Source configuration for the county irrigation water-use (IWU) and USGS tables.

Canonical keys (aligned across tables):
- county_fips: 5-digit FIPS code (state 2 + county 3)
- year: integer year of the estimate

IWU files are named <measure>_<year>.csv and hold one row per county with
columns encoded as measure.crop.year. USGS files hold one row per county
with one column per (use category, measure) pair.
"""

SOURCES_IWU = {
    "irrigation": {
        "folder": "data/raw",
        "format": "csv",
        # R-style list.files pattern: searched, not anchored
        "pattern": r"(sw|gwa|gwd)_20[0-9]{2}",
        "file_name": r"^(?P<measure>sw|gwa|gwd)_(?P<year>20[0-9]{2})",
        "id_column": "GEOID",
        "n_value_columns": 20,
        "keys": {
            "county_fips": "GEOID",
        },
        "names_sep": ".",
        "names_to": ["measure", "crop", "year"],
        "measures": {
            "sw": "surface water withdrawal",
            "gwa": "groundwater abstraction",
            "gwd": "groundwater depletion",
        },
        "years": list(range(2008, 2021)),
        "units": "km3",
    },
    "usgs": {
        "folder": "data/raw",
        "format": "csv",
        "pattern": r"usco.+\.csv$",
        # First line of the USGS file is a title row
        "skiprows": 1,
        "na_values": ["--"],
        "id_columns": ["state", "statefips", "county", "countyfips", "fips", "year"],
        "keys": {
            "county_fips": "fips",
        },
        # Raw (clean_names) suffix -> canonical measure; order is output column order
        "measures": {
            "w_fr_to": "total",
            "wgw_fr": "gwa",
            "wsw_fr": "sw",
            "rec_ww": "reclaimed",
        },
        "categories": {
            "ps": "Public Supply",
            "do": "Domestic",
            "in": "Industrial",
            "ir": "Irrigation",
            "ic": "Crop Irrigation",
            "ig": "Golf Irrigation",
            "li": "Livestock",
            "aq": "Aquaculture",
            "mi": "Mining",
            "pt": "Thermoelectric",
            "po": "Thermoelectric (Once-through)",
            "pc": "Thermoelectric (Recirculating)",
            "to": "Total",
        },
        "units": "mgal/day",
    },
}
