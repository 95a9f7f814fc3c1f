"""
Reference tables used only for joins.

fips_to_state comes from the Census all-geocodes file. County rows carry
summary level 050; state rows carry summary level 040 and hold the state name
in "Area Name". Everything is read as string so FIPS codes keep their leading
zeros.
"""

SOURCES_REFERENCE = {
    "fips_to_state": {
        "path": "data/reference/all-geocodes-v2020.xlsx",
        "format": "xlsx",
        "vintage": 2020,  # county set matching the 2008-2020 IWU estimates
        "sheet": 0,
        "skiprows": 4,
        "read_dtypes": {
            "Summary Level": "string",
            "State Code (FIPS)": "string",
            "County Code (FIPS)": "string",
            "Area Name (including legal/statistical area description)": "string",
        },
        "columns": {
            "summary_level": "Summary Level",
            "state_fips": "State Code (FIPS)",
            "county_code": "County Code (FIPS)",
            "area_name": "Area Name (including legal/statistical area description)",
        },
        "summary_levels": {
            "state": "040",
            "county": "050",
        },
        "zfill": {
            "state_fips": 2,
            "county_code": 3,
        },
    },
}

# US state and territory abbreviation -> full name
STATE_ABBR_TO_FULL = {
    "AL": "Alabama", "AK": "Alaska", "AZ": "Arizona", "AR": "Arkansas", "CA": "California",
    "CO": "Colorado", "CT": "Connecticut", "DE": "Delaware", "DC": "District of Columbia",
    "FL": "Florida", "GA": "Georgia", "HI": "Hawaii", "ID": "Idaho", "IL": "Illinois",
    "IN": "Indiana", "IA": "Iowa", "KS": "Kansas", "KY": "Kentucky", "LA": "Louisiana",
    "ME": "Maine", "MD": "Maryland", "MA": "Massachusetts", "MI": "Michigan", "MN": "Minnesota",
    "MS": "Mississippi", "MO": "Missouri", "MT": "Montana", "NE": "Nebraska", "NV": "Nevada",
    "NH": "New Hampshire", "NJ": "New Jersey", "NM": "New Mexico", "NY": "New York",
    "NC": "North Carolina", "ND": "North Dakota", "OH": "Ohio", "OK": "Oklahoma", "OR": "Oregon",
    "PA": "Pennsylvania", "RI": "Rhode Island", "SC": "South Carolina", "SD": "South Dakota",
    "TN": "Tennessee", "TX": "Texas", "UT": "Utah", "VT": "Vermont", "VA": "Virginia",
    "WA": "Washington", "WV": "West Virginia", "WI": "Wisconsin", "WY": "Wyoming",
    "AS": "American Samoa", "GU": "Guam", "MP": "Northern Mariana Islands", "PR": "Puerto Rico",
    "VI": "U.S. Virgin Islands",
}

STATE_FULL_TO_ABBR = {v: k for k, v in STATE_ABBR_TO_FULL.items()}
