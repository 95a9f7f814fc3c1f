"""Volume conversions for USGS water-use estimates."""

DAYS_PER_YEAR = 365.25
# 1 million US gallons = 3785.411784 m^3 = 3.785411784e-6 km^3
KM3_PER_MGAL = 0.000003785411784


def mgal_to_km3(x):
    """Convert a flow in million gallons/day to a volume in km^3/year.

    Works element-wise on scalars, numpy arrays and pandas Series; missing
    values stay missing.
    """
    mgal_year = x * DAYS_PER_YEAR
    return mgal_year * KM3_PER_MGAL
