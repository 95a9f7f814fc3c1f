"""Tests for src.table_builder.builder."""

import logging
import sys
from pathlib import Path

import numpy as np
import pandas as pd
import pytest

project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from src.configs import sources_reference
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
from src.table_builder.units import mgal_to_km3

CROPS = [
    "corn", "soybeans", "wheat", "cotton", "rice", "sorghum", "barley", "oats",
    "alfalfa", "hay", "potatoes", "sugarbeets", "peanuts", "tobacco", "vegetables",
    "orchards", "vineyards", "pasture", "citrus", "other",
]
GEOIDS = ["1001", "48201", "6037"]
BASE = {"sw": 100.0, "gwa": 10.0, "gwd": 1.0}

GEOCODES_CSV = (
    "Summary Level,State Code (FIPS),County Code (FIPS),"
    "Area Name (including legal/statistical area description)\n"
    "040,01,000,Alabama\n"
    "050,01,001,Autauga County\n"
    "040,48,000,Texas\n"
    "050,48,201,Harris County\n"
    "040,06,000,California\n"
    "050,06,037,Los Angeles County\n"
    "061,06,037,Some Subdivision\n"
)

USGS_CSV = (
    "Estimated Use of Water in the United States County-Level Data for 2015\n"
    "STATE,STATEFIPS,COUNTY,COUNTYFIPS,FIPS,YEAR,TP-TotPop,"
    "PS-WGWFr,PS-WSWFr,PS-WFrTo,IR-WGWFr,IR-WSWFr,IR-WFrTo,IR-RecWW\n"
    "AL,1,Autauga County,1,1001,2015,55.3,1.0,2.0,3.0,10.0,20.0,30.0,--\n"
    "TX,48,Harris County,201,48201,2015,4500.0,4.0,5.0,9.0,1.0,2.0,3.0,0.5\n"
)


def _value(measure: str, geoid_idx: int, crop_idx: int, year: int) -> float:
    return BASE[measure] + geoid_idx + crop_idx / 10 + (year - 2015)


def _write_iwu(raw: Path, measure: str, year: int, geoids=GEOIDS) -> None:
    header = ["GEOID"] + [f"{measure}.{c}.{year}" for c in CROPS]
    lines = [",".join(header)]
    for i, g in enumerate(geoids):
        lines.append(",".join([g] + [str(_value(measure, i, j, year)) for j in range(len(CROPS))]))
    (raw / f"{measure}_{year}.csv").write_text("\n".join(lines) + "\n")


@pytest.fixture
def project(tmp_path, monkeypatch):
    """Project tree with two years of IWU files, a USGS file and a CSV geocodes table."""
    raw = tmp_path / "data" / "raw"
    raw.mkdir(parents=True)
    for year in (2015, 2016):
        for measure in ("sw", "gwa", "gwd"):
            _write_iwu(raw, measure, year)
    (raw / "usco2015v2.0.csv").write_text(USGS_CSV)

    ref = tmp_path / "data" / "reference"
    ref.mkdir(parents=True)
    (ref / "geocodes.csv").write_text(GEOCODES_CSV)
    spec = {
        **sources_reference.SOURCES_REFERENCE["fips_to_state"],
        "path": "data/reference/geocodes.csv",
        "format": "csv",
        "skiprows": 0,
    }
    monkeypatch.setitem(sources_reference.SOURCES_REFERENCE, "fips_to_state", spec)
    return tmp_path


# --- build_fips_lookup ---


def test_build_fips_lookup(project):
    lookup = build_fips_lookup(project)
    assert list(lookup.columns) == ["county_fips", "state_fips", "state", "state_name", "county_name"]
    assert sorted(lookup["county_fips"]) == ["01001", "06037", "48201"]
    harris = lookup[lookup["county_fips"] == "48201"].iloc[0]
    assert harris["state_name"] == "Texas"
    assert harris["state"] == "TX"
    assert harris["county_name"] == "Harris County"


def test_build_fips_lookup_pads_unpadded_codes(project):
    (project / "data" / "reference" / "geocodes.csv").write_text(
        GEOCODES_CSV.replace("050,01,001", "50,1,1").replace("040,01,000", "40,1,0")
    )
    lookup = build_fips_lookup(project)
    autauga = lookup[lookup["county_name"] == "Autauga County"].iloc[0]
    assert autauga["county_fips"] == "01001"
    assert autauga["state_name"] == "Alabama"


# --- build_iwu_long ---


def test_build_iwu_long_rows_and_keys(project):
    long = build_iwu_long(project)
    # 6 files x 3 counties x 20 crops
    assert len(long) == 6 * 3 * 20
    assert set(long["county_fips"]) == {"01001", "48201", "06037"}
    assert (long["county_fips"].str.len() == 5).all()
    assert set(long["year"]) == {2015, 2016}


def test_build_iwu_long_value(project):
    long = build_iwu_long(project)
    row = long[
        (long["county_fips"] == "48201") & (long["measure"] == "gwa")
        & (long["crop"] == "wheat") & (long["year"] == 2016)
    ]
    assert row["value"].iloc[0] == pytest.approx(_value("gwa", 1, 2, 2016))


def test_build_iwu_long_warns_on_mislabelled_file(project, caplog):
    raw = project / "data" / "raw"
    text = (raw / "sw_2016.csv").read_text().replace("sw.", "gwa.")
    (raw / "sw_2016.csv").unlink()
    (raw / "sw_2017.csv").write_text(text)
    with caplog.at_level(logging.WARNING):
        with pytest.raises(ValueError, match="duplicate measure rows"):
            build_iwu_wide(build_iwu_long(project))
    assert "do not match file name" in caplog.text


# --- build_iwu_wide ---


def test_build_iwu_wide_derived(project):
    wide = build_iwu_wide(build_iwu_long(project))
    assert list(wide.columns) == [
        "year", "county_fips", "crop", "sw", "gwa", "gwd", "sustainable_gw", "total",
    ]
    assert len(wide) == 2 * 3 * 20
    assert (wide["sustainable_gw"] == wide["gwa"] - wide["gwd"]).all()
    assert (wide["total"] == wide["sw"] + wide["gwa"]).all()


# --- join_state ---


def test_join_state_adds_state_columns(project):
    wide = build_iwu_wide(build_iwu_long(project))
    out = join_state(wide, build_fips_lookup(project))
    assert len(out) == len(wide)
    la = out[out["county_fips"] == "06037"]
    assert set(la["state_name"]) == {"California"}


def test_join_state_unmatched_logs_warning(caplog):
    df = pd.DataFrame({"county_fips": ["01001", "99999"], "x": [1, 2]})
    lookup = pd.DataFrame({
        "county_fips": ["01001"], "state_fips": ["01"], "state": ["AL"],
        "state_name": ["Alabama"], "county_name": ["Autauga County"],
    })
    with caplog.at_level(logging.WARNING):
        out = join_state(df, lookup)
    assert pd.isna(out.loc[out["county_fips"] == "99999", "state_name"].iloc[0])
    assert "1 counties not in FIPS lookup" in caplog.text


def test_join_state_rejects_unnormalized_keys():
    df = pd.DataFrame({"county_fips": ["1001"]})
    lookup = pd.DataFrame({"county_fips": ["01001"], "state_name": ["Alabama"]})
    with pytest.raises(ValueError, match="not 5 characters"):
        join_state(df, lookup)


# --- build_usgs_table / join_usgs ---


def test_build_usgs_table(project):
    usgs = build_usgs_table(project)
    assert set(usgs["county_fips"]) == {"01001", "48201"}
    ir = usgs[(usgs["county_fips"] == "01001") & (usgs["category"] == "Irrigation")].iloc[0]
    assert ir["total"] == pytest.approx(mgal_to_km3(30.0))
    assert np.isnan(ir["reclaimed"])


def test_join_usgs_matches_year(project):
    wide = build_iwu_wide(build_iwu_long(project))
    out = join_usgs(wide, build_usgs_table(project))
    assert len(out) == 3 * 2
    row = out[(out["county_fips"] == "48201") & (out["year"] == 2015)].iloc[0]
    assert row["usgs_total"] == pytest.approx(mgal_to_km3(3.0))
    assert row["sw"] == pytest.approx(sum(_value("sw", 1, j, 2015) for j in range(20)))
    # no USGS estimate for 2016 or for Los Angeles
    assert out.loc[out["year"] == 2016, "usgs_total"].isna().all()
    assert out.loc[out["county_fips"] == "06037", "usgs_total"].isna().all()


def test_join_usgs_unknown_category_raises(project):
    wide = build_iwu_wide(build_iwu_long(project))
    with pytest.raises(ValueError, match="No USGS rows for category 'Mining'"):
        join_usgs(wide, build_usgs_table(project), category="Mining")


# --- build_all / write_outputs ---


def test_build_all_tables(project):
    tables = build_all(project)
    assert set(tables) == {
        "fips_state", "iwu_long", "iwu_wide", "crop_annual_avg",
        "by_year", "by_state_year", "usgs_wide", "iwu_usgs_county",
    }
    assert "state_name" in tables["iwu_long"].columns
    assert len(tables["crop_annual_avg"]) == 20
    assert sorted(tables["by_state_year"]["state_name"].unique()) == ["Alabama", "California", "Texas"]


def test_build_all_skip_usgs(project):
    tables = build_all(project, include_usgs=False)
    assert "usgs_wide" not in tables


def test_write_outputs(tmp_path):
    tables = {
        "iwu_long": pd.DataFrame({"county_fips": ["01001"], "value": [1.0]}),
        "extra": pd.DataFrame({"a": [1]}),
    }
    written = write_outputs(tables, tmp_path / "processed")
    assert written["iwu_long"].name == "iwu_full_long.csv"
    assert written["extra"].name == "extra.csv"
    back = pd.read_csv(written["iwu_long"], dtype={"county_fips": str})
    assert back["county_fips"].tolist() == ["01001"]
