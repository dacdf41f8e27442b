"""PyTest configuration module.

Defines useful fixtures for testing the crosswalk. The sample inventories are built so
that each phase of the cascade matches at least one CAMD unit, and each of the reasons
for remaining unmatched is represented.
"""

import logging
from pathlib import Path

import pandas as pd
import pytest

from epacamd_eia.settings import CrosswalkSettings

logger = logging.getLogger(__name__)

REPORT_YEAR = 2021

UNIT_RECORDS = [
    # plant, unit, generator, status, status date, primary fuel
    (1001, "U1", "1", "Operating", "2000-01-01", "Pipeline Natural Gas"),
    (1001, "U14", "UN14", "Operating", "2000-01-01", "Coal"),
    (1001, "U2", "02", "Operating", "2020-12-31", "Coal"),
    (1001, "U6", "NO.6", "Retired", "2020-12-31", "Coal"),
    (1001, "U7", "7-STG", "Long-term Cold Standby", "2021-06-01", "Natural Gas"),
    (1001, "U8", "PFL6A", "Operating", "2000-01-01", "Diesel Oil"),
    (1001, "U9", "MGS1A", "Operating", "2000-01-01", "Natural Gas"),
    (1001, "OLD", "3", "Retired", "2015-06-01", "Coal"),
    (1001, "NEW", "4", "Operating", "2021-03-01", "Natural Gas"),
    (880001, "A", "CT1", "Operating", "2000-01-01", "Natural Gas"),
    (2002, "B", None, "Operating", "2000-01-01", "Coal"),
    (3003, "C", "GT5", "Operating", "2000-01-01", "Natural Gas"),
    (4004, "D", "CT1", "Operating", "2000-01-01", "Natural Gas"),
]

GENERATOR_RECORDS = [
    # plant, generator, prime mover, fuel category
    (1001, "1", "CT", "natural gas"),
    (9001, "un14", "ST", "coal"),
    (1001, "2", "ST", "coal"),
    (1001, "6", "ST", "coal"),
    (1001, "7S", "CA", "natural gas"),
    (1001, "6A", "IC", "petroleum"),
    (1001, "MGS1", "GT", "natural gas"),
    (2002, "1", "ST", "coal"),
    (3003, "5", "WT", "Wind"),
    (4004, "1A", "GT", "natural gas"),
    (4004, "1B", "GT", "natural gas"),
]


def _make_units(records: list[tuple]) -> pd.DataFrame:
    """Build a CAMD unit table with all of the required columns."""
    units = pd.DataFrame(
        records,
        columns=[
            "plant_id_epa",
            "emissions_unit_id_epa",
            "generator_id_epa",
            "operating_status_epa",
            "operating_status_date_epa",
            "fuel_type_primary_epa",
        ],
    )
    return units.assign(
        state="CO",
        latitude=39.7,
        longitude=-105.0,
        plant_name_epa=lambda df: "Plant " + df.plant_id_epa.astype(str),
        capacity_mw_epa=100.0,
        operating_status_date_epa=lambda df: pd.to_datetime(
            df.operating_status_date_epa
        ),
    ).astype({"generator_id_epa": "string", "emissions_unit_id_epa": "string"})


def _make_generators(records: list[tuple]) -> pd.DataFrame:
    """Build an EIA-860 generator table with all of the required columns."""
    generators = pd.DataFrame(
        records,
        columns=[
            "plant_id_eia",
            "generator_id_eia",
            "prime_mover_code",
            "fuel_category_eia",
        ],
    )
    return generators.assign(
        state_eia="CO",
        plant_name_eia=lambda df: "Plant " + df.plant_id_eia.astype(str),
        capacity_mw_eia=50.0,
        latitude_eia=39.7,
        longitude_eia=-105.0,
    ).astype({"generator_id_eia": "string"})


@pytest.fixture
def make_units():
    """Build CAMD unit tables from abbreviated records."""
    return _make_units


@pytest.fixture
def make_generators():
    """Build EIA-860 generator tables from abbreviated records."""
    return _make_generators


@pytest.fixture
def units() -> pd.DataFrame:
    """A small CAMD unit inventory."""
    return _make_units(UNIT_RECORDS)


@pytest.fixture
def generators() -> pd.DataFrame:
    """A small EIA-860 generator inventory."""
    return _make_generators(GENERATOR_RECORDS)


@pytest.fixture
def corrections() -> pd.DataFrame:
    """EIA plant 9001 is really CAMD plant 1001."""
    return pd.DataFrame({"plant_id_eia": [9001], "plant_id_epa": [1001]})


@pytest.fixture
def report_year() -> int:
    """The year the sample inventories describe."""
    return REPORT_YEAR


@pytest.fixture
def input_csvs(
    tmp_path: Path,
    units: pd.DataFrame,
    generators: pd.DataFrame,
    corrections: pd.DataFrame,
) -> dict[str, Path]:
    """Write the sample inventories out to CSV files."""
    paths = {
        "epa_units": tmp_path / "units.csv",
        "eia_generators": tmp_path / "generators.csv",
        "plant_id_corrections": tmp_path / "corrections.csv",
    }
    units.to_csv(paths["epa_units"], index=False)
    generators.to_csv(paths["eia_generators"], index=False)
    corrections.to_csv(paths["plant_id_corrections"], index=False)
    return paths


@pytest.fixture
def settings_yml(tmp_path: Path, input_csvs: dict[str, Path]) -> Path:
    """A settings file pointing at the sample inventories, using relative paths."""
    path = tmp_path / "crosswalk.yml"
    path.write_text(
        f"""
report_year: {REPORT_YEAR}
inputs:
  epa_units: {input_csvs["epa_units"].name}
  eia_generators: {input_csvs["eia_generators"].name}
  plant_id_corrections: {input_csvs["plant_id_corrections"].name}
output_path: output/crosswalk.csv
"""
    )
    return path


@pytest.fixture
def crosswalk_settings(settings_yml: Path) -> CrosswalkSettings:
    """Validated settings for building the sample crosswalk."""
    return CrosswalkSettings.from_yaml(settings_yml)
