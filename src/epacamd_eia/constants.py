"""Constants shared by the EPA CAMD to EIA-860 crosswalk."""

from enum import StrEnum, unique


@unique
class MatchType(StrEnum):
    """Provenance labels attached to every row of the crosswalk.

    The ``Step`` labels name the cascade phase that produced a match. The remaining
    labels are reasons assigned to CAMD units that no phase could match.
    """

    STEP_1 = "Step 1"
    STEP_2A = "Step 2a"
    STEP_2B = "Step 2b"
    STEP_2C = "Step 2c"
    STEP_2D = "Step 2d"
    STEP_2E = "Step 2e"
    STEP_2F = "Step 2f"
    NOT_GRID_CONNECTED = "not grid-connected"
    NO_IDENTIFIER = "no identifier present"
    UNMATCHED = "unmatched"


UNMATCHED_TYPES: tuple[MatchType, ...] = (
    MatchType.NOT_GRID_CONNECTED,
    MatchType.NO_IDENTIFIER,
    MatchType.UNMATCHED,
)
"""Labels for CAMD units left over after the last cascade phase."""

EPACAMD_UNIT_COLS: list[str] = [
    "plant_id_epa",
    "emissions_unit_id_epa",
    "generator_id_epa",
    "state",
    "latitude",
    "longitude",
    "plant_name_epa",
    "fuel_type_primary_epa",
    "capacity_mw_epa",
    "operating_status_epa",
    "operating_status_date_epa",
]
"""Columns describing a single CAMD boiler / emissions unit."""

EIA860_GENERATOR_COLS: list[str] = [
    "plant_id_eia",
    "plant_id_eia_original",
    "generator_id_eia",
    "state_eia",
    "plant_name_eia",
    "prime_mover_code",
    "fuel_category_eia",
    "capacity_mw_eia",
    "latitude_eia",
    "longitude_eia",
]
"""Columns describing a single EIA-860 generator, after plant ID correction."""

CROSSWALK_AUDIT_COLS: list[str] = [
    "plant_id_changed_flag",
    "match_type",
    "n_matches_epa",
    "n_matches_eia",
]
"""Columns appended by the crosswalk to describe how each row was produced."""

ID_COLS: list[str] = [
    "plant_id_epa",
    "emissions_unit_id_epa",
    "generator_id_epa",
    "plant_id_eia",
    "plant_id_eia_original",
    "generator_id_eia",
]
"""Identifier columns that must always be read and written as literal text."""

OPERATING_STATUSES: frozenset[str] = frozenset({"operating", "opr"})
"""Simplified CAMD operating status values for units in service."""

RETIRED_STATUSES: frozenset[str] = frozenset(
    {
        "retired",
        "ret",
        "long-term cold standby",
        "long-term cold storage",
        "ltcs",
    }
)
"""Simplified CAMD operating status values for retired or mothballed units."""

EXCLUDED_FUEL_CATEGORIES: list[str] = [
    "biomass",
    "geothermal",
    "municipal solid waste",
    "purchased power",
    "solar",
    "landfill gas",
    "tire-derived fuel",
    "hydro",
    "wind",
    "nuclear",
]
"""EIA fuel categories that are very unlikely to have a counterpart in CAMD.

CAMD covers fossil fuel fired combustion units. Generators using these fuels are
dropped from the EIA pool before the fuzzy phases of the cascade begin.
"""

NON_GRID_PLANT_ID_PATTERN: str = r"^88\d{4}$"
"""Plant IDs in the 88xxxx block are assigned to facilities that aren't grid connected."""
