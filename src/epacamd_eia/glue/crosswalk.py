"""Build the EPA CAMD to EIA-860 crosswalk.

The crosswalk connects the boilers and emissions units reported to EPA's Clean Air
Markets Division (CAMD) with the generators reported on EIA Form 860. Both agencies
use (nearly) the same plant IDs, but the generator IDs within each plant are free text
that has drifted apart over the years. See :mod:`epacamd_eia.glue.cascade` for how the
generator IDs are reconciled.

The steps are:

* Correct the EIA plant IDs that are known to differ from CAMD's.
* Keep only the CAMD units that were active at some point during the report year.
* Run the matching cascade.
* Label the CAMD units that no phase could match with the reason they're unmatched.
* Stack everything into a single table with one ``match_type`` per row.

Every eligible CAMD unit appears in the crosswalk at least once. Units that match more
than one EIA generator in the same phase appear once per match.
"""

from collections.abc import Iterable

import pandas as pd

import epacamd_eia.logging_helpers
from epacamd_eia.constants import (
    CROSSWALK_AUDIT_COLS,
    EIA860_GENERATOR_COLS,
    EPACAMD_UNIT_COLS,
    EXCLUDED_FUEL_CATEGORIES,
    NON_GRID_PLANT_ID_PATTERN,
    OPERATING_STATUSES,
    RETIRED_STATUSES,
    MatchType,
)
from epacamd_eia.glue.cascade import run_cascade
from epacamd_eia.glue.plant_ids import correct_plant_ids, validate_corrections
from epacamd_eia.helpers import organize_cols, simplify_strings
from epacamd_eia.settings import ConfigurationError
from epacamd_eia.validate import validate_table

logger = epacamd_eia.logging_helpers.get_logger(__name__)


def filter_eligible_units(units: pd.DataFrame, report_year: int) -> pd.DataFrame:
    """Select the CAMD units that were active at some point during the report year.

    A unit is eligible if it is operating and started operating before the report
    year began, or if it is retired (or in long-term cold standby) and changed status
    on or after the last day of the previous year.

    Args:
        units: CAMD units with ``operating_status_epa`` and
            ``operating_status_date_epa`` columns.
        report_year: The year the crosswalk describes.

    Returns:
        The eligible subset of ``units``.
    """
    status = simplify_strings(units.operating_status_epa)
    status_date = pd.to_datetime(units.operating_status_date_epa)
    operating = status.isin(OPERATING_STATUSES) & (
        status_date < pd.Timestamp(year=report_year, month=1, day=1)
    )
    recently_retired = status.isin(RETIRED_STATUSES) & (
        status_date >= pd.Timestamp(year=report_year - 1, month=12, day=31)
    )
    eligible = (operating | recently_retired).fillna(False).astype(bool)
    logger.info(
        f"Found {eligible.sum()} of {len(units)} CAMD units active in {report_year}."
    )
    return units.loc[eligible]


def classify_unmatched(
    units: pd.DataFrame, non_grid_plant_id_pattern: str = NON_GRID_PLANT_ID_PATTERN
) -> pd.DataFrame:
    """Label the CAMD units that no phase of the cascade could match.

    * Units at plants whose ID matches ``non_grid_plant_id_pattern`` aren't connected
      to the grid, and so don't report to EIA-860.
    * Units with no generator ID can't be matched by any phase.
    * Everything else is simply unmatched.

    No further matching is attempted.
    """
    plant_ids = units.plant_id_epa.astype("string")
    not_grid_connected = (
        plant_ids.str.match(non_grid_plant_id_pattern)
        .fillna(False)
        .astype(bool)
    )
    no_identifier = (
        units.generator_id_epa.astype("string").str.strip().fillna("").eq("")
    )
    match_type = pd.Series(MatchType.UNMATCHED, index=units.index, dtype=object)
    match_type.loc[no_identifier] = MatchType.NO_IDENTIFIER
    match_type.loc[not_grid_connected] = MatchType.NOT_GRID_CONNECTED
    out_df = units.assign(match_type=match_type)
    for label, count in out_df.match_type.value_counts().items():
        logger.info(f"{count} CAMD units labeled {label}")
    return out_df


def assemble_crosswalk(
    matches: Iterable[pd.DataFrame], unmatched: pd.DataFrame
) -> pd.DataFrame:
    """Stack the matches from every phase and the classified leftover units.

    The matches are concatenated in the order given (the cascade's phase order),
    followed by the unmatched units. No deduplication is performed.

    Args:
        matches: Matched pairs from each phase, in order.
        unmatched: CAMD units labeled by :func:`classify_unmatched`.

    Returns:
        The crosswalk, with CAMD columns first, then EIA columns, then the columns
        describing how each row was matched.
    """
    unmatched = unmatched.reset_index().assign(
        plant_id_changed_flag=pd.NA, n_matches_epa=0, n_matches_eia=0
    )
    frames = [df for df in [*matches, unmatched] if not df.empty] or [unmatched]
    all_cols = EPACAMD_UNIT_COLS + EIA860_GENERATOR_COLS + CROSSWALK_AUDIT_COLS
    crosswalk = (
        pd.concat(frames, ignore_index=True)
        .drop(columns=["record_id_epa", "record_id_eia"], errors="ignore")
        .pipe(lambda df: df.reindex(columns=df.columns.union(all_cols, sort=False)))
        .pipe(organize_cols, all_cols)
        .astype(
            {
                "plant_id_changed_flag": "boolean",
                "match_type": "string",
                "n_matches_epa": "Int64",
                "n_matches_eia": "Int64",
            }
        )
    )
    return crosswalk


def build_crosswalk(
    units: pd.DataFrame,
    generators: pd.DataFrame,
    corrections: pd.DataFrame,
    report_year: int | None,
    non_grid_plant_id_pattern: str = NON_GRID_PLANT_ID_PATTERN,
    excluded_fuel_categories: Iterable[str] = EXCLUDED_FUEL_CATEGORIES,
) -> dict[str, pd.DataFrame]:
    """Link CAMD units to EIA-860 generators.

    Args:
        units: The raw CAMD unit table.
        generators: The raw EIA-860 generator table.
        corrections: EIA plant IDs that should be replaced with CAMD plant IDs.
        report_year: The year the crosswalk describes.
        non_grid_plant_id_pattern: Regex identifying plants that aren't grid connected.
        excluded_fuel_categories: EIA fuel categories to drop after the exact phase.

    Returns:
        A dictionary containing the crosswalk and a per-phase summary of the matching.

    Raises:
        ConfigurationError: if the report year is missing or the plant ID correction
            table is malformed.
        SchemaError: if any input table is missing a required column.
    """
    if report_year is None:
        raise ConfigurationError("A report year is required to build the crosswalk.")
    validate_corrections(corrections)
    corrections = validate_table(corrections, "raw_glue__plant_id_corrections")
    units = validate_table(units, "raw_epacamd__units")
    generators = validate_table(generators, "raw_eia860__generators")

    logger.info(f"Building the EPA CAMD to EIA-860 crosswalk for {report_year}")
    cascade = run_cascade(
        units=filter_eligible_units(units, report_year),
        generators=correct_plant_ids(generators, corrections),
        excluded_fuel_categories=excluded_fuel_categories,
    )
    crosswalk = assemble_crosswalk(
        cascade.matches.values(),
        classify_unmatched(cascade.unmatched_epa, non_grid_plant_id_pattern),
    )
    return {
        "core_epacamd_eia__crosswalk": crosswalk,
        "core_epacamd_eia__phase_summary": cascade.summary,
    }
