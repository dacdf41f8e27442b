"""EPA CAMD and EIA-860 crosswalk assets."""

import pandas as pd
from dagster import AssetOut, Output, asset, multi_asset

import epacamd_eia.logging_helpers
from epacamd_eia.extract import extract_table
from epacamd_eia.glue.crosswalk import build_crosswalk
from epacamd_eia.settings import ConfigurationError, CrosswalkInputs

logger = epacamd_eia.logging_helpers.get_logger(__name__)

CROSSWALK_TABLES: list[str] = [
    "core_epacamd_eia__crosswalk",
    "core_epacamd_eia__phase_summary",
]
"""Tables produced by the crosswalk, in the order they're emitted."""


def _inputs(context) -> CrosswalkInputs:
    """Look up the input file locations, which are required to run the assets."""
    inputs = context.resources.crosswalk_settings.inputs
    if inputs is None:
        raise ConfigurationError("Crosswalk settings don't specify any input files.")
    return inputs


@asset(required_resource_keys={"crosswalk_settings"})
def raw_epacamd__units(context) -> pd.DataFrame:
    """Extract the CAMD boiler and emissions unit inventory."""
    return extract_table(_inputs(context).epa_units, "raw_epacamd__units")


@asset(required_resource_keys={"crosswalk_settings"})
def raw_eia860__generators(context) -> pd.DataFrame:
    """Extract the EIA-860 generator inventory."""
    return extract_table(_inputs(context).eia_generators, "raw_eia860__generators")


@asset(required_resource_keys={"crosswalk_settings"})
def raw_glue__plant_id_corrections(context) -> pd.DataFrame:
    """Extract the known EIA to CAMD plant ID corrections."""
    return extract_table(
        _inputs(context).plant_id_corrections, "raw_glue__plant_id_corrections"
    )


@multi_asset(
    outs={table_name: AssetOut() for table_name in CROSSWALK_TABLES},
    required_resource_keys={"crosswalk_settings"},
)
def core_epacamd_eia(
    context,
    raw_epacamd__units: pd.DataFrame,
    raw_eia860__generators: pd.DataFrame,
    raw_glue__plant_id_corrections: pd.DataFrame,
):
    """Link the CAMD units to EIA-860 generators.

    Args:
        context: dagster keyword that provides access to resources and config.
        raw_epacamd__units: The CAMD unit inventory.
        raw_eia860__generators: The EIA-860 generator inventory.
        raw_glue__plant_id_corrections: Known EIA to CAMD plant ID corrections.

    Yields:
        The crosswalk and its per-phase summary.
    """
    settings = context.resources.crosswalk_settings
    crosswalk_dfs = build_crosswalk(
        units=raw_epacamd__units,
        generators=raw_eia860__generators,
        corrections=raw_glue__plant_id_corrections,
        report_year=settings.report_year,
        non_grid_plant_id_pattern=settings.non_grid_plant_id_pattern,
        excluded_fuel_categories=settings.excluded_fuel_categories,
    )
    for table_name in CROSSWALK_TABLES:
        yield Output(output_name=table_name, value=crosswalk_dfs[table_name])
