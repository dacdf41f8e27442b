"""Dagster definitions for the crosswalk ETL."""

from dagster import (
    Definitions,
    define_asset_job,
    load_assets_from_modules,
    mem_io_manager,
)

import epacamd_eia.logging_helpers
from epacamd_eia.resources import crosswalk_settings

from . import glue_assets

logger = epacamd_eia.logging_helpers.get_logger(__name__)

default_assets = load_assets_from_modules([glue_assets], group_name="epacamd_eia")

default_resources = {
    "crosswalk_settings": crosswalk_settings,
    "io_manager": mem_io_manager,
}

defs: Definitions = Definitions(
    assets=default_assets,
    resources=default_resources,
    jobs=[
        define_asset_job(
            name="crosswalk_job",
            description="Build the EPA CAMD to EIA-860 crosswalk.",
        ),
    ],
)
"""A collection of dagster assets, resources and jobs that build the crosswalk."""
