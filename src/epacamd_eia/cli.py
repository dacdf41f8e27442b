"""A command line interface (CLI) for building the EPA CAMD to EIA-860 crosswalk."""

import pathlib
import sys

import click
from dagster import materialize_to_memory

import epacamd_eia.logging_helpers
from epacamd_eia.etl import default_assets
from epacamd_eia.etl.glue_assets import CROSSWALK_TABLES
from epacamd_eia.load import write_crosswalk
from epacamd_eia.settings import ConfigurationError, CrosswalkSettings

logger = epacamd_eia.logging_helpers.get_logger(__name__)


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.argument(
    "settings_yml",
    type=click.Path(
        exists=True,
        dir_okay=False,
        resolve_path=True,
        path_type=pathlib.Path,
    ),
)
@click.option(
    "--output",
    "output_path",
    default=None,
    help="Where to write the crosswalk (.csv or .xlsx). Overrides the settings file.",
    type=click.Path(
        exists=False,
        dir_okay=False,
        resolve_path=True,
        path_type=pathlib.Path,
    ),
)
@click.option(
    "--logfile",
    help="If specified, write logs to this file.",
    type=click.Path(
        exists=False,
        resolve_path=True,
        path_type=pathlib.Path,
    ),
)
@click.option(
    "--loglevel",
    default="INFO",
    type=click.Choice(
        ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False
    ),
)
def epacamd_eia_crosswalk(
    settings_yml: pathlib.Path,
    output_path: pathlib.Path | None,
    logfile: pathlib.Path | None,
    loglevel: str,
):
    """Build the EPA CAMD to EIA-860 crosswalk described by SETTINGS_YML."""
    epacamd_eia.logging_helpers.configure_root_logger(
        logfile=logfile, loglevel=loglevel.upper()
    )
    settings = CrosswalkSettings.from_yaml(settings_yml)
    if output_path is not None:
        settings = CrosswalkSettings.from_dict(
            settings.model_dump() | {"output_path": output_path}
        )
    if settings.output_path is None:
        raise ConfigurationError("No output path given in settings or on the CLI.")

    result = materialize_to_memory(
        default_assets,
        resources={"crosswalk_settings": settings},
    )
    crosswalk, summary = (
        result.output_for_node("core_epacamd_eia", table_name)
        for table_name in CROSSWALK_TABLES
    )
    write_crosswalk(crosswalk, summary, settings.output_path)
    logger.info(
        f"Crosswalk for {settings.report_year} written to {settings.output_path}"
    )


def main():
    """Run the crosswalk CLI."""
    return epacamd_eia_crosswalk()


if __name__ == "__main__":
    sys.exit(main())
