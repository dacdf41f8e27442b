"""Collection of Dagster resources for the crosswalk."""

from dagster import Field, resource

from epacamd_eia.settings import CrosswalkSettings


@resource(
    config_schema={
        "settings_yml": Field(
            str,
            description="Path to the YAML file describing the crosswalk to build.",
        ),
    },
)
def crosswalk_settings(init_context) -> CrosswalkSettings:
    """Dagster resource for parameterizing the crosswalk assets.

    This resource allows us to choose the report year and input files for a run
    from the Dagster UI.
    """
    return CrosswalkSettings.from_yaml(init_context.resource_config["settings_yml"])
