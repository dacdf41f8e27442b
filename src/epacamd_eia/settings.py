"""Module for validating crosswalk settings."""

import re
from pathlib import Path
from typing import Self

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

import epacamd_eia.logging_helpers
from epacamd_eia.constants import EXCLUDED_FUEL_CATEGORIES, NON_GRID_PLANT_ID_PATTERN

logger = epacamd_eia.logging_helpers.get_logger(__name__)


class ConfigurationError(ValueError):
    """Raised when the crosswalk can't run with the configuration it was given.

    This covers a missing or invalid report year, an unreadable settings file, and a
    malformed plant ID correction table. It is always raised before any matching
    takes place.
    """


class FrozenBaseModel(BaseModel):
    """BaseModel with global configuration."""

    model_config: ConfigDict = ConfigDict(frozen=True, extra="forbid")


class CrosswalkInputs(FrozenBaseModel):
    """Locations of the already-shaped input tables."""

    epa_units: Path
    """Delimited file containing the CAMD boiler / emissions unit inventory."""

    eia_generators: Path
    """Delimited file containing the EIA-860 generator inventory."""

    plant_id_corrections: Path
    """Delimited file mapping EIA plant IDs to the CAMD plant IDs they should take."""


class CrosswalkSettings(FrozenBaseModel):
    """An immutable pydantic model to validate crosswalk settings."""

    report_year: int
    """The year the crosswalk describes. Units must have been active during it."""

    inputs: CrosswalkInputs | None = None
    """Where to find the input tables when running the full job."""

    output_path: Path | None = None
    """Where to write the crosswalk. Must end in ``.csv`` or ``.xlsx``."""

    non_grid_plant_id_pattern: str = NON_GRID_PLANT_ID_PATTERN
    """Regular expression matching plant IDs of facilities that aren't grid connected."""

    excluded_fuel_categories: list[str] = EXCLUDED_FUEL_CATEGORIES
    """EIA fuel categories removed before the fuzzy phases of the cascade."""

    @field_validator("report_year")
    @classmethod
    def check_report_year(cls, report_year: int) -> int:
        """Make sure the report year is plausible for the CAMD inventory."""
        if not 1995 <= report_year <= 2100:
            raise ValueError(f"Report year {report_year} is outside of 1995-2100.")
        return report_year

    @field_validator("non_grid_plant_id_pattern")
    @classmethod
    def check_pattern(cls, pattern: str) -> str:
        """Make sure the non-grid plant ID pattern is a valid regular expression."""
        try:
            re.compile(pattern)
        except re.error as err:
            raise ValueError(f"Invalid non-grid plant ID pattern {pattern!r}") from err
        return pattern

    @field_validator("excluded_fuel_categories")
    @classmethod
    def simplify_fuel_categories(cls, categories: list[str]) -> list[str]:
        """Lowercase and deduplicate the excluded fuel categories."""
        if not categories:
            raise ValueError("At least one excluded fuel category is required.")
        return sorted({" ".join(cat.lower().split()) for cat in categories})

    @field_validator("output_path")
    @classmethod
    def check_output_suffix(cls, output_path: Path | None) -> Path | None:
        """Only CSV and Excel outputs are supported."""
        if output_path is not None and output_path.suffix not in {".csv", ".xlsx"}:
            raise ValueError(
                f"Output path {output_path} must end in either .csv or .xlsx"
            )
        return output_path

    @classmethod
    def from_dict(cls, settings: dict) -> Self:
        """Validate a dictionary of settings, raising ConfigurationError on failure."""
        try:
            return cls.model_validate(settings)
        except ValidationError as err:
            raise ConfigurationError(f"Invalid crosswalk settings:\n{err}") from err

    @classmethod
    def from_yaml(cls, path: str | Path) -> Self:
        """Create a CrosswalkSettings object from a yaml_file path.

        Relative input and output paths are interpreted relative to the directory
        containing the settings file.

        Args:
            path: path to a yaml file.

        Returns:
            A validated CrosswalkSettings object.
        """
        path = Path(path)
        try:
            with path.open() as f:
                yaml_file = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as err:
            raise ConfigurationError(f"Unable to read settings from {path}") from err
        if not isinstance(yaml_file, dict):
            raise ConfigurationError(f"Settings file {path} must contain a mapping.")

        base_dir = path.parent
        if isinstance(yaml_file.get("inputs"), dict):
            yaml_file["inputs"] = {
                name: (
                    base_dir / input_path if isinstance(input_path, str) else input_path
                )
                for name, input_path in yaml_file["inputs"].items()
            }
        if isinstance(yaml_file.get("output_path"), str):
            yaml_file["output_path"] = base_dir / yaml_file["output_path"]
        logger.info(f"Loading crosswalk settings from {path}")
        return cls.from_dict(yaml_file)
