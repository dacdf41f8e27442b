"""Tests for settings validation."""

from importlib.resources import files
from pathlib import Path
from typing import Self

import pytest
from dagster import DagsterInvalidConfigError, build_init_resource_context

from epacamd_eia.resources import crosswalk_settings
from epacamd_eia.settings import ConfigurationError, CrosswalkSettings


class TestCrosswalkSettings:
    """Test CrosswalkSettings validation."""

    def test_defaults(self: Self):
        """Only the report year is required."""
        settings = CrosswalkSettings(report_year=2021)
        assert settings.inputs is None
        assert settings.output_path is None
        assert "wind" in settings.excluded_fuel_categories

    @pytest.mark.parametrize("report_year", [1901, 2200])
    def test_implausible_report_year(self: Self, report_year: int):
        """Report years outside of the CAMD era are rejected."""
        with pytest.raises(ConfigurationError):
            CrosswalkSettings.from_dict({"report_year": report_year})

    def test_missing_report_year(self: Self):
        """The report year can't be left out."""
        with pytest.raises(ConfigurationError, match="report_year"):
            CrosswalkSettings.from_dict({})

    def test_unknown_field(self: Self):
        """Misspelled settings are errors, not silently ignored."""
        with pytest.raises(ConfigurationError):
            CrosswalkSettings.from_dict({"report_year": 2021, "reportyear": 2022})

    def test_bad_output_suffix(self: Self):
        """Only CSV and Excel outputs are supported."""
        with pytest.raises(ConfigurationError):
            CrosswalkSettings.from_dict(
                {"report_year": 2021, "output_path": "crosswalk.parquet"}
            )

    def test_bad_pattern(self: Self):
        """The non-grid plant ID pattern must compile."""
        with pytest.raises(ConfigurationError):
            CrosswalkSettings.from_dict(
                {"report_year": 2021, "non_grid_plant_id_pattern": "^88(\\d{4}$"}
            )

    def test_fuel_categories_are_simplified(self: Self):
        """Fuel categories are lowercased, compacted and deduplicated."""
        settings = CrosswalkSettings.from_dict(
            {
                "report_year": 2021,
                "excluded_fuel_categories": ["Wind", " wind ", "Landfill  Gas"],
            }
        )
        assert settings.excluded_fuel_categories == ["landfill gas", "wind"]

    def test_empty_fuel_categories(self: Self):
        """Excluding nothing at all is more likely a mistake than a choice."""
        with pytest.raises(ConfigurationError):
            CrosswalkSettings.from_dict(
                {"report_year": 2021, "excluded_fuel_categories": []}
            )

    def test_frozen(self: Self):
        """Settings can't be changed once validated."""
        settings = CrosswalkSettings(report_year=2021)
        with pytest.raises(ValueError):
            settings.report_year = 2022


class TestSettingsFromYaml:
    """Test reading settings from YAML files."""

    def test_relative_paths(self: Self, settings_yml: Path):
        """Relative paths are interpreted relative to the settings file."""
        settings = CrosswalkSettings.from_yaml(settings_yml)
        assert settings.report_year == 2021
        assert settings.inputs.epa_units == settings_yml.parent / "units.csv"
        assert settings.output_path == settings_yml.parent / "output" / "crosswalk.csv"

    def test_missing_file(self: Self, tmp_path: Path):
        """A settings file that doesn't exist is a configuration error."""
        with pytest.raises(ConfigurationError):
            CrosswalkSettings.from_yaml(tmp_path / "nope.yml")

    def test_not_a_mapping(self: Self, tmp_path: Path):
        """The settings file must contain a mapping."""
        path = tmp_path / "list.yml"
        path.write_text("- 2021\n- 2022\n")
        with pytest.raises(ConfigurationError):
            CrosswalkSettings.from_yaml(path)

    def test_invalid_yaml(self: Self, tmp_path: Path):
        """Unparseable YAML is a configuration error."""
        path = tmp_path / "broken.yml"
        path.write_text("report_year: [2021\n")
        with pytest.raises(ConfigurationError):
            CrosswalkSettings.from_yaml(path)

    def test_packaged_settings(self: Self):
        """The example settings distributed with the package are valid."""
        path = files("epacamd_eia.package_data.settings") / "crosswalk.yml"
        settings = CrosswalkSettings.from_yaml(Path(str(path)))
        assert settings.report_year == 2021
        assert settings.output_path.suffix == ".xlsx"


class TestCrosswalkSettingsResource:
    """Test the crosswalk settings dagster resource."""

    def test_resource(self: Self, settings_yml: Path):
        """The resource loads the settings file it is pointed at."""
        init_context = build_init_resource_context(
            config={"settings_yml": str(settings_yml)}
        )
        settings = crosswalk_settings(init_context)
        assert isinstance(settings, CrosswalkSettings)
        assert settings.report_year == 2021

    def test_missing_config(self: Self):
        """The resource requires a settings file."""
        with pytest.raises(DagsterInvalidConfigError):
            crosswalk_settings(build_init_resource_context(config={}))
