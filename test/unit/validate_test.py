"""Tests for the input table schemas."""

import pandas as pd
import pandera as pr
import pytest

from epacamd_eia.validate import TABLE_SCHEMAS, SchemaError, validate_table


def test_unit_ids_stay_text(units):
    """Generator IDs that look like numbers are still strings after validation."""
    validated = validate_table(units, "raw_epacamd__units")
    assert validated.generator_id_epa.dtype == pd.StringDtype()
    assert "02" in set(validated.generator_id_epa.dropna())
    assert validated.plant_id_epa.dtype == pd.Int64Dtype()


def test_plant_ids_are_coerced(generators):
    """Plant IDs read as floats are coerced to nullable integers."""
    validated = validate_table(
        generators.astype({"plant_id_eia": float}), "raw_eia860__generators"
    )
    assert validated.plant_id_eia.dtype == pd.Int64Dtype()
    assert 9001 in set(validated.plant_id_eia)


def test_extra_columns_pass_through(generators):
    """Columns that aren't part of the schema are left alone."""
    validated = validate_table(
        generators.assign(notes="hello"), "raw_eia860__generators"
    )
    assert (validated.notes == "hello").all()


@pytest.mark.parametrize(
    "table_name,drop_cols",
    [
        ("raw_epacamd__units", ["generator_id_epa"]),
        ("raw_epacamd__units", ["plant_id_epa", "operating_status_epa"]),
        ("raw_eia860__generators", ["fuel_category_eia"]),
    ],
)
def test_missing_columns(units, generators, table_name, drop_cols):
    """Missing columns are reported by name."""
    df = units if table_name == "raw_epacamd__units" else generators
    with pytest.raises(SchemaError) as err:
        validate_table(df.drop(columns=drop_cols), table_name)
    assert err.value.table_name == table_name
    assert err.value.missing_cols == sorted(drop_cols)


def test_uncoercible_values(generators):
    """Values that can't be coerced are schema errors, not missing columns."""
    with pytest.raises(pr.errors.SchemaErrors):
        validate_table(
            generators.assign(plant_id_eia="not a plant"), "raw_eia860__generators"
        )


def test_null_plant_ids_rejected(units):
    """Every CAMD unit must belong to a plant."""
    with pytest.raises(pr.errors.SchemaErrors):
        validate_table(
            units.assign(plant_id_epa=pd.NA).astype({"plant_id_epa": "Int64"}),
            "raw_epacamd__units",
        )


def test_table_names():
    """Every input table has a schema."""
    assert set(TABLE_SCHEMAS) == {
        "raw_epacamd__units",
        "raw_eia860__generators",
        "raw_glue__plant_id_corrections",
    }
