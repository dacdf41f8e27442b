"""Schemas and checks for the tables handed to the crosswalk.

Every table the cascade consumes is validated against a :mod:`pandera` model before
any matching happens. Validation also coerces the columns to the dtypes the cascade
relies on: plant IDs become nullable integers, generator and unit IDs become nullable
strings (never numbers), and status dates become datetimes.
"""

import pandas as pd
import pandera as pr
from pandera import DataFrameModel, Field
from pandera.typing import Series

import epacamd_eia.logging_helpers

logger = epacamd_eia.logging_helpers.get_logger(__name__)


class SchemaError(ValueError):
    """Exception raised when an input table is missing required columns."""

    def __init__(self, message: str, table_name: str, missing_cols: list[str]):
        """Initialize the SchemaError with the offending table and columns."""
        super().__init__(message)
        self.table_name = table_name
        self.missing_cols = missing_cols


class EpaCamdUnits(DataFrameModel):
    """Boilers and emissions units reported to EPA CAMD."""

    plant_id_epa: Series[pd.Int64Dtype] = Field(coerce=True)
    emissions_unit_id_epa: Series[pd.StringDtype] = Field(coerce=True)
    generator_id_epa: Series[pd.StringDtype] = Field(coerce=True, nullable=True)
    state: Series[pd.StringDtype] = Field(coerce=True, nullable=True)
    latitude: Series[float] = Field(coerce=True, nullable=True)
    longitude: Series[float] = Field(coerce=True, nullable=True)
    plant_name_epa: Series[pd.StringDtype] = Field(coerce=True, nullable=True)
    fuel_type_primary_epa: Series[pd.StringDtype] = Field(coerce=True, nullable=True)
    capacity_mw_epa: Series[float] = Field(coerce=True, nullable=True)
    operating_status_epa: Series[pd.StringDtype] = Field(coerce=True, nullable=True)
    operating_status_date_epa: Series[pd.Timestamp] = Field(
        coerce=True, nullable=True
    )


class Eia860Generators(DataFrameModel):
    """Generators reported on EIA Form 860."""

    plant_id_eia: Series[pd.Int64Dtype] = Field(coerce=True)
    generator_id_eia: Series[pd.StringDtype] = Field(coerce=True)
    state_eia: Series[pd.StringDtype] = Field(coerce=True, nullable=True)
    plant_name_eia: Series[pd.StringDtype] = Field(coerce=True, nullable=True)
    prime_mover_code: Series[pd.StringDtype] = Field(coerce=True, nullable=True)
    fuel_category_eia: Series[pd.StringDtype] = Field(coerce=True, nullable=True)
    capacity_mw_eia: Series[float] = Field(coerce=True, nullable=True)
    latitude_eia: Series[float] = Field(coerce=True, nullable=True)
    longitude_eia: Series[float] = Field(coerce=True, nullable=True)


class PlantIdCorrections(DataFrameModel):
    """EIA plant IDs which should be replaced by a different CAMD plant ID."""

    plant_id_eia: Series[pd.Int64Dtype] = Field(coerce=True, nullable=True)
    plant_id_epa: Series[pd.Int64Dtype] = Field(coerce=True, nullable=True)


TABLE_SCHEMAS: dict[str, type[DataFrameModel]] = {
    "raw_epacamd__units": EpaCamdUnits,
    "raw_eia860__generators": Eia860Generators,
    "raw_glue__plant_id_corrections": PlantIdCorrections,
}
"""Map of input table names to the schema they must conform to."""


def _missing_columns(schema_errors: pr.errors.SchemaErrors) -> list[str]:
    """Pull the names of any missing columns out of a set of schema errors."""
    failure_cases = schema_errors.failure_cases
    missing = failure_cases.loc[
        failure_cases["check"].astype(str) == "column_in_dataframe", "failure_case"
    ]
    return sorted(missing.astype(str).unique())


def validate_table(df: pd.DataFrame, table_name: str) -> pd.DataFrame:
    """Validate and coerce one of the crosswalk input tables.

    Columns that aren't part of the schema are passed through untouched.

    Args:
        df: The table to validate.
        table_name: One of the keys of :data:`TABLE_SCHEMAS`.

    Returns:
        The validated table, with its columns coerced to the expected dtypes.

    Raises:
        SchemaError: if the table is missing any required column.
        pandera.errors.SchemaErrors: if the table has the right columns, but their
            contents can't be coerced into the expected types.
    """
    schema = TABLE_SCHEMAS[table_name]
    try:
        validated = schema.validate(df, lazy=True)
    except pr.errors.SchemaErrors as schema_errors:
        if missing_cols := _missing_columns(schema_errors):
            raise SchemaError(
                f"Table {table_name} is missing required columns: {missing_cols}",
                table_name=table_name,
                missing_cols=missing_cols,
            ) from schema_errors
        raise
    logger.debug(f"Validated {len(validated)} records in {table_name}")
    return validated
