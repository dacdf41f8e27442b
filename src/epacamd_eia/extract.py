"""Read the already-shaped crosswalk input tables from delimited files.

Fetching the CAMD inventory from the facility API, parsing the EIA-860 workbooks, and
compiling the plant ID corrections all happen upstream. By the time the data gets here
it's a CSV with one record per row and the expected column names, but the identifier
columns still need care: values like ``"02"`` or ``"6-1"`` are IDs, not numbers or
dates, so they are always read as text.
"""

from pathlib import Path

import pandas as pd

import epacamd_eia.logging_helpers
from epacamd_eia.constants import ID_COLS
from epacamd_eia.helpers import simplify_columns

logger = epacamd_eia.logging_helpers.get_logger(__name__)

TEXT_ID_COLS: list[str] = [
    col for col in ID_COLS if not col.startswith("plant_id_")
] + ["state", "state_eia", "prime_mover_code"]
"""Columns read as literal text. Plant IDs are integers and are parsed as such."""


def extract_table(path: str | Path, table_name: str) -> pd.DataFrame:
    """Read one input table from a CSV file.

    Only empty cells are treated as missing values, so that an ID which happens to
    look like ``"NA"`` survives.

    Args:
        path: Location of the CSV file.
        table_name: Name of the table, for logging.

    Returns:
        The table, with simplified column names. Validation happens when the
        crosswalk is built.
    """
    logger.info(f"Extracting {table_name} from {path}")
    df = pd.read_csv(
        path,
        dtype={col: "string" for col in TEXT_ID_COLS},
        keep_default_na=False,
        na_values=[""],
    ).pipe(simplify_columns)
    logger.debug(f"Read {len(df)} records into {table_name}")
    return df
