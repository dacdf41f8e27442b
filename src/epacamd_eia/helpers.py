"""General utility functions used throughout the crosswalk.

These functions don't know anything about CAMD or EIA in particular. They clean up
column labels and free text so that the tables handed to the cascade can be compared
reliably.
"""

import pandas as pd

import epacamd_eia.logging_helpers

logger = epacamd_eia.logging_helpers.get_logger(__name__)


def simplify_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Simplify column labels for use as snake_case fields.

    All column labels will be simplified by:

    * Replacing all non-alphanumeric characters with spaces.
    * Forcing all letters to be lower case.
    * Compacting internal whitespace to a single " ".
    * Stripping leading and trailing whitespace.
    * Replacing all remaining whitespace with underscores.

    Args:
        df: The DataFrame whose column labels to simplify.

    Returns:
        A dataframe with simplified column names.
    """
    out_df = df.copy()
    out_df.columns = (
        out_df.columns.astype(str)
        .str.replace(r"[^0-9a-zA-Z]+", " ", regex=True)
        .str.strip()
        .str.lower()
        .str.replace(r"\s+", " ", regex=True)
        .str.replace(" ", "_")
    )
    return out_df


def simplify_strings(col: pd.Series) -> pd.Series:
    """Simplify the strings in a column for comparison purposes.

    Removes Unicode control characters, strips leading and trailing whitespace, uses
    lowercase characters, and compacts all internal whitespace to a single space. Null
    values are left alone.
    """
    return (
        col.astype("string")
        .str.replace(r"[\x00-\x1f\x7f-\x9f]", "", regex=True)
        .str.strip()
        .str.lower()
        .str.replace(r"\s+", " ", regex=True)
    )


def organize_cols(df: pd.DataFrame, cols: list[str]) -> pd.DataFrame:
    """Organize columns into key ID & name fields & alphabetical data columns.

    Columns in ``cols`` that aren't present in ``df`` are skipped, so the same list can
    be used for tables at different stages of processing.

    Args:
        df: A DataFrame to be organized.
        cols: The columns to put first, in their desired output ordering.

    Returns:
        A dataframe with the same columns as the input DataFrame df, but with cols
        first, in the same order as they were passed in, and the remaining columns
        sorted alphabetically.
    """
    first_cols = [c for c in cols if c in df.columns]
    data_cols = sorted(c for c in df.columns if c not in first_cols)
    return df[first_cols + data_cols]


def count_records(
    df: pd.DataFrame, cols: list[str], new_count_col_name: str
) -> pd.DataFrame:
    """Count the number of records in each group of a dataframe.

    Args:
        df: dataframe you would like to groupby and count.
        cols: list of columns to group and count by.
        new_count_col_name: the name that will be assigned to the column that will
            contain the count.

    Returns:
        DataFrame containing only ``cols`` and ``new_count_col_name``.
    """
    return (
        df.assign(count_me=1)
        .groupby(cols, observed=True, dropna=False)
        .count_me.count()
        .reset_index()
        .rename(columns={"count_me": new_count_col_name})
    )
