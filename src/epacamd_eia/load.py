"""Write the crosswalk out to CSV or Excel files.

The crosswalk is mostly read by people, often in a spreadsheet. Generator and unit IDs
such as ``"02"``, ``"6-1"`` or ``"1E3"`` look like numbers or dates to spreadsheet
software, which will happily mangle them. The Excel output stores every identifier
column as text so that doesn't happen.
"""

from pathlib import Path

import pandas as pd

import epacamd_eia.logging_helpers
from epacamd_eia.constants import ID_COLS

logger = epacamd_eia.logging_helpers.get_logger(__name__)

XLSX_OPTIONS: dict[str, bool] = {
    "strings_to_numbers": False,
    "strings_to_formulas": False,
    "strings_to_urls": False,
}
"""xlsxwriter options ensuring strings are always written as strings."""


def _id_cols_as_text(df: pd.DataFrame) -> pd.DataFrame:
    """Render the identifier columns as strings, leaving nulls alone."""
    out_df = df.copy()
    for col in ID_COLS:
        if col in out_df.columns:
            out_df[col] = out_df[col].astype("string")
    return out_df


def write_crosswalk(
    crosswalk: pd.DataFrame, summary: pd.DataFrame, path: str | Path
) -> list[Path]:
    """Write the crosswalk and its per-phase summary.

    * ``.csv``: the crosswalk goes to ``path`` and the summary to a sibling file with
      a ``_summary`` suffix.
    * ``.xlsx``: one workbook with a ``crosswalk`` sheet and a ``summary`` sheet.

    Args:
        crosswalk: The assembled crosswalk.
        summary: The per-phase summary table.
        path: Where to write the crosswalk.

    Returns:
        The paths of the files that were written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    crosswalk = _id_cols_as_text(crosswalk)

    if path.suffix == ".csv":
        summary_path = path.with_name(f"{path.stem}_summary.csv")
        crosswalk.to_csv(path, index=False)
        summary.to_csv(summary_path, index=False)
        written = [path, summary_path]
    elif path.suffix == ".xlsx":
        with pd.ExcelWriter(
            path, engine="xlsxwriter", engine_kwargs={"options": XLSX_OPTIONS}
        ) as writer:
            crosswalk.to_excel(writer, sheet_name="crosswalk", index=False)
            summary.to_excel(writer, sheet_name="summary", index=False)
            text_format = writer.book.add_format({"num_format": "@"})
            sheet = writer.sheets["crosswalk"]
            for col_num, col in enumerate(crosswalk.columns):
                if col in ID_COLS:
                    sheet.set_column(col_num, col_num, None, text_format)
        written = [path]
    else:
        raise ValueError(f"Don't know how to write a crosswalk to {path}")

    logger.info(f"Wrote {len(crosswalk)} crosswalk records to {path}")
    return written
