"""Harmonize EIA plant IDs with the plant IDs used by EPA CAMD.

EIA plant IDs and CAMD plant IDs (ORISPL codes) almost always agree, but not quite.
A small table of known corrections maps the EIA plant IDs that differ onto the CAMD
plant IDs they correspond to. Every match phase requires the plant IDs to be exactly
equal, so the corrections are applied once, to the EIA side, before any matching.
"""

import pandas as pd

import epacamd_eia.logging_helpers
from epacamd_eia.settings import ConfigurationError

logger = epacamd_eia.logging_helpers.get_logger(__name__)


def validate_corrections(corrections: pd.DataFrame) -> pd.Series:
    """Check the plant ID correction table and turn it into a lookup.

    Args:
        corrections: Table with ``plant_id_eia`` and ``plant_id_epa`` columns.

    Returns:
        A series indexed by ``plant_id_eia`` whose values are the corrected
        ``plant_id_epa``.

    Raises:
        ConfigurationError: if either column is missing, contains nulls, or if any
            EIA plant ID is mapped more than once.
    """
    missing_cols = {"plant_id_eia", "plant_id_epa"}.difference(corrections.columns)
    if missing_cols:
        raise ConfigurationError(
            f"Plant ID correction table is missing columns: {sorted(missing_cols)}"
        )
    if corrections[["plant_id_eia", "plant_id_epa"]].isna().any(axis=None):
        raise ConfigurationError("Plant ID correction table contains null plant IDs.")
    dupes = corrections.loc[
        corrections.plant_id_eia.duplicated(keep=False), "plant_id_eia"
    ]
    if not dupes.empty:
        raise ConfigurationError(
            "Plant ID correction table maps these EIA plant IDs more than once: "
            f"{sorted(dupes.unique().tolist())}"
        )
    return corrections.set_index("plant_id_eia")["plant_id_epa"]


def correct_plant_ids(
    generators: pd.DataFrame, corrections: pd.DataFrame
) -> pd.DataFrame:
    """Replace EIA plant IDs with their CAMD counterparts where a correction exists.

    EIA plant IDs that don't appear in the correction table are left alone; that just
    means they don't need fixing. The pre-correction ID is kept in
    ``plant_id_eia_original`` and ``plant_id_changed_flag`` records whether the ID
    was replaced.

    Applying the corrections to a table that has already been corrected keeps the
    original ID and flag from the first pass.

    Args:
        generators: EIA-860 generators, with a ``plant_id_eia`` column.
        corrections: The plant ID correction table.

    Returns:
        A new dataframe with the corrected ``plant_id_eia``.
    """
    plant_id_map = validate_corrections(corrections)
    out_df = generators.copy()
    corrected = out_df.plant_id_eia.map(plant_id_map)
    changed = corrected.notna().astype(bool)

    if "plant_id_eia_original" not in out_df.columns:
        out_df["plant_id_eia_original"] = out_df.plant_id_eia
    if "plant_id_changed_flag" in out_df.columns:
        changed = changed | out_df.plant_id_changed_flag.fillna(False).astype(bool)

    out_df["plant_id_eia"] = corrected.fillna(out_df.plant_id_eia).astype(
        out_df.plant_id_eia.dtype
    )
    out_df["plant_id_changed_flag"] = changed
    logger.info(
        f"Corrected plant IDs for {changed.sum()} of {len(out_df)} EIA generators "
        f"using {len(plant_id_map)} known corrections."
    )
    return out_df
