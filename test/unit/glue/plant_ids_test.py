"""Unit tests for applying the EIA plant ID corrections."""

import pandas as pd
import pytest

from epacamd_eia.glue.plant_ids import correct_plant_ids, validate_corrections
from epacamd_eia.settings import ConfigurationError


def test_correct_plant_ids(generators, corrections):
    """Only generators at plants in the correction table are changed and flagged."""
    corrected = correct_plant_ids(generators, corrections)
    un14 = corrected.loc[corrected.generator_id_eia == "un14"].squeeze()
    assert un14.plant_id_eia == 1001
    assert un14.plant_id_eia_original == 9001
    assert un14.plant_id_changed_flag

    others = corrected.loc[corrected.generator_id_eia != "un14"]
    assert not others.plant_id_changed_flag.any()
    pd.testing.assert_series_equal(
        others.plant_id_eia, others.plant_id_eia_original, check_names=False
    )


def test_correct_plant_ids_leaves_input_alone(generators, corrections):
    """The input table isn't modified."""
    original = generators.copy()
    correct_plant_ids(generators, corrections)
    pd.testing.assert_frame_equal(generators, original)


def test_correct_plant_ids_is_idempotent(generators, corrections):
    """Correcting an already corrected table changes nothing."""
    once = correct_plant_ids(generators, corrections)
    twice = correct_plant_ids(once, corrections)
    pd.testing.assert_frame_equal(once, twice)


def test_empty_corrections(generators):
    """With no corrections, nothing changes and nothing is flagged."""
    corrected = correct_plant_ids(
        generators, pd.DataFrame({"plant_id_eia": [], "plant_id_epa": []})
    )
    assert (corrected.plant_id_eia == generators.plant_id_eia).all()
    assert not corrected.plant_id_changed_flag.any()


@pytest.mark.parametrize(
    "corrections",
    [
        pd.DataFrame({"plant_id_eia": [9001]}),
        pd.DataFrame({"eia": [9001], "epa": [1001]}),
        pd.DataFrame({"plant_id_eia": [9001, 9001], "plant_id_epa": [1001, 1002]}),
        pd.DataFrame({"plant_id_eia": [9001, None], "plant_id_epa": [1001, 1002]}),
        pd.DataFrame({"plant_id_eia": [9001], "plant_id_epa": [None]}),
    ],
)
def test_malformed_corrections(corrections):
    """Malformed correction tables are a configuration problem."""
    with pytest.raises(ConfigurationError):
        validate_corrections(corrections)
