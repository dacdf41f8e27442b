"""Link CAMD units to EIA generators through a cascade of matching phases.

Each phase pairs up CAMD units and EIA generators that report exactly the same plant
ID and whose generator IDs are equivalent under one of the rules defined in
:mod:`epacamd_eia.glue.id_rules`. Whatever a phase leaves unmatched on either side is
handed to the next, looser, phase. A record that is matched in one phase is never
considered again.

Phases are pure functions of their input pools. The cascade threads the residual pools
from one phase to the next and collects each phase's matches; no table is modified in
place.

Records are tracked by their position in the input tables, which becomes the
``record_id_epa`` and ``record_id_eia`` index of the pools. A single unit can pair with
several generators within one phase (and vice versa) when a loose rule can't tell
them apart. These fan-out matches are kept, and counted in the ``n_matches_epa`` and
``n_matches_eia`` columns so they can be reviewed by hand.
"""

from collections.abc import Iterable
from typing import NamedTuple

import pandas as pd

import epacamd_eia.logging_helpers
from epacamd_eia.constants import EXCLUDED_FUEL_CATEGORIES, MatchType
from epacamd_eia.glue.id_rules import CASCADE, MatchRule
from epacamd_eia.helpers import count_records, simplify_strings

logger = epacamd_eia.logging_helpers.get_logger(__name__)


class PhaseResult(NamedTuple):
    """The outcome of a single matching phase."""

    matched: pd.DataFrame
    unmatched_epa: pd.DataFrame
    unmatched_eia: pd.DataFrame


class CascadeResult(NamedTuple):
    """The outcome of running every phase of the cascade."""

    matches: dict[MatchType, pd.DataFrame]
    unmatched_epa: pd.DataFrame
    unmatched_eia: pd.DataFrame
    summary: pd.DataFrame


def index_records(df: pd.DataFrame, id_col: str) -> pd.DataFrame:
    """Give a pool of records a unique integer index named ``id_col``."""
    return df.reset_index(drop=True).rename_axis(id_col)


def match_phase(
    units: pd.DataFrame, generators: pd.DataFrame, rule: MatchRule
) -> PhaseResult:
    """Pair up CAMD units and EIA generators using a single ID equivalence rule.

    Candidate pairs share exactly the same plant ID (``plant_id_epa`` ==
    ``plant_id_eia``). Of those, the pairs whose generator IDs satisfy
    ``rule.compare`` are accepted. Because the comparison only ever happens within a
    plant, the work is naturally partitioned by plant ID.

    Args:
        units: Pool of CAMD units, indexed by ``record_id_epa``.
        generators: Pool of EIA generators, indexed by ``record_id_eia``.
        rule: The phase's label and generator ID comparison.

    Returns:
        The accepted pairs, labeled with ``rule.match_type`` and the number of
        matches each unit and generator participated in, along with the units and
        generators that didn't appear in any accepted pair.
    """
    candidates = pd.merge(
        units.reset_index(),
        generators.reset_index(),
        left_on="plant_id_epa",
        right_on="plant_id_eia",
        how="inner",
        validate="many_to_many",
    )
    accepted = pd.Series(
        [
            rule.compare(id_epa, id_eia)
            for id_epa, id_eia in zip(
                candidates.generator_id_epa,
                candidates.generator_id_eia,
                strict=True,
            )
        ],
        index=candidates.index,
        dtype=bool,
    )
    matched = candidates.loc[accepted].reset_index(drop=True)
    matched = (
        matched.assign(match_type=rule.match_type)
        .merge(
            count_records(matched, ["record_id_epa"], "n_matches_epa"),
            on="record_id_epa",
            how="left",
        )
        .merge(
            count_records(matched, ["record_id_eia"], "n_matches_eia"),
            on="record_id_eia",
            how="left",
        )
    )
    return PhaseResult(
        matched=matched,
        unmatched_epa=units.loc[~units.index.isin(matched.record_id_epa)],
        unmatched_eia=generators.loc[~generators.index.isin(matched.record_id_eia)],
    )


def exclude_unlikely_generators(
    generators: pd.DataFrame,
    excluded_fuel_categories: Iterable[str] = EXCLUDED_FUEL_CATEGORIES,
) -> pd.DataFrame:
    """Drop EIA generators whose fuel means they almost certainly aren't in CAMD.

    CAMD only covers fossil fuel fired combustion units, so generators running on wind,
    sunlight, water, uranium, etc. will never find a legitimate counterpart. Leaving
    them in the pool only gives the loose phases more chances to make bad matches.

    Fuel categories are compared case-insensitively, with whitespace compacted.
    """
    excluded = {" ".join(cat.lower().split()) for cat in excluded_fuel_categories}
    unlikely = simplify_strings(generators.fuel_category_eia).isin(excluded)
    unlikely = unlikely.fillna(False).astype(bool)
    logger.info(
        f"Excluding {unlikely.sum()} unmatched EIA generators that use fuels not "
        "covered by CAMD."
    )
    return generators.loc[~unlikely]


def _warn_about_fan_out(matched: pd.DataFrame, match_type: MatchType) -> None:
    """Log any records that matched more than one counterpart in a phase."""
    multi_epa = matched.loc[matched.n_matches_epa > 1, "record_id_epa"].nunique()
    multi_eia = matched.loc[matched.n_matches_eia > 1, "record_id_eia"].nunique()
    if multi_epa or multi_eia:
        logger.warning(
            f"{match_type}: {multi_epa} CAMD units and {multi_eia} EIA generators "
            "matched more than one record. These need manual review."
        )


def summarize_phases(
    phase_results: dict[MatchType, PhaseResult],
) -> pd.DataFrame:
    """Tabulate how many records each phase matched and how many remain.

    Args:
        phase_results: The result of each phase, in the order they were run.

    Returns:
        One row per phase, with the number of CAMD units and EIA generators it newly
        matched, and the number of each still unmatched afterwards.
    """
    return pd.DataFrame(
        [
            {
                "match_type": match_type,
                "n_matched_epa": result.matched.record_id_epa.nunique(),
                "n_unmatched_epa": len(result.unmatched_epa),
                "n_matched_eia": result.matched.record_id_eia.nunique(),
                "n_unmatched_eia": len(result.unmatched_eia),
            }
            for match_type, result in phase_results.items()
        ],
        columns=[
            "match_type",
            "n_matched_epa",
            "n_unmatched_epa",
            "n_matched_eia",
            "n_unmatched_eia",
        ],
    ).astype({"match_type": "string"})


def run_cascade(
    units: pd.DataFrame,
    generators: pd.DataFrame,
    rules: Iterable[MatchRule] = CASCADE,
    excluded_fuel_categories: Iterable[str] = EXCLUDED_FUEL_CATEGORIES,
) -> CascadeResult:
    """Run each matching phase in order, feeding the leftovers of one to the next.

    After the first (exact) phase, EIA generators using fuels that CAMD doesn't cover
    are removed from the pool, once, before the looser phases begin.

    Args:
        units: Eligible CAMD units.
        generators: EIA generators, with corrected plant IDs.
        rules: The phases to run, in order.
        excluded_fuel_categories: EIA fuel categories to drop after the first phase.

    Returns:
        The matches from each phase, the units and generators left unmatched after the
        final phase, and a summary of the progress made by each phase.
    """
    unmatched_epa = index_records(units, "record_id_epa")
    unmatched_eia = index_records(generators, "record_id_eia")
    logger.info(
        f"Matching {len(unmatched_epa)} CAMD units to "
        f"{len(unmatched_eia)} EIA generators."
    )

    phase_results: dict[MatchType, PhaseResult] = {}
    for phase_num, rule in enumerate(rules):
        if phase_num == 1:
            unmatched_eia = exclude_unlikely_generators(
                unmatched_eia, excluded_fuel_categories
            )
        result = match_phase(unmatched_epa, unmatched_eia, rule)
        logger.info(
            f"{rule.match_type}: matched {result.matched.record_id_epa.nunique()} "
            f"CAMD units, {len(result.unmatched_epa)} remain unmatched."
        )
        _warn_about_fan_out(result.matched, rule.match_type)
        phase_results[rule.match_type] = result
        unmatched_epa, unmatched_eia = result.unmatched_epa, result.unmatched_eia

    return CascadeResult(
        matches={
            match_type: result.matched for match_type, result in phase_results.items()
        },
        unmatched_epa=unmatched_epa,
        unmatched_eia=unmatched_eia,
        summary=summarize_phases(phase_results),
    )
