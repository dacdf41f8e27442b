"""Equivalence rules for free-text generator IDs.

CAMD and EIA both report a local identifier for each generator, but they are typed by
hand into two different reporting systems and drift apart: ``"UN14"`` vs. ``"un14"``,
``"02"`` vs. ``"2"``, ``"CTG5"`` vs. ``"GT5"``. This module defines a fixed library of
comparisons, each one looser than the last, which the cascade applies in order.

Every comparison is built from an extraction primitive that pulls a canonical value
out of a single ID (or returns ``None`` when there's nothing to extract). The
comparisons are pure and total: missing, blank, or unparseable IDs never match
anything, and nothing in this module raises.

The order of :data:`CASCADE` is significant. Looser rules only ever see the records
that stricter rules failed to match.
"""

import re
from collections.abc import Callable
from decimal import Decimal
from typing import NamedTuple

from epacamd_eia.constants import MatchType

NON_ALNUM = re.compile(r"[^0-9A-Za-z]+")
NUMBER = re.compile(r"[0-9]+(?:\.[0-9]+)?")
TRAILING_DIGITS = re.compile(r"(\d+)$")
LEADING_DIGITS = re.compile(r"^(\d+)")
ALNUM_SUFFIX = re.compile(r"(\d+[A-Za-z]+)$")
FIRST_DIGITS = re.compile(r"\d+")


def _clean(gen_id: str | None) -> str | None:
    """Strip surrounding whitespace, turning nulls and blanks into None."""
    if gen_id is None or not isinstance(gen_id, str):
        return None
    gen_id = gen_id.strip()
    return gen_id or None


def fold_id(gen_id: str | None) -> str | None:
    """Uppercase an ID and remove everything that isn't a letter or digit.

    >>> fold_id("cc-1 a")
    'CC1A'
    """
    gen_id = _clean(gen_id)
    if gen_id is None:
        return None
    return NON_ALNUM.sub("", gen_id.upper()) or None


def parse_number(gen_id: str | None) -> Decimal | None:
    """Interpret a whole ID as a plain decimal number, or return None if it isn't one.

    Only ASCII digits with an optional fractional part count. Leading zeros are
    irrelevant (``"0001"`` is 1). Signs, exponents, underscores and the special
    spellings ``"nan"`` and ``"inf"`` are not numbers, and neither is anything with
    letters in it, like ``"2A"``. The value is exact, so long IDs that differ only in
    their last digit stay different.
    """
    gen_id = _clean(gen_id)
    if gen_id is None or not NUMBER.fullmatch(gen_id):
        return None
    return Decimal(gen_id)


def _digit_run(pattern: re.Pattern, gen_id: str | None) -> str | None:
    """Canonical form of the digit run picked out by ``pattern``.

    Leading zeros are dropped, so two runs are equal exactly when their numeric values
    are, however many digits they have.
    """
    gen_id = _clean(gen_id)
    if gen_id is None:
        return None
    if match := pattern.search(gen_id):
        return match.group(1).lstrip("0") or "0"
    return None


def trailing_digits(gen_id: str | None) -> str | None:
    """Value of the maximal run of digits at the end of an ID.

    ``"NO.6"`` and ``"CTG05"`` yield ``"6"`` and ``"5"``. Whole numbers end in a digit
    too, so ``"06"`` yields ``"6"``. IDs that don't end in a digit have no value.
    """
    return _digit_run(TRAILING_DIGITS, gen_id)


def leading_digits(gen_id: str | None) -> str | None:
    """Value of the maximal run of digits at the start of an ID.

    ``"7-STG"`` and ``"07S"`` both yield ``"7"``. IDs that don't start with a digit
    have no value.
    """
    return _digit_run(LEADING_DIGITS, gen_id)


def alnum_suffix(gen_id: str | None) -> str | None:
    """Trailing run of one or more digits followed by one or more letters.

    ``"PFL6A"`` yields ``"6A"``. The suffix is returned as-is, without case folding.
    """
    gen_id = _clean(gen_id)
    if gen_id is None:
        return None
    if match := ALNUM_SUFFIX.search(gen_id):
        return match.group(1)
    return None


def first_digits(gen_id: str | None) -> str | None:
    """The first run of digits appearing anywhere in an ID, as a string."""
    gen_id = _clean(gen_id)
    if gen_id is None:
        return None
    if match := FIRST_DIGITS.search(gen_id):
        return match.group(0)
    return None


def _same(extract: Callable[[str | None], object]) -> Callable[..., bool]:
    """Build an equivalence over IDs that agree on a successful extraction."""

    def compare(id_epa: str | None, id_eia: str | None) -> bool:
        value_epa = extract(id_epa)
        if value_epa is None:
            return False
        return value_epa == extract(id_eia)

    compare.__name__ = f"same_{extract.__name__}"
    compare.__doc__ = f"Whether both IDs extract the same non-null {extract.__name__}."
    return compare


def same_id(id_epa: str | None, id_eia: str | None) -> bool:
    """Exact string equality. Missing and blank IDs never match."""
    if _clean(id_epa) is None or not isinstance(id_eia, str):
        return False
    return id_epa == id_eia


same_folded_id = _same(fold_id)
same_numeric_id = _same(parse_number)
same_trailing_digits = _same(trailing_digits)
same_leading_digits = _same(leading_digits)
same_alnum_suffix = _same(alnum_suffix)
same_first_digits = _same(first_digits)


class MatchRule(NamedTuple):
    """One phase of the cascade: a provenance label and an ID comparison."""

    match_type: MatchType
    compare: Callable[[str | None, str | None], bool]


CASCADE: tuple[MatchRule, ...] = (
    MatchRule(MatchType.STEP_1, same_id),
    MatchRule(MatchType.STEP_2A, same_folded_id),
    MatchRule(MatchType.STEP_2B, same_numeric_id),
    MatchRule(MatchType.STEP_2C, same_trailing_digits),
    MatchRule(MatchType.STEP_2D, same_leading_digits),
    MatchRule(MatchType.STEP_2E, same_alnum_suffix),
    MatchRule(MatchType.STEP_2F, same_first_digits),
)
"""The ordered phases of the cascade, from strictest to loosest."""
