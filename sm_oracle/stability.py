from __future__ import annotations

import logging
import numbers
from collections import Counter
from typing import Dict, List, Sequence

from .agents import Hire, PreferenceList, PreferenceLists
from .errors import (
    BlockingPairFound,
    DuplicateAssignment,
    InvalidPreferences,
    OutOfRangeIndex,
    SizeMismatch,
)

logger = logging.getLogger(__name__)


def validate_preferences(prefs: PreferenceLists, n: int, side: str = "company") -> None:
    """Check that prefs holds n lists, each a permutation of 0..n-1."""
    if len(prefs) != n:
        raise InvalidPreferences(f"expected {n} {side} preference lists, got {len(prefs)}")
    expected = list(range(n))
    for agent, pref in enumerate(prefs):
        if sorted(pref) != expected:
            raise InvalidPreferences(
                f"{side} {agent} preference list {list(pref)} is not a permutation of 0..{n - 1}"
            )


def is_index(value, n: int) -> bool:
    """True if value is an integer agent index in [0, n)."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        return False
    return 0 <= value < n


def check_size(matching: Sequence[Hire], n: int) -> None:
    """Every company and every candidate must appear, so the matching has exactly n hires."""
    if len(matching) != n:
        raise SizeMismatch(
            "matching does not pair every company and candidate",
            expected=n,
            actual=len(matching),
        )


def check_duplicates(matching: Sequence[Hire]) -> None:
    """No candidate (or company) may be hired twice."""
    for side in ("candidate", "company"):
        counts = Counter(getattr(hire, side) for hire in matching)
        repeated = [index for index, count in counts.items() if count > 1]
        if repeated:
            raise DuplicateAssignment(f"{side} appears more than once in matching", **{side: repeated[0]})


def check_range(matching: Sequence[Hire], n: int) -> None:
    """Every index in the matching must lie in [0, n)."""
    for position, hire in enumerate(matching):
        for side in ("company", "candidate"):
            index = getattr(hire, side)
            if not is_index(index, n):
                raise OutOfRangeIndex(
                    f"{side} index outside [0, {n})",
                    position=position,
                    **{side: index},
                )


def check_structure(matching: Sequence[Hire], n: int) -> None:
    """Run the structural validators in order: size, duplicates, range."""
    check_size(matching, n)
    check_duplicates(matching)
    check_range(matching, n)


def preferred_over(prefs: PreferenceList, actual: int) -> List[int]:
    """Return the agents ranked strictly above `actual` in prefs."""
    return list(prefs[: prefs.index(actual)])


def check_stability(
    matching: Sequence[Hire],
    company_prefs: PreferenceLists,
    candidate_prefs: PreferenceLists,
    n: int,
) -> None:
    """
    Raise if the matching is malformed or has a blocking pair.

    A blocking pair is a company c and a candidate d' who both rank each other
    above the partners the matching gave them.
    """
    check_structure(matching, n)

    # candidate -> company it was hired by
    employer: Dict[int, int] = {hire.candidate: hire.company for hire in matching}

    for hire in matching:
        company, hired = hire.company, hire.candidate
        for preferred in preferred_over(company_prefs[company], hired):
            rival = employer[preferred]
            if company in preferred_over(candidate_prefs[preferred], rival):
                logger.debug(
                    "Blocking pair: company %d and candidate %d (matched to %d and %d)",
                    company, preferred, hired, rival,
                )
                raise BlockingPairFound(
                    "unstable match: company and candidate prefer each other over their partners",
                    company=company,
                    hired=hired,
                    preferred=preferred,
                    rival=rival,
                )
