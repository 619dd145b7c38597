from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, NamedTuple

# preference_list[i] is the index of the i-th most preferred agent on the other side
PreferenceList = List[int]
PreferenceLists = List[PreferenceList]

UNMATCHED = -1


@dataclass(frozen=True)
class Hire:
    """A company paired with the candidate it hired."""
    company: int
    candidate: int


@dataclass(frozen=True)
class Offer:
    """One proposal event in a matcher's trace."""
    proposer: int
    recipient: int
    from_company: bool  # True if a company proposes to a candidate


class MatchRun(NamedTuple):
    """Output of a traced matcher: the offers it made and the matching it claims."""
    trace: List[Offer]
    out: List[Hire]


StableMatcher = Callable[[PreferenceLists, PreferenceLists], List[Hire]]
StableMatcherWithTrace = Callable[[PreferenceLists, PreferenceLists], MatchRun]


@dataclass
class AgentState:
    """Replay slot for one agent: its current partner and the offers it has made."""
    match: int = UNMATCHED
    proposals: List[int] = field(default_factory=list)

    @property
    def is_matched(self) -> bool:
        return self.match != UNMATCHED


@dataclass
class ReplayState:
    """
    Per-side arena of agent slots, indexed by agent index.

    Built fresh for every replay and never shared between trials.
    """
    companies: List[AgentState]
    candidates: List[AgentState]

    @staticmethod
    def fresh(n: int) -> "ReplayState":
        """Create an all-unmatched state for n companies and n candidates."""
        return ReplayState(
            companies=[AgentState() for _ in range(n)],
            candidates=[AgentState() for _ in range(n)],
        )

    def proposers(self, from_company: bool) -> List[AgentState]:
        return self.companies if from_company else self.candidates

    def recipients(self, from_company: bool) -> List[AgentState]:
        return self.candidates if from_company else self.companies
