from __future__ import annotations

import logging
from typing import List, Sequence

from .agents import UNMATCHED, AgentState, Hire, Offer, PreferenceList, PreferenceLists, ReplayState
from .errors import (
    OutOfRangeIndex,
    TraceDuplicateProposal,
    TraceLengthViolation,
    TraceMismatch,
    TraceOrderViolation,
)
from .stability import check_structure, is_index

logger = logging.getLogger(__name__)


def receive_proposal(
    recipient: AgentState,
    recipient_prefs: PreferenceList,
    proposer_index: int,
    proposers: List[AgentState],
) -> bool:
    """
    Let the recipient decide on an offer; return True if it is accepted.

    An unmatched recipient always accepts. A matched one accepts only a
    proposer it ranks strictly higher than its current partner, and that
    partner is left unmatched.
    """
    if not recipient.is_matched:
        recipient.match = proposer_index
        return True

    current = recipient.match
    if recipient_prefs.index(proposer_index) < recipient_prefs.index(current):
        proposers[current].match = UNMATCHED
        recipient.match = proposer_index
        return True
    return False


def replay(
    trace: Sequence[Offer],
    company_prefs: PreferenceLists,
    candidate_prefs: PreferenceLists,
    n: int,
) -> ReplayState:
    """
    Replay a trace step by step and return the state it leaves behind.

    Only the given offers are processed, in order, so an incomplete trace
    shows up as unmatched agents instead of being completed here.
    """
    state = ReplayState.fresh(n)

    for step, offer in enumerate(trace):
        for role, index in (("proposer", offer.proposer), ("recipient", offer.recipient)):
            if not is_index(index, n):
                raise OutOfRangeIndex(f"trace {role} index outside [0, {n})", step=step, **{role: index})

        proposers = state.proposers(offer.from_company)
        recipients = state.recipients(offer.from_company)
        recipient_prefs = (candidate_prefs if offer.from_company else company_prefs)[offer.recipient]

        proposer = proposers[offer.proposer]
        # Counts as made even when rejected
        proposer.proposals.append(offer.recipient)

        accepted = receive_proposal(recipients[offer.recipient], recipient_prefs, offer.proposer, proposers)
        if accepted:
            # The recipient's decision sets the proposer's match, whatever it held before
            proposer.match = offer.recipient

        logger.debug(
            "step %d: %s %d -> %d %s",
            step,
            "company" if offer.from_company else "candidate",
            offer.proposer,
            offer.recipient,
            "accepted" if accepted else "rejected",
        )

    return state


def check_matches(final_matching: Sequence[Hire], state: ReplayState) -> None:
    """Both sides of every claimed hire must point at each other after replay."""
    for hire in final_matching:
        company_match = state.companies[hire.company].match
        candidate_match = state.candidates[hire.candidate].match
        if company_match != hire.candidate or candidate_match != hire.company:
            raise TraceMismatch(
                "mismatch found between trace replay and claimed matching",
                company=hire.company,
                candidate=hire.candidate,
                replayed_company_match=company_match,
                replayed_candidate_match=candidate_match,
            )


def check_proposal_history(history: List[int], prefs: PreferenceList, side: str, agent: int) -> None:
    """An agent must propose down its preference list from the top, never repeating."""
    if len(history) > len(prefs):
        raise TraceLengthViolation(
            "more proposals than possible recipients, which implies duplicates",
            **{side: agent},
            proposals=len(history),
        )

    seen = set()
    for target in history:
        if target in seen:
            raise TraceDuplicateProposal(
                "proposed to the same recipient more than once",
                **{side: agent},
                target=target,
            )
        seen.add(target)

    expected = list(prefs[: len(history)])
    if expected != history:
        raise TraceOrderViolation(
            "proposals not made in order of preference",
            **{side: agent},
            expected=expected,
            actual=list(history),
        )


def check_trace_consistency(
    final_matching: Sequence[Hire],
    company_prefs: PreferenceLists,
    candidate_prefs: PreferenceLists,
    trace: Sequence[Offer],
    n: int,
) -> ReplayState:
    """
    Raise if the trace could not have come from deferred acceptance or does
    not lead to the claimed matching; otherwise return the replayed state.
    """
    check_structure(final_matching, n)

    state = replay(trace, company_prefs, candidate_prefs, n)
    check_matches(final_matching, state)

    for side, agents, prefs in (
        ("company", state.companies, company_prefs),
        ("candidate", state.candidates, candidate_prefs),
    ):
        for index, agent in enumerate(agents):
            check_proposal_history(agent.proposals, prefs[index], side, index)

    return state
