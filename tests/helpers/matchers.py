"""
Matchers under test for the oracle suite.

``gale_shapley`` and ``gale_shapley_with_trace`` are a company-proposing
deferred acceptance implementation; everything else is deliberately broken in
one specific way.
"""
from __future__ import annotations

from typing import List, Optional

from sm_oracle.agents import Hire, MatchRun, Offer, PreferenceLists


def gale_shapley_with_trace(companies: PreferenceLists, candidates: PreferenceLists) -> MatchRun:
    n = len(companies)
    rank = [{company: i for i, company in enumerate(prefs)} for prefs in candidates]
    next_choice = [0] * n
    company_match: List[Optional[int]] = [None] * n
    candidate_match: List[Optional[int]] = [None] * n
    free = list(range(n - 1, -1, -1))
    trace: List[Offer] = []

    while free:
        company = free.pop()
        candidate = companies[company][next_choice[company]]
        next_choice[company] += 1
        trace.append(Offer(proposer=company, recipient=candidate, from_company=True))

        current = candidate_match[candidate]
        if current is None:
            candidate_match[candidate] = company
            company_match[company] = candidate
        elif rank[candidate][company] < rank[candidate][current]:
            candidate_match[candidate] = company
            company_match[company] = candidate
            company_match[current] = None
            free.append(current)
        else:
            free.append(company)

    out = [Hire(company=company, candidate=company_match[company]) for company in range(n)]
    return MatchRun(trace=trace, out=out)


def gale_shapley(companies: PreferenceLists, candidates: PreferenceLists) -> List[Hire]:
    return gale_shapley_with_trace(companies, candidates).out


def candidate_proposing_with_trace(companies: PreferenceLists, candidates: PreferenceLists) -> MatchRun:
    """Deferred acceptance with candidates proposing; hires are reported company-first."""
    run = gale_shapley_with_trace(candidates, companies)
    trace = [Offer(proposer=o.proposer, recipient=o.recipient, from_company=False) for o in run.trace]
    out = sorted(
        (Hire(company=h.candidate, candidate=h.company) for h in run.out),
        key=lambda hire: hire.company,
    )
    return MatchRun(trace=trace, out=out)


def identity_matcher(companies: PreferenceLists, candidates: PreferenceLists) -> List[Hire]:
    """Pairs company i with candidate i, ignoring all preferences."""
    return [Hire(company=i, candidate=i) for i in range(len(companies))]


def short_matcher(companies: PreferenceLists, candidates: PreferenceLists) -> List[Hire]:
    return gale_shapley(companies, candidates)[:-1]


def duplicate_matcher(companies: PreferenceLists, candidates: PreferenceLists) -> List[Hire]:
    hires = gale_shapley(companies, candidates)
    hires[-1] = Hire(company=hires[-1].company, candidate=hires[0].candidate)
    return hires


def out_of_range_matcher(companies: PreferenceLists, candidates: PreferenceLists) -> List[Hire]:
    hires = gale_shapley(companies, candidates)
    hires[-1] = Hire(company=hires[-1].company, candidate=len(companies))
    return hires


def truncated_trace_matcher(companies: PreferenceLists, candidates: PreferenceLists) -> MatchRun:
    """Claims the right matching but drops the final, accepted offer from its trace."""
    run = gale_shapley_with_trace(companies, candidates)
    return MatchRun(trace=run.trace[:-1], out=run.out)


def reversed_trace_matcher(companies: PreferenceLists, candidates: PreferenceLists) -> MatchRun:
    """Each company proposes from the bottom of its list; the trace is faithful to that."""
    reversed_companies = [list(reversed(prefs)) for prefs in companies]
    return gale_shapley_with_trace(reversed_companies, candidates)


NOT_A_MATCHER = 42
