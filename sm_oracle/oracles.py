from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import numpy as np
from tqdm import tqdm

from .agents import PreferenceLists, StableMatcher, StableMatcherWithTrace
from .config import OracleConfig
from .errors import OracleViolation
from .generator import generate_input, make_rng
from .stability import check_stability, validate_preferences
from .trace import check_trace_consistency

logger = logging.getLogger(__name__)


@dataclass
class TrialResult:
    """Summary of one passed trial."""
    trial: int
    n: int
    num_hires: int
    num_offers: int = 0  # Part A matchers report no trace


def _generate_trial(n: int, rng: np.random.Generator) -> Tuple[PreferenceLists, PreferenceLists]:
    """Draw company preferences, then candidate preferences, from the shared stream."""
    companies = generate_input(n, rng)
    candidates = generate_input(n, rng)
    validate_preferences(companies, n, "company")
    validate_preferences(candidates, n, "candidate")
    logger.debug("Company picks: %s", companies)
    logger.debug("Candidate picks: %s", candidates)
    return companies, candidates


def _run_trials(
    run_trial: Callable[[int, PreferenceLists, PreferenceLists], TrialResult],
    config: OracleConfig,
    rng: Optional[np.random.Generator],
    progress: bool,
    desc: str,
) -> List[TrialResult]:
    """Run config.num_tests trials, stopping at the first violation."""
    rng = rng if rng is not None else make_rng(config.seed)
    results: List[TrialResult] = []

    for trial in tqdm(range(config.num_tests), desc=desc, disable=not progress):
        companies, candidates = _generate_trial(config.n, rng)
        try:
            result = run_trial(trial, companies, candidates)
        except OracleViolation as violation:
            violation.trial = trial
            logger.error("%s failed on trial %d: %s", desc, trial, violation)
            raise
        logger.info("%s trial %d passed (n=%d)", desc, trial, config.n)
        results.append(result)

    return results


def run_stability_oracle(
    matcher: StableMatcher,
    config: Optional[OracleConfig] = None,
    rng: Optional[np.random.Generator] = None,
    progress: bool = False,
) -> List[TrialResult]:
    """
    Check that `matcher` returns a valid, stable matching on random inputs.

    Raises the first OracleViolation found; returns one TrialResult per trial otherwise.
    """
    config = config if config is not None else OracleConfig()

    def run_trial(trial: int, companies: PreferenceLists, candidates: PreferenceLists) -> TrialResult:
        hires = matcher(companies, candidates)
        logger.debug("Pairings: %s", hires)
        check_stability(hires, companies, candidates, config.n)
        return TrialResult(trial=trial, n=config.n, num_hires=len(hires))

    return _run_trials(run_trial, config, rng, progress, "Stability oracle")


def run_trace_oracle(
    matcher_with_trace: StableMatcherWithTrace,
    config: Optional[OracleConfig] = None,
    rng: Optional[np.random.Generator] = None,
    progress: bool = False,
) -> List[TrialResult]:
    """
    Check that `matcher_with_trace` follows deferred acceptance and that its
    trace leads to the matching it returns.
    """
    config = config if config is not None else OracleConfig()

    def run_trial(trial: int, companies: PreferenceLists, candidates: PreferenceLists) -> TrialResult:
        trace, out = matcher_with_trace(companies, candidates)
        logger.debug("Trace: %s", trace)
        logger.debug("Output: %s", out)
        check_trace_consistency(out, companies, candidates, trace, config.n)
        return TrialResult(trial=trial, n=config.n, num_hires=len(out), num_offers=len(trace))

    return _run_trials(run_trial, config, rng, progress, "Trace oracle")
