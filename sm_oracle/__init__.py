from .agents import Hire, MatchRun, Offer, ReplayState
from .config import OracleConfig
from .errors import (
    BlockingPairFound,
    DuplicateAssignment,
    InvalidPreferences,
    OracleViolation,
    OutOfRangeIndex,
    SizeMismatch,
    TraceDuplicateProposal,
    TraceLengthViolation,
    TraceMismatch,
    TraceOrderViolation,
)
from .generator import generate_input, make_rng
from .oracles import TrialResult, run_stability_oracle, run_trace_oracle
from .stability import check_stability, check_structure
from .trace import check_trace_consistency, replay

__all__ = [
    "BlockingPairFound",
    "DuplicateAssignment",
    "Hire",
    "InvalidPreferences",
    "MatchRun",
    "Offer",
    "OracleConfig",
    "OracleViolation",
    "OutOfRangeIndex",
    "ReplayState",
    "SizeMismatch",
    "TraceDuplicateProposal",
    "TraceLengthViolation",
    "TraceMismatch",
    "TraceOrderViolation",
    "TrialResult",
    "check_stability",
    "check_structure",
    "check_trace_consistency",
    "generate_input",
    "make_rng",
    "replay",
    "run_stability_oracle",
    "run_trace_oracle",
]
