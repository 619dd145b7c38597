"""
Violations raised by the oracle.

Every violation is terminal: the first one found aborts the trial and the
whole run. They subclass ``AssertionError`` so a caller that expects the
oracle to "fail an assertion" on a bad matcher keeps working.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class OracleViolation(AssertionError):
    """Base class for every counterexample the oracle can report."""

    kind = "violation"

    def __init__(self, message: str, **indices: Any) -> None:
        super().__init__(message)
        self.message = message
        self.indices: Dict[str, Any] = indices
        self.trial: Optional[int] = None

    def __str__(self) -> str:
        details = ", ".join(f"{key}={value}" for key, value in self.indices.items())
        prefix = f"trial {self.trial}: " if self.trial is not None else ""
        if details:
            return f"{prefix}{self.message} ({details})"
        return f"{prefix}{self.message}"


class SizeMismatch(OracleViolation):
    kind = "size-mismatch"


class DuplicateAssignment(OracleViolation):
    kind = "duplicate-assignment"


class OutOfRangeIndex(OracleViolation):
    kind = "out-of-range"


class BlockingPairFound(OracleViolation):
    kind = "blocking-pair"


class TraceMismatch(OracleViolation):
    kind = "trace-mismatch"


class TraceLengthViolation(OracleViolation):
    kind = "trace-length"


class TraceDuplicateProposal(OracleViolation):
    kind = "trace-duplicate"


class TraceOrderViolation(OracleViolation):
    kind = "trace-order"


class InvalidPreferences(ValueError):
    """Preference lists handed to the oracle are not permutations of 0..n-1."""
