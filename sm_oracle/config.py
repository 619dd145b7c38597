from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

NUM_TESTS = 20
N = 6

ENV_NUM_TESTS = "SM_ORACLE_NUM_TESTS"
ENV_N = "SM_ORACLE_N"
ENV_SEED = "SM_ORACLE_SEED"


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    value = os.environ.get(name, "")
    if value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


@dataclass
class OracleConfig:
    """How many trials to run, at which problem size, from which seed."""
    num_tests: int = NUM_TESTS
    n: int = N
    seed: Optional[int] = None  # None gives a fresh, unseeded run

    def __post_init__(self):
        """Reject sizes and seeds the oracle cannot run."""
        if self.num_tests < 1:
            raise ValueError(f"num_tests must be at least 1, got {self.num_tests}")
        if self.n < 1:
            raise ValueError(f"n must be at least 1, got {self.n}")
        if self.seed is not None and self.seed < 0:
            raise ValueError(f"seed must be non-negative, got {self.seed}")

    @staticmethod
    def from_env(
        num_tests: Optional[int] = None,
        n: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> "OracleConfig":
        """
        Build a config from SM_ORACLE_* environment variables, falling back to defaults.

        Explicit arguments win, and the matching variable is then not read at all.
        """
        return OracleConfig(
            num_tests=num_tests if num_tests is not None else _env_int(ENV_NUM_TESTS, NUM_TESTS),
            n=n if n is not None else _env_int(ENV_N, N),
            seed=seed if seed is not None else _env_int(ENV_SEED, None),
        )
