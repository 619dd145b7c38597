"""Pytest configuration and fixtures for sm_oracle tests."""

import pytest

from sm_oracle.config import OracleConfig
from sm_oracle.generator import make_rng


@pytest.fixture
def rng():
    """A seeded generator so randomized tests are reproducible."""
    return make_rng(12345)


@pytest.fixture
def small_config() -> OracleConfig:
    return OracleConfig(num_tests=20, n=6, seed=7)


@pytest.fixture
def three_by_three():
    """Companies and candidates whose unique stable matching is (0,0), (1,1), (2,2)."""
    companies = [[0, 1, 2], [1, 0, 2], [0, 1, 2]]
    candidates = [[0, 1, 2], [0, 1, 2], [0, 1, 2]]
    return companies, candidates


@pytest.fixture(autouse=True)
def _clear_oracle_env(monkeypatch):
    """Keep SM_ORACLE_* variables from the outer shell out of the tests."""
    for name in ("SM_ORACLE_NUM_TESTS", "SM_ORACLE_N", "SM_ORACLE_SEED"):
        monkeypatch.delenv(name, raising=False)
