"""Tests for the seeded preference list generator and oracle configuration."""

import pytest

from sm_oracle.config import N, NUM_TESTS, OracleConfig
from sm_oracle.generator import generate_input, make_rng
from sm_oracle.stability import validate_preferences


def test_lists_are_permutations(rng):
    prefs = generate_input(7, rng)
    validate_preferences(prefs, 7)


def test_values_are_plain_ints(rng):
    prefs = generate_input(3, rng)
    assert all(type(value) is int for pref in prefs for value in pref)


def test_same_seed_same_lists():
    assert generate_input(5, make_rng(3)) == generate_input(5, make_rng(3))


def test_stream_advances_between_calls():
    rng = make_rng(3)
    assert generate_input(6, rng) != generate_input(6, rng)


def test_single_agent(rng):
    assert generate_input(1, rng) == [[0]]


def test_rejects_empty(rng):
    with pytest.raises(ValueError):
        generate_input(0, rng)


def test_config_defaults():
    config = OracleConfig()
    assert (config.num_tests, config.n, config.seed) == (NUM_TESTS, N, None)


@pytest.mark.parametrize("kwargs", [{"num_tests": 0}, {"n": 0}, {"n": -3}, {"seed": -1}])
def test_config_rejects_bad_sizes(kwargs):
    with pytest.raises(ValueError):
        OracleConfig(**kwargs)


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("SM_ORACLE_NUM_TESTS", "3")
    monkeypatch.setenv("SM_ORACLE_N", "9")
    monkeypatch.setenv("SM_ORACLE_SEED", "11")
    assert OracleConfig.from_env() == OracleConfig(num_tests=3, n=9, seed=11)


def test_config_from_env_defaults():
    assert OracleConfig.from_env() == OracleConfig()


def test_config_from_env_rejects_non_integer(monkeypatch):
    monkeypatch.setenv("SM_ORACLE_NUM_TESTS", "many")
    with pytest.raises(ValueError, match="SM_ORACLE_NUM_TESTS"):
        OracleConfig.from_env()


def test_config_explicit_value_skips_env(monkeypatch):
    monkeypatch.setenv("SM_ORACLE_N", "0")
    assert OracleConfig.from_env(n=4).n == 4
