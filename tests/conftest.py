# tests/conftest.py
"""Shared fixtures for the opcount test-suite."""

import pytest

from opcount import Instrumented, OperationCounter


@pytest.fixture
def counter():
    return OperationCounter()


@pytest.fixture
def wrap(counter):
    """Wrap raw values with the shared ``counter`` fixture."""
    def _wrap(*values):
        return [Instrumented(v, counter) for v in values]
    return _wrap


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "OPCOUNT_ALGORITHM",
        "OPCOUNT_SIZES",
        "OPCOUNT_BATCH",
        "OPCOUNT_SEED",
        "OPCOUNT_INCLUDE_TEARDOWN",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def tallies(new=0, clone=0, drop=0, eq=0, partial_cmp=0, cmp=0):
    """Build an expected counter from keyword tallies."""
    return OperationCounter([new, clone, drop, eq, partial_cmp, cmp])
