"""Pytest configuration for the arrange test suite.

Hypothesis profiles (max_examples):
- dev: 200, local runs
- ci: 50, derandomized, picked when CI=true
- verbose: 100, prints every example

HYPOTHESIS_PROFILE=<name> overrides the automatic choice.

Tests marked ``@pytest.mark.fuzz`` are skipped unless requested with
``pytest -m fuzz`` or by naming test_property_fuzzing.py on the command line.
"""

import os
from datetime import datetime

import pytest
from hypothesis import Phase, Verbosity, settings

from arrange import ArrangeConfig, Arranger

_PHASES = [Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink]

settings.register_profile("dev", max_examples=200, phases=_PHASES)
settings.register_profile(
    "ci", max_examples=50, phases=_PHASES, derandomize=True, print_blob=True
)
settings.register_profile(
    "verbose", max_examples=100, phases=_PHASES, verbosity=Verbosity.verbose
)


def _select_profile() -> str:
    requested = os.environ.get("HYPOTHESIS_PROFILE")
    if requested in ("dev", "ci", "verbose"):
        return requested
    return "ci" if os.environ.get("CI") == "true" else "dev"


settings.load_profile(_select_profile())


def pytest_configure(config: pytest.Config) -> None:
    """Register the fuzz marker."""
    config.addinivalue_line(
        "markers",
        "fuzz: Intensive property tests for fuzzing (excluded from normal test runs)",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip fuzz-marked tests in ordinary runs."""
    if "fuzz" in str(config.getoption("-m", default="")):
        return
    if any("test_property_fuzzing" in str(arg) for arg in config.invocation_params.args):
        return

    skip_fuzz = pytest.mark.skip(reason="Fuzzing test - run with: pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip_fuzz)


@pytest.fixture
def arranger() -> Arranger:
    """Fresh default engine with its own template cache."""
    return Arranger()


@pytest.fixture
def uncached() -> Arranger:
    """Default engine that compiles every pattern afresh."""
    return Arranger(ArrangeConfig(disable_cache=True))


@pytest.fixture
def moment() -> datetime:
    """2000-01-02 03:04:05.678 local time."""
    return datetime(2000, 1, 2, 3, 4, 5, 678000)
