"""Shared pytest setup for the phrasebook tests.

Hypothesis profiles (pick one with HYPOTHESIS_PROFILE, otherwise "ci" when
CI=true and "dev" elsewhere):
    dev      500 examples, random seeds
    ci       50 examples, derandomized, failure blobs printed
    verbose  100 examples with verbose output

Tests marked @pytest.mark.fuzz only run with `pytest -m fuzz`.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

from phrasebook.loading import SearchPathResourceLoader

# Hypothesis profiles

_PHASES = (Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink)

_PROFILES: dict[str, dict[str, object]] = {
    "dev": {"max_examples": 500},
    "ci": {"max_examples": 50, "derandomize": True, "print_blob": True},
    "verbose": {"max_examples": 100, "verbosity": Verbosity.verbose},
}

for _name, _options in _PROFILES.items():
    settings.register_profile(_name, phases=_PHASES, **_options)  # type: ignore[arg-type]


def _detect_profile() -> str:
    """HYPOTHESIS_PROFILE if it names a profile, else "ci" under CI, else "dev"."""
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in _PROFILES:
        return explicit
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


settings.load_profile(_detect_profile())


# Fuzz marker


def pytest_configure(config: pytest.Config) -> None:
    """Declare the fuzz marker (also listed in pyproject.toml)."""
    config.addinivalue_line("markers", "fuzz: long-running property tests, opt-in via -m fuzz")


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip fuzz tests unless the -m expression mentions fuzz."""
    if "fuzz" in str(config.getoption("-m", default="")):
        return
    skip = pytest.mark.skip(reason="fuzz test; run with pytest -m fuzz")
    for item in items:
        if item.get_closest_marker("fuzz") is not None:
            item.add_marker(skip)


# Fixtures

RESOURCES_DIR = Path(__file__).parent / "resources"


@pytest.fixture
def resources_loader() -> SearchPathResourceLoader:
    """Search-path loader rooted at tests/resources."""
    return SearchPathResourceLoader(roots=(RESOURCES_DIR,))
