"""
Pytest configuration file.

Ensures the repo root is on sys.path so that 'import src...' works, and
isolates every test from GCD_* environment variables and cached settings.
"""
import logging
import sys
from pathlib import Path

import pytest

# Add the repo root to sys.path
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from src.config.settings import reset_settings  # noqa: E402

GCD_ENV_VARS = (
    "GCD_STEIN_LEGACY_UNIT_BRANCH",
    "GCD_LOG_LEVEL",
    "GCD_LOG_FORMAT",
    "GCD_BENCHMARK_SEED",
    "GCD_BENCHMARK_RESULTS_DIR",
)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Clear GCD_* variables and the settings singleton around each test."""
    for name in GCD_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    root_level = logging.root.level
    yield
    reset_settings()
    for handler in list(logging.root.handlers):
        if handler.get_name() == "gcd-engine":
            logging.root.removeHandler(handler)
    logging.root.setLevel(root_level)
