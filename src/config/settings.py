"""
Configuration settings for the GCD engine and its tooling.

**Conceptual**: This module provides strongly-typed configuration objects that
load from environment variables (via .env files). All settings are validated
at load time, so a malformed value fails fast with a clear message instead of
surfacing mid-run.

**Why centralized config?**
  - Single source of truth for engine behavior, logging, and benchmark output.
  - Easy to test (inject fake settings instead of reading from environment).
  - Fail-fast validation (GCD_LOG_LEVEL=LOUD -> clear error at startup).

This module uses python-dotenv to load .env files and dataclasses for type safety.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env from project root (dev/local environments); existing env vars win
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off", "")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("text", "json")


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (true/false), got: {raw}")


@dataclass(frozen=True)
class LoggingSettings:
    """
    Logging configuration.

    Attributes:
        level: Root log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        fmt: "text" for human-readable lines, "json" for structured records.
    """
    level: str = "WARNING"
    fmt: str = "text"

    def __post_init__(self):
        """Validate settings after initialization."""
        if self.level.upper() not in LOG_LEVELS:
            raise ValueError(
                f"GCD_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got: {self.level}"
            )
        if self.fmt not in LOG_FORMATS:
            raise ValueError(
                f"GCD_LOG_FORMAT must be one of {', '.join(LOG_FORMATS)}, got: {self.fmt}"
            )

    @classmethod
    def from_env(cls) -> "LoggingSettings":
        """
        Load logging settings from environment variables.

        **Environment variables**:
          - GCD_LOG_LEVEL (optional): Defaults to WARNING.
          - GCD_LOG_FORMAT (optional): "text" or "json". Defaults to text.
        """
        return cls(
            level=os.getenv("GCD_LOG_LEVEL", "WARNING").upper(),
            fmt=os.getenv("GCD_LOG_FORMAT", "text").lower(),
        )


@dataclass(frozen=True)
class BenchmarkSettings:
    """
    Configuration for the algorithm benchmark action.

    Attributes:
        seed: Random seed for input generation (None = fresh entropy each run).
        results_dir: Directory where benchmark CSVs are written.
    """
    seed: Optional[int] = None
    results_dir: Path = Path("data/results")

    @classmethod
    def from_env(cls) -> "BenchmarkSettings":
        """
        Load benchmark settings from environment variables.

        **Environment variables**:
          - GCD_BENCHMARK_SEED (optional): Integer seed.
          - GCD_BENCHMARK_RESULTS_DIR (optional): Defaults to data/results.

        Raises:
            ValueError: If GCD_BENCHMARK_SEED is set but not an integer.
        """
        seed_str = os.getenv("GCD_BENCHMARK_SEED")
        seed = None
        if seed_str:
            try:
                seed = int(seed_str)
            except ValueError:
                raise ValueError(
                    f"GCD_BENCHMARK_SEED must be an integer, got: {seed_str}"
                )

        results_dir = Path(os.getenv("GCD_BENCHMARK_RESULTS_DIR", "data/results"))
        return cls(seed=seed, results_dir=results_dir)


@dataclass(frozen=True)
class Settings:
    """
    Global settings for the GCD engine.

    **Usage pattern**:
      ```python
      from src.config.settings import get_settings

      settings = get_settings()
      if settings.stein_legacy_unit_branch:
          ...
      ```

    Attributes:
        stein_legacy_unit_branch: Default for the entry points'
            --legacy-unit-branch flag, passed on to gcd_stein as an explicit
            argument. The engine itself never reads settings. Defaults to False.
        logging: Logging configuration.
        benchmark: Benchmark action configuration.
    """
    stein_legacy_unit_branch: bool = False
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    benchmark: BenchmarkSettings = field(default_factory=BenchmarkSettings)

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Load global settings from environment variables.

        **Environment variables**:
          - GCD_STEIN_LEGACY_UNIT_BRANCH (optional): Boolean, defaults to false.
          - See LoggingSettings.from_env and BenchmarkSettings.from_env.

        Raises:
            ValueError: If any variable holds an invalid value.
        """
        legacy = _parse_bool(
            "GCD_STEIN_LEGACY_UNIT_BRANCH",
            os.getenv("GCD_STEIN_LEGACY_UNIT_BRANCH", "false"),
        )
        return cls(
            stein_legacy_unit_branch=legacy,
            logging=LoggingSettings.from_env(),
            benchmark=BenchmarkSettings.from_env(),
        )


# Lazily-initialized singleton; tests call reset_settings() or build Settings directly
_default_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the global settings singleton.

    Settings are loaded from environment on first call, then cached for reuse.

    Returns:
        Global Settings singleton.
    """
    global _default_settings

    if _default_settings is None:
        _default_settings = Settings.from_env()

    return _default_settings


def reset_settings():
    """
    Reset the global settings singleton (for testing).

    **Testing pattern**:
      ```python
      def test_something(monkeypatch):
          monkeypatch.setenv("GCD_STEIN_LEGACY_UNIT_BRANCH", "true")
          reset_settings()
          assert get_settings().stein_legacy_unit_branch
      ```
    """
    global _default_settings
    _default_settings = None
