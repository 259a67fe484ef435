# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to all other modules. Command-line flags override these
#   values (see cli.py).
#
# CLASSES:
# --------
# - BatchConfig (dataclass)
#     block_aware: bool                (default True)   BULK_BLOCK_AWARE
#     flush_open_block_on_close: bool  (default False)  BULK_FLUSH_OPEN_BLOCK
#     prefix: str                      (default "bulk: ")
#     separator: str                   (default ", ")
#
# - ReportConfig (dataclass)
#     report_dir: str                  (default ".")    BULK_REPORT_DIR
#     file_prefix: str                 (default "bulk")
#     file_suffix: str                 (default ".log")
#     timestamp_unit: str              (default "s")    BULK_TIMESTAMP_UNIT ("s" | "ms")
#     terminal: bool                   (default True)   BULK_REPORT_TERMINAL
#
# - AppConfig (dataclass)
#     batch: BatchConfig
#     report: ReportConfig
#     on_write_error: str              (default "abort") BULK_ON_WRITE_ERROR ("abort" | "skip")
#     verbose: bool                    (default False)   BULK_VERBOSE
#
# FUNCTIONS:
# ----------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# - reset_config() -> None
#     Forget the singleton (used by tests).
#
# USAGE:
# ------
#   from bulk.config import get_config
#   config = get_config()
#   print(config.report.report_dir)
#
# ==============================================

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from bulk.errors import InvalidConfigurationError


TIMESTAMP_UNITS = ("s", "ms")
WRITE_ERROR_POLICIES = ("abort", "skip")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class BatchConfig:
    """Batching behaviour."""
    block_aware: bool = True
    flush_open_block_on_close: bool = False
    prefix: str = "bulk: "
    separator: str = ", "


@dataclass
class ReportConfig:
    """Report file naming and placement."""
    report_dir: str = "."
    file_prefix: str = "bulk"
    file_suffix: str = ".log"
    timestamp_unit: str = "s"
    terminal: bool = True

    def __post_init__(self):
        if self.timestamp_unit not in TIMESTAMP_UNITS:
            raise InvalidConfigurationError(
                f"Invalid timestamp unit {self.timestamp_unit!r} "
                f"(expected one of {', '.join(TIMESTAMP_UNITS)})"
            )


@dataclass
class AppConfig:
    """Main application configuration."""
    batch: BatchConfig = field(default_factory=BatchConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    on_write_error: str = "abort"
    verbose: bool = False

    def __post_init__(self):
        if self.on_write_error not in WRITE_ERROR_POLICIES:
            raise InvalidConfigurationError(
                f"Invalid write error policy {self.on_write_error!r} "
                f"(expected one of {', '.join(WRITE_ERROR_POLICIES)})"
            )


# Singleton instance
_config_instance: Optional[AppConfig] = None


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise InvalidConfigurationError(f"Invalid boolean for {name}: {raw!r}")


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration

    Raises:
        InvalidConfigurationError: If an environment value is unusable.
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    # Build batching configuration
    batch_config = BatchConfig(
        block_aware=_env_bool("BULK_BLOCK_AWARE", True),
        flush_open_block_on_close=_env_bool("BULK_FLUSH_OPEN_BLOCK", False),
    )

    # Build report configuration
    report_config = ReportConfig(
        report_dir=os.getenv("BULK_REPORT_DIR", "."),
        timestamp_unit=os.getenv("BULK_TIMESTAMP_UNIT", "s"),
        terminal=_env_bool("BULK_REPORT_TERMINAL", True),
    )

    # Build main application configuration
    _config_instance = AppConfig(
        batch=batch_config,
        report=report_config,
        on_write_error=os.getenv("BULK_ON_WRITE_ERROR", "abort"),
        verbose=_env_bool("BULK_VERBOSE", False),
    )

    return _config_instance


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() reloads it."""
    global _config_instance
    _config_instance = None
