# ==============================================
# Errors
# ==============================================
#
# PURPOSE:
#   One place for every exception the pipeline raises on purpose.
#
# HIERARCHY:
# ----------
# - BulkError
#     ├── InvalidConfigurationError  (also a ValueError)
#     │     Bad bulk size, bad config value. Fatal at startup.
#     └── ReportWriteError           (also an OSError)
#           A report file could not be written. The driver decides
#           whether to stop or keep reading (see AppConfig.on_write_error).
#
# ==============================================

from typing import Optional


class BulkError(Exception):
    """Base class for all bulk errors."""


class InvalidConfigurationError(BulkError, ValueError):
    """Raised when a configuration value cannot be used."""


class ReportWriteError(BulkError, OSError):
    """
    Raised by ReportWriter.accept() when a report file could not be written.

    Attributes:
        result: The failed ReportResult (path, error message).
    """

    def __init__(self, message: str, result: Optional[object] = None):
        super().__init__(message)
        self.result = result
