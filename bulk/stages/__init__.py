# ==============================================
# TOPIC 3: STAGES (Console + Report files)
# ==============================================
#
# This package holds the stages at the two ends of the pipeline:
# the front stage that understands block delimiters, and the
# sinks that print commands and persist them to report files.
#
# Modules:
# --------
# - console_input.py   → Strips "{" / "}" and turns them into block signals
# - console_output.py  → Prints each command on its own line
# - report_writer.py   → Writes each command to bulk<N>.log
#
# ==============================================

from .console_input import ConsoleInput, BLOCK_OPEN, BLOCK_CLOSE
from .console_output import ConsoleOutput
from .report_writer import ReportWriter, ReportResult

__all__ = [
    "ConsoleInput",
    "BLOCK_OPEN",
    "BLOCK_CLOSE",
    "ConsoleOutput",
    "ReportWriter",
    "ReportResult"
]
