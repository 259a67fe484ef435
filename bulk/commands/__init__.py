# ==============================================
# TOPIC 1: COMMANDS
# ==============================================
#
# This package defines what flows through the pipeline
# and what every pipeline stage must be able to do.
#
# Modules:
# --------
# - command.py    → Command value object (text + timestamp)
# - processor.py  → Stage protocol and CommandProcessor base class
#
# ==============================================

from .command import Command
from .processor import Stage, CommandProcessor

__all__ = ["Command", "Stage", "CommandProcessor"]
