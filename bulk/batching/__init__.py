# ==============================================
# TOPIC 2: BATCHING
# ==============================================
#
# This package accumulates individual commands and releases
# them downstream as one synthetic "bulk: ..." command.
#
# Modules:
# --------
# - batch_processor.py  → BatchCommandProcessor (size + block driven flushing)
#
# ==============================================

from .batch_processor import BatchCommandProcessor

__all__ = ["BatchCommandProcessor"]
