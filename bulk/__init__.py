# ==============================================
# bulk — Batch Command Processor
# ==============================================
#
# Package Structure (3 Topics + Orchestrator):
#
# bulk/
# ├── commands/       # Topic 1: Command value + stage contract
# ├── batching/       # Topic 2: Accumulate commands and flush batches
# ├── stages/         # Topic 3: Console input/output and report files
# ├── config.py       # Configuration management
# ├── errors.py       # Exception hierarchy
# ├── pipeline.py     # Final orchestrator: assembly + driver loop
# └── cli.py          # Command line entry point
#
# ==============================================

__version__ = "0.1.0"
