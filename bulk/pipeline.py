# ==============================================
# Pipeline — Final Orchestrator
# ==============================================
#
# PURPOSE:
#   Assemble the stages into a forwarding chain and drive it
#   with input lines. Users interact with this module only;
#   the stages are internal.
#
# HOW THE STAGES CONNECT:
#
#   block-aware (default):
#
#     line ─► ConsoleInput ─► BatchCommandProcessor ─► ConsoleOutput ─► ReportWriter
#              "{" / "}"        "bulk: a, b, c"         stdout            bulk<N>.log
#
#   simple (block_aware=False):
#
#     line ─► BatchCommandProcessor ─► ConsoleOutput ─► ReportWriter
#
#   The Pipeline owns the ordered stage list; each stage only holds
#   a plain reference to the next one (stages[i].downstream = stages[i+1]).
#
# CLASS: Pipeline
# ---------------
#   - __init__(stages: list[Stage])
#   - feed(text, timestamp=None) -> Command
#   - close() -> None              (exactly once; later calls do nothing)
#   - get_status() -> dict
#   - context manager: closes on exit
#
# FUNCTIONS:
# ----------
#   - build_pipeline(bulk_size, config=None, stream=None) -> Pipeline
#   - run_bulk(bulk_size, lines, config=None, stream=None) -> int
#       Driver loop. Feeds every line, applies the write-error
#       policy, closes the pipeline, returns the exit status.
#
# ==============================================

import sys
from datetime import datetime
from typing import Iterable, Optional, TextIO

from bulk.batching.batch_processor import BatchCommandProcessor
from bulk.commands.command import Command
from bulk.commands.processor import Stage
from bulk.config import AppConfig, get_config
from bulk.errors import ReportWriteError
from bulk.stages.console_input import ConsoleInput
from bulk.stages.console_output import ConsoleOutput
from bulk.stages.report_writer import ReportWriter


class Pipeline:
    """
    An ordered chain of stages fed from the front.

    The first stage is the head; every command fed to the pipeline
    enters there and cascades as far as the stages forward it
    before feed() returns.
    """

    def __init__(self, stages: list[Stage]):
        """
        Wire the stages in order.

        Args:
            stages: Stages from head to tail. Must not be empty.
        """
        if not stages:
            raise ValueError("A pipeline needs at least one stage")

        self.stages = list(stages)
        for upstream, downstream in zip(self.stages, self.stages[1:]):
            upstream.downstream = downstream
        self.stages[-1].downstream = None

        self._lines_fed = 0
        self._closed = False

    @property
    def head(self) -> Stage:
        return self.stages[0]

    @property
    def closed(self) -> bool:
        return self._closed

    def find(self, stage_type: type) -> Optional[Stage]:
        """Return the first stage of the given type, if any."""
        for stage in self.stages:
            if isinstance(stage, stage_type):
                return stage
        return None

    def feed(self, text: str, timestamp: Optional[datetime] = None) -> Command:
        """
        Wrap one line as a Command and push it through the chain.

        Args:
            text: The command text (line terminator already removed).
            timestamp: Receive time; defaults to now (UTC).

        Returns:
            The Command that was fed.
        """
        if self._closed:
            raise RuntimeError("Pipeline is closed")

        command = Command.now(text) if timestamp is None else Command(text, timestamp)
        self._lines_fed += 1
        self.head.accept(command)
        return command

    def close(self) -> None:
        """
        Close every stage, head first, exactly once.

        Closing the batcher flushes its pending batch through the
        stages after it, which are still open at that point.
        """
        if self._closed:
            return
        self._closed = True

        for stage in self.stages:
            stage.close()

    def get_status(self) -> dict:
        return {
            "lines_fed": self._lines_fed,
            "closed": self._closed,
            "stages": [
                stage.get_status() if hasattr(stage, "get_status") else {"stage": type(stage).__name__}
                for stage in self.stages
            ],
        }

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False  # Don't suppress exceptions


def build_pipeline(
    bulk_size: int,
    config: Optional[AppConfig] = None,
    stream: Optional[TextIO] = None,
) -> Pipeline:
    """
    Assemble the standard pipeline.

    Args:
        bulk_size: Batch threshold (positive int).
        config: Application configuration. If None, loads from environment.
        stream: Where ConsoleOutput writes. Defaults to sys.stdout.

    Returns:
        A ready-to-feed Pipeline.

    Raises:
        InvalidConfigurationError: If bulk_size is not a positive int.
    """
    config = config or get_config()

    stages: list[Stage] = []
    if config.batch.block_aware:
        stages.append(ConsoleInput())

    stages.append(BatchCommandProcessor(
        bulk_size,
        prefix=config.batch.prefix,
        separator=config.batch.separator,
        flush_open_block_on_close=config.batch.flush_open_block_on_close
    ))
    stages.append(ConsoleOutput(stream=stream))
    stages.append(ReportWriter(
        report_dir=config.report.report_dir,
        file_prefix=config.report.file_prefix,
        file_suffix=config.report.file_suffix,
        timestamp_unit=config.report.timestamp_unit,
        terminal=config.report.terminal
    ))

    return Pipeline(stages)


def _strip_line_terminator(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n"):
        return line[:-1]
    return line


def run_bulk(
    bulk_size: int,
    lines: Iterable[str],
    config: Optional[AppConfig] = None,
    stream: Optional[TextIO] = None,
) -> int:
    """
    Drive a freshly built pipeline over `lines` until they run out.

    Write-error policy (config.on_write_error):
        "abort" → stop reading, report the error, close, return 0
        "skip"  → report the error and carry on with the next line

    Args:
        bulk_size: Batch threshold (positive int).
        lines: Any iterable of text lines, e.g. sys.stdin.
        config: Application configuration. If None, loads from environment.
        stream: Where ConsoleOutput writes. Defaults to sys.stdout.

    Returns:
        Process exit status (0; write failures are reported, not signalled).
    """
    config = config or get_config()
    pipeline = build_pipeline(bulk_size, config, stream)
    write_errors = 0

    try:
        for line in lines:
            try:
                pipeline.feed(_strip_line_terminator(line))
            except ReportWriteError as e:
                write_errors += 1
                if config.on_write_error == "skip":
                    print(f"⚠ {e} (skipped)", file=sys.stderr)
                    continue
                print(f"✗ {e}", file=sys.stderr)
                break
    finally:
        # Pending batch is flushed even when reading the input fails
        try:
            pipeline.close()
        except ReportWriteError as e:
            write_errors += 1
            print(f"✗ {e}", file=sys.stderr)

    if config.verbose:
        status = pipeline.get_status()
        print(f"✓ Processed {status['lines_fed']} line(s), "
              f"{write_errors} write error(s)", file=sys.stderr)
        for stage_status in status["stages"]:
            details = ", ".join(f"{k}={v}" for k, v in stage_status.items() if k != "stage")
            print(f"   - {stage_status['stage']}: {details}", file=sys.stderr)

    return 0
