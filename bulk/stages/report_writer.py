# ==============================================
# ReportWriter
# ==============================================
#
# PURPOSE:
#   Persist each command it receives to its own report file:
#
#       <report_dir>/bulk<N>.log     (contents: command.text, no newline)
#
#   N is the command timestamp as whole seconds since the Unix
#   epoch ("s", default) or milliseconds ("ms"). Existing files
#   with the same name are overwritten. The report directory is
#   created on first write if it does not exist.
#
# TERMINAL vs TEE:
#   terminal=True  → last stage, nothing is forwarded (default)
#   terminal=False → forwards the command after writing it
#
# FAILURES:
#   write() never raises for I/O or encoding problems; it returns a ReportResult
#   with `error` set. accept() turns a failed result into a
#   ReportWriteError so the driver can apply its write-error policy.
#
# DATA CLASS: ReportResult
# ------------------------
#   - path: Path
#   - bytes_written: int
#   - error: str | None
#   - ok (property) → error is None
#
# ==============================================

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from bulk.commands.command import Command
from bulk.commands.processor import CommandProcessor, Stage
from bulk.config import TIMESTAMP_UNITS
from bulk.errors import InvalidConfigurationError, ReportWriteError


@dataclass
class ReportResult:
    path: Path
    bytes_written: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ReportWriter(CommandProcessor):
    """Writes each command's text to a timestamp-named report file."""

    def __init__(
        self,
        downstream: Optional[Stage] = None,
        report_dir: str = ".",
        file_prefix: str = "bulk",
        file_suffix: str = ".log",
        timestamp_unit: str = "s",
        terminal: bool = True,
    ):
        if timestamp_unit not in TIMESTAMP_UNITS:
            raise InvalidConfigurationError(f"Invalid timestamp unit {timestamp_unit!r}")

        super().__init__(downstream)
        self.report_dir = Path(report_dir)
        self.file_prefix = file_prefix
        self.file_suffix = file_suffix
        self.timestamp_unit = timestamp_unit
        self.terminal = terminal
        self.files_written = 0
        self.last_result: Optional[ReportResult] = None

    def get_filename(self, command: Command) -> str:
        if self.timestamp_unit == "ms":
            counter = command.epoch_millis()
        else:
            counter = command.epoch_seconds()
        return f"{self.file_prefix}{counter}{self.file_suffix}"

    def get_path(self, command: Command) -> Path:
        return self.report_dir / self.get_filename(command)

    def write(self, command: Command) -> ReportResult:
        """
        Write one command to its report file.

        Args:
            command: Command whose text becomes the whole file.

        Returns:
            ReportResult describing what happened; I/O and encoding
            failures are reported in it, not raised.
        """
        path = self.get_path(command)
        try:
            self.report_dir.mkdir(parents=True, exist_ok=True)
            # newline="" keeps "\n" in the text from being translated;
            # surrogateescape writes undecodable input bytes back unchanged
            with open(path, "w", encoding="utf-8", errors="surrogateescape", newline="") as f:
                f.write(command.text)
        except (OSError, UnicodeError) as e:
            result = ReportResult(path=path, error=f"Could not write {path}: {e}")
        else:
            self.files_written += 1
            result = ReportResult(path=path, bytes_written=len(command.text.encode("utf-8", "surrogateescape")))

        self.last_result = result
        return result

    def accept(self, command: Command) -> None:
        result = self.write(command)
        if not result.ok:
            raise ReportWriteError(result.error, result)

        if not self.terminal:
            self.forward(command)

    def get_status(self) -> dict:
        return {
            "stage": type(self).__name__,
            "report_dir": str(self.report_dir),
            "files_written": self.files_written,
            "terminal": self.terminal,
        }
