# ==============================================
# Command (Value Object)
# ==============================================
#
# PURPOSE:
#   The unit of work that travels through the pipeline.
#   One Command is created per input line, and the batcher
#   creates a synthetic Command each time it flushes.
#
# CLASS: Command (frozen dataclass)
# ---------------------------------
#   Attributes:
#   -----------
#   - text: str              → The command line, delimiter-free
#   - timestamp: datetime    → When the command was received (UTC)
#
#   Methods:
#   --------
#   - now(text) -> Command  (classmethod)
#       Stamp a new command with the current UTC time.
#
#   - epoch_seconds() -> int
#   - epoch_millis() -> int
#       Elapsed time since the Unix epoch, used for report file names.
#
# ==============================================

from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class Command:
    """An immutable command: its text and the moment it was received."""
    text: str
    timestamp: datetime

    @classmethod
    def now(cls, text: str) -> "Command":
        return cls(text=text, timestamp=datetime.now(timezone.utc))

    def epoch_seconds(self) -> int:
        return int(self.timestamp.timestamp())

    def epoch_millis(self) -> int:
        return int(self.timestamp.timestamp() * 1000)
