# ==============================================
# BatchCommandProcessor
# ==============================================
#
# PURPOSE:
#   Collect commands into batches of `bulk_size` and forward each
#   batch downstream as a single Command:
#
#       "bulk: a, b, c"   (timestamp = timestamp of "a")
#
# FLUSH TRIGGERS:
#   1. Size    → pending reaches bulk_size (only outside a block)
#   2. Block   → notify_block_start() / notify_block_end()
#   3. Close   → close() at end of input (see below)
#
# BLOCK MODE:
#   Between notify_block_start() and notify_block_end() the batch is
#   "forced": size-triggered flushing is suspended and commands pile up
#   until the block ends, then go out together exactly once.
#
# CLOSE:
#   - Not in a block       → flush whatever is pending.
#   - Inside an open block → pending commands are DROPPED, unless
#                            flush_open_block_on_close=True.
#   close() only acts once; later calls do nothing.
#
# CLASS: BatchCommandProcessor
# ----------------------------
#   Constructor:
#   ------------
#   - __init__(bulk_size, downstream=None, prefix="bulk: ",
#              separator=", ", flush_open_block_on_close=False)
#       bulk_size must be a positive int → else InvalidConfigurationError
#
#   Methods:
#   --------
#   - accept(command)
#   - notify_block_start() / notify_block_end()
#   - flush() -> Optional[Command]
#   - close()
#   - get_status() -> dict
#
# ==============================================

import sys
from typing import Optional

from bulk.commands.command import Command
from bulk.commands.processor import CommandProcessor, Stage
from bulk.errors import InvalidConfigurationError


class BatchCommandProcessor(CommandProcessor):
    """Buffers commands and forwards them downstream in batches."""

    def __init__(
        self,
        bulk_size: int,
        downstream: Optional[Stage] = None,
        prefix: str = "bulk: ",
        separator: str = ", ",
        flush_open_block_on_close: bool = False,
    ):
        # bool is an int subclass; True is not a bulk size
        if isinstance(bulk_size, bool) or not isinstance(bulk_size, int):
            raise InvalidConfigurationError(f"Bulk size must be an integer, got {bulk_size!r}")
        if bulk_size <= 0:
            raise InvalidConfigurationError(f"Bulk size must be positive, got {bulk_size}")

        super().__init__(downstream)
        self.bulk_size = bulk_size
        self.prefix = prefix
        self.separator = separator
        self.flush_open_block_on_close = flush_open_block_on_close

        # Internal state
        self._pending: list[Command] = []
        self._block_forced = False
        self._closed = False
        self._batches_flushed = 0
        self._commands_flushed = 0
        self._commands_dropped = 0

    @property
    def pending(self) -> list[Command]:
        return list(self._pending)

    @property
    def block_forced(self) -> bool:
        return self._block_forced

    def accept(self, command: Command) -> None:
        self._pending.append(command)

        if not self._block_forced and len(self._pending) >= self.bulk_size:
            self.flush()

    def notify_block_start(self) -> None:
        self._block_forced = True
        self.flush()

    def notify_block_end(self) -> None:
        self._block_forced = False
        self.flush()

    def flush(self) -> Optional[Command]:
        """
        Forward everything pending as one batch command and clear the batch.

        Returns:
            The batch command that was built, or None if nothing was pending.
        """
        if not self._pending:
            return None

        batch = Command(
            text=self.prefix + self.separator.join(c.text for c in self._pending),
            timestamp=self._pending[0].timestamp,
        )
        size = len(self._pending)

        try:
            self.forward(batch)
        finally:
            # Cleared even when downstream raises, so a failed batch is never re-sent
            self._pending.clear()
            self._batches_flushed += 1
            self._commands_flushed += size

        return batch

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True

        if not self._block_forced or self.flush_open_block_on_close:
            self.flush()
            return

        if self._pending:
            self._commands_dropped += len(self._pending)
            print(
                f"⚠ Input ended inside an open block: dropped {len(self._pending)} "
                f"pending command(s)",
                file=sys.stderr,
            )
            self._pending.clear()

    def get_status(self) -> dict:
        return {
            "stage": type(self).__name__,
            "bulk_size": self.bulk_size,
            "pending": len(self._pending),
            "block_forced": self._block_forced,
            "batches_flushed": self._batches_flushed,
            "commands_flushed": self._commands_flushed,
            "commands_dropped": self._commands_dropped,
            "closed": self._closed,
        }
