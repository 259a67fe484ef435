# ==============================================
# ConsoleInput
# ==============================================
#
# PURPOSE:
#   Front stage of the block-aware pipeline. Recognises the
#   block delimiters and turns them into notifications for
#   the next stage instead of passing them through.
#
# RULES:
#   "{"  → depth += 1; on 0 → 1 call downstream.notify_block_start()
#   "}"  → depth -= 1; on 1 → 0 call downstream.notify_block_end()
#   else → forward the command unchanged
#
#   Only the outermost block is signalled: "{ { a } }" gives one
#   start and one end. A "}" with no open block is ignored and
#   counted in `ignored_closers`; depth never goes below zero.
#
#   Matching is exact: " {" or "{ " are ordinary commands.
#
# ==============================================

import sys
from typing import Optional

from bulk.commands.command import Command
from bulk.commands.processor import CommandProcessor, Stage


BLOCK_OPEN = "{"
BLOCK_CLOSE = "}"


class ConsoleInput(CommandProcessor):
    """Consumes block delimiters and signals block boundaries downstream."""

    def __init__(self, downstream: Optional[Stage] = None):
        super().__init__(downstream)
        self.depth = 0
        self.ignored_closers = 0
        self._commands_forwarded = 0

    def accept(self, command: Command) -> None:
        if command.text == BLOCK_OPEN:
            self.depth += 1
            if self.depth == 1:
                self.forward_block_start()
        elif command.text == BLOCK_CLOSE:
            if self.depth == 0:
                self.ignored_closers += 1
                print(f"⚠ Ignoring unmatched '{BLOCK_CLOSE}'", file=sys.stderr)
                return
            self.depth -= 1
            if self.depth == 0:
                self.forward_block_end()
        else:
            self._commands_forwarded += 1
            self.forward(command)

    def get_status(self) -> dict:
        return {
            "stage": type(self).__name__,
            "depth": self.depth,
            "ignored_closers": self.ignored_closers,
            "commands_forwarded": self._commands_forwarded,
        }
