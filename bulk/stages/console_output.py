# ==============================================
# ConsoleOutput
# ==============================================
#
# PURPOSE:
#   Print every command it receives on its own line, then
#   pass it on unchanged. The stream defaults to sys.stdout
#   and can be swapped for any text stream (tests use StringIO).
#
# ==============================================

import sys
from typing import Optional, TextIO

from bulk.commands.command import Command
from bulk.commands.processor import CommandProcessor, Stage


class ConsoleOutput(CommandProcessor):
    """Echoes each command's text to a text stream."""

    def __init__(self, downstream: Optional[Stage] = None, stream: Optional[TextIO] = None):
        super().__init__(downstream)
        self._stream = stream
        self.lines_written = 0

    @property
    def stream(self) -> TextIO:
        # Looked up on every write; sys.stdout may be replaced at runtime
        return self._stream if self._stream is not None else sys.stdout

    def accept(self, command: Command) -> None:
        self.stream.write(command.text + "\n")
        self.stream.flush()
        self.lines_written += 1
        self.forward(command)

    def get_status(self) -> dict:
        return {"stage": type(self).__name__, "lines_written": self.lines_written}
