# ==============================================
# Stage Contract
# ==============================================
#
# PURPOSE:
#   Every pipeline stage answers the same three signals:
#     accept(command)       → a command arrived
#     notify_block_start()  → an outermost "{" was read upstream
#     notify_block_end()    → the matching "}" was read upstream
#   plus close(), called once by the pipeline at end of input.
#
# WHY TWO THINGS:
#   - Stage (Protocol) is the capability set the Pipeline relies on.
#     Anything with these methods can sit in the chain.
#   - CommandProcessor is a convenience base that supplies the
#     no-op defaults and the forwarding helpers, so a concrete stage
#     only overrides what it cares about.
#
# LINKING:
#   `downstream` is assigned by the Pipeline assembler. A stage never
#   creates or owns its downstream; the Pipeline's stage list does.
#   A stage with no downstream drops whatever it would forward.
#
# ==============================================

from typing import Optional, Protocol, runtime_checkable

from bulk.commands.command import Command


@runtime_checkable
class Stage(Protocol):
    """Capability set shared by every pipeline stage."""

    downstream: Optional["Stage"]

    def accept(self, command: Command) -> None:
        ...

    def notify_block_start(self) -> None:
        ...

    def notify_block_end(self) -> None:
        ...

    def close(self) -> None:
        ...


class CommandProcessor:
    """
    Base pipeline stage with no-op block/close handling.

    Subclasses implement accept(). Use forward(), forward_block_start()
    and forward_block_end() to pass things on; each one is a silent no-op
    when the stage has no downstream.
    """

    def __init__(self, downstream: Optional[Stage] = None):
        self.downstream = downstream

    def accept(self, command: Command) -> None:
        raise NotImplementedError

    def notify_block_start(self) -> None:
        pass

    def notify_block_end(self) -> None:
        pass

    def close(self) -> None:
        pass

    def forward(self, command: Command) -> None:
        if self.downstream is not None:
            self.downstream.accept(command)

    def forward_block_start(self) -> None:
        if self.downstream is not None:
            self.downstream.notify_block_start()

    def forward_block_end(self) -> None:
        if self.downstream is not None:
            self.downstream.notify_block_end()

    def get_status(self) -> dict:
        """Stage-specific counters; the base stage has none."""
        return {"stage": type(self).__name__}
