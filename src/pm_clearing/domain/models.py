"""Value movements emitted by the core: pure dataclasses."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Transfer:
    """``amount`` nano leaving ``sender`` for ``recipient``."""

    sender: str
    recipient: str
    amount: int
