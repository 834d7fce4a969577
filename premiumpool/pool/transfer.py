"""Value-transfer collaborators.

The ledger never moves funds itself. It asks a Transfer to move `amount`
between an account and the pool and treats the answer as atomic: True means
the funds moved, False means nothing moved.
"""
from dataclasses import dataclass, field
from typing import Protocol


class Transfer(Protocol):
    def __call__(self, amount: int, sender: str, recipient: str) -> bool:
        ...


@dataclass(frozen=True)
class TransferRecord:
    amount: int
    sender: str
    recipient: str


@dataclass
class RecordingTransfer:
    """Default transfer: always succeeds and keeps a log of every move."""
    records: list[TransferRecord] = field(default_factory=list)

    def __call__(self, amount: int, sender: str, recipient: str) -> bool:
        self.records.append(TransferRecord(amount, sender, recipient))
        return True


@dataclass
class FailingTransfer:
    """Transfer that always reports failure. Counts attempts."""
    attempts: int = 0

    def __call__(self, amount: int, sender: str, recipient: str) -> bool:
        self.attempts += 1
        return False
