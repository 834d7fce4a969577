"""JSONL journal for pool receipts.

One receipt per line, sorted keys. A receipt is addressed by its
payload_hash. Each write batch holds an exclusive flock on the file.
"""
import fcntl
import json
from pathlib import Path
from typing import Callable, Iterator


class ReceiptStore:
    """Pool receipts persisted as JSON lines, never rewritten.

    Attributes:
        path: Journal file; created (with parents) on construction
    """

    def __init__(self, path: str = "premiumpool_receipts.jsonl"):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.touch(exist_ok=True)

    def _write(self, receipts: list[dict]) -> None:
        lines = "".join(json.dumps(r, sort_keys=True) + "\n" for r in receipts)
        with open(self.path, "a") as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            try:
                f.write(lines)
                f.flush()
            finally:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)

    def append(self, receipt: dict) -> str:
        """Write one receipt and return its payload_hash."""
        self._write([receipt])
        return receipt.get("payload_hash", "")

    def append_many(self, receipts: list[dict]) -> list[str]:
        """Write a batch under a single lock, preserving order."""
        self._write(receipts)
        return [r.get("payload_hash", "") for r in receipts]

    def __iter__(self) -> Iterator[dict]:
        with open(self.path) as f:
            for line in f:
                if line.strip():
                    yield json.loads(line)

    def read_all(self) -> list[dict]:
        return list(self)

    def query(self, predicate: Callable[[dict], bool]) -> list[dict]:
        return [r for r in self if predicate(r)]

    def by_type(self, receipt_type: str) -> list[dict]:
        """Receipts whose receipt_type matches, in journal order."""
        return self.query(lambda r: r.get("receipt_type") == receipt_type)
