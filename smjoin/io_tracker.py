"""Counting of page transfers between disk and memory."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class IoTracker:
    """Counts pages read from and written to disk."""

    reads: int = 0
    writes: int = 0

    def reset(self) -> None:
        """Set both counters back to zero."""
        self.reads = 0
        self.writes = 0

    def record_read(self) -> None:
        """Count one page read."""
        self.reads += 1

    def record_write(self) -> None:
        """Count one page written."""
        self.writes += 1

    def operations(self) -> int:
        """Total number of page transfers, reads plus writes."""
        return self.reads + self.writes