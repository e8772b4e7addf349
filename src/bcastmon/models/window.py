"""Window accounting models."""
from __future__ import annotations

from dataclasses import dataclass

@dataclass
class WindowState:
    """Counter for the window currently open. Owned by the aggregator."""
    count: int
    window_start: float
    window_length: float

    @property
    def deadline(self) -> float:
        return self.window_start + self.window_length

@dataclass(frozen=True)
class WindowSummary:
    """Report emitted when a window closes."""
    count: int
    window_length: float
    elapsed: float
    """Seconds actually covered; can exceed window_length after idle gaps."""
