"""Windowed broadcast counter."""
from __future__ import annotations

from typing import Optional

from ..models.window import WindowState, WindowSummary

class WindowedAggregator:
    """Counts broadcast frames over fixed-length, elapsed-time windows.

    Windows are not aligned to the wall clock: a window closes once
    ``now - window_start >= window_length`` and the next one starts at that
    ``now``, so each window runs long by however late the check was made.
    An idle gap spanning several window lengths produces a single summary.
    """

    def __init__(self, window_length: float, now: float = 0.0):
        if window_length <= 0:
            raise ValueError(f"window_length must be positive, got {window_length}")
        self.state = WindowState(count=0, window_start=now, window_length=window_length)

    @property
    def count(self) -> int:
        return self.state.count

    @property
    def window_start(self) -> float:
        return self.state.window_start

    @property
    def window_length(self) -> float:
        return self.state.window_length

    @property
    def deadline(self) -> float:
        return self.state.deadline

    def reset(self, now: float) -> None:
        self.state.count = 0
        self.state.window_start = max(self.state.window_start, now)

    def record_broadcast(self) -> None:
        self.state.count += 1

    def maybe_close_window(self, now: float) -> Optional[WindowSummary]:
        state = self.state
        elapsed = now - state.window_start
        if elapsed < state.window_length:
            return None
        summary = WindowSummary(count=state.count,
                                window_length=state.window_length,
                                elapsed=elapsed)
        state.count = 0
        state.window_start = now
        return summary
