"""Monitor configuration."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .capture.icapture_backend import CaptureConfig

DEFAULT_WINDOW_SECONDS = 5

@dataclass
class MonitorConfig:
    interface_selector: Optional[str] = None
    """Index, name or description; None means prompt the operator."""
    window_seconds: int = DEFAULT_WINDOW_SECONDS
    capture: CaptureConfig = field(default_factory=lambda: CaptureConfig(interface=""))
    extra_filter: str = ""
    show_vendor: bool = False

    def __post_init__(self):
        if self.window_seconds <= 0:
            raise ValueError(f"window_seconds must be > 0, got {self.window_seconds}")
