# Frame data model
"""
Frame data models for bcastmon.

THESE MODELS ARE IMMUTABLE. A frame lives for exactly one iteration of the
capture loop and its classification is consumed once, then discarded.
"""

from dataclasses import dataclass
from typing import Optional

# libpcap DLT_* constants the classifier understands
DLT_EN10MB = 1
DLT_RAW = 12

@dataclass(frozen=True)
class CapturedFrame:
    """
    Frame as delivered by a capture handle: raw bytes plus capture metadata.

    Frames are never buffered past the iteration that consumes them.
    """
    data: bytes
    """Raw frame bytes starting at the link-layer header."""

    timestamp: float = 0.0
    """Capture time in seconds since the Unix epoch."""

    link_type: int = DLT_EN10MB
    """libpcap DLT_* constant (1 = DLT_EN10MB for Ethernet)."""

    interface: str = ""
    """Capture name of the interface the frame arrived on."""

    @property
    def captured_length(self) -> int:
        return len(self.data)

@dataclass(frozen=True)
class ClassificationResult:
    """
    Outcome of classifying one frame.

    source_network_addr is best-effort: None means the frame carried no
    decodable network-layer header. Rendering that as "unknown" is up to
    the reporter.
    """
    is_broadcast: bool
    source_hardware_addr: str = ""
    """Source MAC address (lowercase colon-separated), empty if undecodable."""
    source_network_addr: Optional[str] = None

    @classmethod
    def not_broadcast(cls) -> "ClassificationResult":
        return cls(is_broadcast=False)
