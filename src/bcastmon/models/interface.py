"""Network interface description."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

@dataclass(frozen=True)
class InterfaceDescriptor:
    index: int
    name: str
    """Human-readable name (e.g. 'eth0', 'Ethernet 2')."""
    description: str = ""
    ipv4_address: Optional[str] = None
    network_name: str = ""
    """Name the capture driver expects. On Npcap this is \\Device\\NPF_{GUID}."""
    mac: Optional[str] = None

    @property
    def capture_name(self) -> str:
        return self.network_name or self.name
