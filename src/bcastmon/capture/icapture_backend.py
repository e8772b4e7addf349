"""
Capture backend interface definition.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Dict, Any, List, Union

from ..models.frame import CapturedFrame
from ..models.interface import InterfaceDescriptor
from .exceptions import InterfaceNotFoundError

@dataclass
class CaptureConfig:
    """Capture configuration."""
    interface: str
    snaplen: int = 1600
    promisc: bool = True
    buffer_size: int = 10000  # Queue size
    filter: Optional[str] = None

class ICaptureHandle(ABC):
    """An open, live capture on one interface."""

    @abstractmethod
    def next_frame(self) -> CapturedFrame:
        """Block until the next frame arrives.

        Raises CaptureTerminatedError once the capture has ended.
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the capture. Safe to call more than once."""
        pass

    def stats(self) -> Dict[str, Any]:
        """Get current capture statistics."""
        return {}

class ICaptureBackend(ABC):
    """Capture backend interface: the interface directory."""

    @abstractmethod
    def list_interfaces(self) -> List[InterfaceDescriptor]:
        """List available network interfaces."""
        pass

    @abstractmethod
    def open(self, interface: InterfaceDescriptor, config: CaptureConfig) -> ICaptureHandle:
        """Open a capture on the interface with config.filter applied.

        Raises FilterError or CaptureOpenError.
        """
        pass

    def resolve(self, selector: Union[str, int, InterfaceDescriptor]) -> InterfaceDescriptor:
        """Resolve an index, name, capture name or description to an interface."""
        if isinstance(selector, InterfaceDescriptor):
            return selector

        interfaces = self.list_interfaces()
        wanted = str(selector).strip()
        if not wanted:
            raise InterfaceNotFoundError("Empty interface selector")

        if wanted.isdigit():
            index = int(wanted)
            for iface in interfaces:
                if iface.index == index:
                    return iface

        # Normalize double-backslash inputs (PowerShell often passes them literally)
        if wanted.startswith('\\\\'):
            wanted = wanted.replace('\\\\', '\\')
        lowered = wanted.lower()

        for iface in interfaces:
            if wanted in (iface.name, iface.network_name):
                return iface
        for iface in interfaces:
            if lowered == iface.name.lower() or lowered == iface.description.lower():
                return iface
        for iface in interfaces:
            if lowered in iface.description.lower():
                return iface

        raise InterfaceNotFoundError(f"No interface matches '{selector}'")
