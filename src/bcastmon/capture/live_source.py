"""
LiveCaptureSource: scoped acquisition of a broadcast-only capture handle.
"""
import logging
from dataclasses import replace
from typing import Any, Dict, Optional, Union

from ..models.frame import CapturedFrame
from ..models.interface import InterfaceDescriptor
from .exceptions import CaptureTerminatedError
from .filters import build_bpf_filter
from .icapture_backend import CaptureConfig, ICaptureBackend, ICaptureHandle

logger = logging.getLogger(__name__)

class LiveCaptureSource:
    """Live broadcast capture on one interface.

    Use as a context manager; the handle is released on exit.
    """

    def __init__(self, backend: ICaptureBackend,
                 selector: Union[str, int, InterfaceDescriptor],
                 config: Optional[CaptureConfig] = None,
                 extra_filter: str = ""):
        self.backend = backend
        self.selector = selector
        # Private copy; the caller's config is never modified
        self.config = replace(config or CaptureConfig(interface=str(selector)),
                              filter=build_bpf_filter(extra_filter))
        self.interface: Optional[InterfaceDescriptor] = None
        self._handle: Optional[ICaptureHandle] = None

    @property
    def is_open(self) -> bool:
        return self._handle is not None

    def open(self) -> InterfaceDescriptor:
        """Resolve the interface and start capture.

        Raises InterfaceEnumerationError, InterfaceNotFoundError,
        CaptureOpenError or FilterError.
        """
        if self._handle is not None:
            return self.interface
        interface = self.backend.resolve(self.selector)
        self.config = replace(self.config, interface=interface.capture_name)
        self._handle = self.backend.open(interface, self.config)
        self.interface = interface
        logger.info("Capture open on %s with filter %r", interface.name, self.config.filter)
        return interface

    def next_frame(self) -> CapturedFrame:
        if self._handle is None:
            raise CaptureTerminatedError("Capture not started. Call open() first.")
        return self._handle.next_frame()

    def close(self) -> Optional[Dict[str, Any]]:
        """Stop capture and return the final statistics."""
        if self._handle is None:
            return None
        handle, self._handle = self._handle, None
        stats = handle.stats()
        handle.close()
        logger.info("Capture closed on %s", self.interface.name if self.interface else self.selector)
        return stats

    def get_stats(self) -> Optional[Dict[str, Any]]:
        """Get current capture statistics."""
        if self._handle:
            return self._handle.stats()
        return None

    def __enter__(self) -> "LiveCaptureSource":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
