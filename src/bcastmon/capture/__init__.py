"""
Live packet capture subsystem.
"""

from .icapture_backend import ICaptureBackend, ICaptureHandle, CaptureConfig
from .live_source import LiveCaptureSource
from .classifier import classify
from .filters import build_bpf_filter
from .exceptions import (
    CaptureError,
    InterfaceEnumerationError,
    InterfaceNotFoundError,
    CaptureOpenError,
    FilterError,
    CaptureTerminatedError,
)

__all__ = [
    'ICaptureBackend',
    'ICaptureHandle',
    'CaptureConfig',
    'LiveCaptureSource',
    'classify',
    'build_bpf_filter',
    'CaptureError',
    'InterfaceEnumerationError',
    'InterfaceNotFoundError',
    'CaptureOpenError',
    'FilterError',
    'CaptureTerminatedError',
]
