"""
Frame, window and interface data models.
"""

from .frame import CapturedFrame, ClassificationResult, DLT_EN10MB, DLT_RAW
from .window import WindowState, WindowSummary
from .interface import InterfaceDescriptor

__all__ = [
    'CapturedFrame',
    'ClassificationResult',
    'DLT_EN10MB',
    'DLT_RAW',
    'WindowState',
    'WindowSummary',
    'InterfaceDescriptor',
]
