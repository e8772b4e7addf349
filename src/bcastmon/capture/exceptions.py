# Custom exceptions

"""
Custom exceptions for bcastmon live capture.
"""

class CaptureError(Exception):
    """Base exception for all capture-related errors."""
    pass

class InterfaceEnumerationError(CaptureError):
    """Raised when the list of network interfaces cannot be obtained."""
    pass

class InterfaceNotFoundError(CaptureError):
    """Raised when an interface selector matches no known interface."""
    pass

class CaptureOpenError(CaptureError):
    """Raised when a capture handle cannot be opened on an interface."""
    pass

class FilterError(CaptureError):
    """Raised when the capture filter cannot be compiled or applied."""
    pass

class CaptureTerminatedError(CaptureError):
    """Raised by a running handle when the capture ends underneath it
    (device removed, socket closed)."""
    pass
