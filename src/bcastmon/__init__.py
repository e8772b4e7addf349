"""
bcastmon: live broadcast traffic monitor.
"""

__version__ = "0.1.0"
