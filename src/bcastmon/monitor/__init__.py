"""Broadcast monitoring: window aggregation, capture loop and shutdown."""
from .aggregator import WindowedAggregator
from .controller import CaptureLoopController, LoopState
from .reporter import ConsoleReporter
from .shutdown import ShutdownListener, ShutdownSignal
