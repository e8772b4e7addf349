"""
One-shot shutdown notification and the OS signal listener that fires it.

The listener runs on the main thread (Python only delivers signals there)
while the capture loop runs on a worker thread. The two share nothing but
the ShutdownSignal.
"""
import logging
import signal
import threading
import time
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

class ShutdownSignal:
    """Fires at most once. Subscribers are called on the firing thread."""

    def __init__(self):
        self._event = threading.Event()
        # Reentrant: a second SIGINT can arrive while the first handler runs
        self._lock = threading.RLock()
        self._subscribers: List[Callable[[], None]] = []

    def is_set(self) -> bool:
        return self._event.is_set()

    def subscribe(self, callback: Callable[[], None]) -> None:
        """Register callback; it runs immediately if the signal already fired."""
        with self._lock:
            if not self._event.is_set():
                self._subscribers.append(callback)
                return
        callback()

    def fire(self) -> bool:
        """Fire the signal. Returns False if it had already fired."""
        with self._lock:
            if self._event.is_set():
                return False
            self._event.set()
            subscribers, self._subscribers = self._subscribers, []
        for callback in subscribers:
            callback()
        return True

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._event.wait(timeout)

class ShutdownListener:
    """Turns SIGINT/SIGTERM into a ShutdownSignal.

    Must be installed from the main thread.
    """

    def __init__(self, shutdown: ShutdownSignal, signals=None, poll_interval: float = 0.5):
        self.shutdown = shutdown
        if signals is None:
            signals = [signal.SIGINT]
            if hasattr(signal, 'SIGTERM'):
                signals.append(signal.SIGTERM)
        self.signals = list(signals)
        self.poll_interval = poll_interval
        self._previous = {}

    def _handle(self, signum, frame) -> None:
        if self.shutdown.fire():
            logger.info("Received %s, shutting down", signal.Signals(signum).name)

    def install(self) -> None:
        for signum in self.signals:
            self._previous[signum] = signal.signal(signum, self._handle)

    def restore(self) -> None:
        for signum, previous in self._previous.items():
            signal.signal(signum, previous)
        self._previous = {}

    def wait(self, worker: Optional[threading.Thread] = None) -> bool:
        """Block until an interrupt arrives or worker exits.

        Returns True when the wait ended because of an interrupt. The
        join uses a timeout so the handler still runs on Windows.
        """
        while not self.shutdown.is_set():
            if worker is None:
                time.sleep(self.poll_interval)
                continue
            worker.join(self.poll_interval)
            if not worker.is_alive():
                return self.shutdown.is_set()
        if worker is not None:
            worker.join()
        return True

    def __enter__(self) -> "ShutdownListener":
        self.install()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()
