"""
Capture loop controller.

Pulls frames from a LiveCaptureSource, classifies them, feeds broadcasts to
the WindowedAggregator and reports. The loop waits on a single mailbox that
merges three event sources:

- frames, posted by a pump thread blocked on the capture handle
- a wake-up marker, posted when the ShutdownSignal fires
- terminal capture errors, posted by the pump

The wait times out at the aggregator's deadline, which is the periodic tick:
idle windows still get a (zero-count) summary on schedule.

The mailbox holds one item. The pump blocks while it is full, so backlog
stays in the capture handle's bounded buffer where drops are counted.

Shutdown is at-most-once: frames still queued when the signal fires are
dropped, and the partial window is discarded.
"""
from __future__ import annotations

import logging
import queue
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional

from ..capture.classifier import classify
from ..capture.live_source import LiveCaptureSource
from ..models.frame import CapturedFrame, ClassificationResult
from .aggregator import WindowedAggregator
from .reporter import ConsoleReporter
from .shutdown import ShutdownSignal

logger = logging.getLogger(__name__)

class LoopState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"

_WAKE = object()

@dataclass(frozen=True)
class _CaptureFailed:
    error: BaseException

class CaptureLoopController:
    MAILBOX_SIZE = 1
    POST_POLL_SECONDS = 0.1

    def __init__(self,
                 source: LiveCaptureSource,
                 shutdown: ShutdownSignal,
                 window_seconds: float = 5,
                 reporter: Optional[ConsoleReporter] = None,
                 classifier: Callable[[CapturedFrame], ClassificationResult] = classify,
                 clock: Callable[[], float] = time.monotonic):
        self.source = source
        self.shutdown = shutdown
        self.reporter = reporter or ConsoleReporter()
        self.classifier = classifier
        self.clock = clock
        self.aggregator = WindowedAggregator(window_seconds, now=clock())
        self.state = LoopState.IDLE
        self.stats: Dict[str, int] = {
            'frames_seen': 0,
            'broadcasts_total': 0,
            'windows_closed': 0,
        }
        self._mailbox: "queue.Queue" = queue.Queue(maxsize=self.MAILBOX_SIZE)
        self._halted = threading.Event()
        self._pump: Optional[threading.Thread] = None

    def start(self) -> None:
        """Acquire the capture and enter RUNNING.

        Startup failures (interface lookup, open, filter) propagate and leave
        the controller IDLE.
        """
        if self.state is not LoopState.IDLE:
            raise RuntimeError(f"Cannot start from state {self.state.value}")

        interface = self.source.open()
        self.aggregator.reset(self.clock())
        self.shutdown.subscribe(self._wake)

        self._pump = threading.Thread(target=self._pump_frames, name="frame-pump", daemon=True)
        self._pump.start()

        self.reporter.banner(interface, self.aggregator.window_length)
        self.state = LoopState.RUNNING

    def run(self) -> None:
        """Process frames until shutdown or capture failure, then release."""
        if self.state is not LoopState.RUNNING:
            raise RuntimeError("start() must succeed before run()")

        interrupted = False
        try:
            while True:
                if self.shutdown.is_set():
                    interrupted = True
                    break

                timeout = max(0.0, self.aggregator.deadline - self.clock())
                try:
                    item = self._mailbox.get(timeout=timeout)
                except queue.Empty:
                    self._close_window(self.clock())
                    continue

                if item is _WAKE:
                    interrupted = True
                    break
                if isinstance(item, _CaptureFailed):
                    logger.error("Capture terminated: %s", item.error)
                    break
                # A frame already queued when the signal fired is not examined
                if self.shutdown.is_set():
                    interrupted = True
                    break

                self._handle_frame(item)
        finally:
            self._stop(interrupted)

    def _handle_frame(self, frame: CapturedFrame) -> None:
        # Close an expired window first so the summary precedes this frame's line
        self._close_window(self.clock())

        self.stats['frames_seen'] += 1
        result = self.classifier(frame)
        if not result.is_broadcast:
            return

        self.aggregator.record_broadcast()
        self.stats['broadcasts_total'] += 1
        self.reporter.packet(result)

    def _close_window(self, now: float) -> None:
        summary = self.aggregator.maybe_close_window(now)
        if summary is not None:
            self.stats['windows_closed'] += 1
            self.reporter.window_summary(summary)

    def _pump_frames(self) -> None:
        while not self.shutdown.is_set():
            try:
                frame = self.source.next_frame()
            except Exception as e:  # any backend failure ends the capture
                self._post(_CaptureFailed(e))
                return
            if not self._post(frame):
                return

    def _post(self, item) -> bool:
        """Blocking put that gives up once the loop has stopped."""
        while not self._halted.is_set():
            try:
                self._mailbox.put(item, timeout=self.POST_POLL_SECONDS)
                return True
            except queue.Full:
                continue
        return False

    def _wake(self) -> None:
        # Runs on the signalling thread and must not block. A full mailbox
        # holds a frame, and the loop checks the signal after dequeuing it.
        try:
            self._mailbox.put_nowait(_WAKE)
        except queue.Full:
            logger.debug("Mailbox full, shutdown seen on next dequeue")

    def _stop(self, interrupted: bool) -> None:
        if interrupted:
            self.reporter.shutting_down()
        self.state = LoopState.STOPPED
        self._halted.set()
        capture_stats = self.source.close()
        logger.info("Loop stopped: %d frames, %d broadcasts, %d windows closed",
                    self.stats['frames_seen'],
                    self.stats['broadcasts_total'],
                    self.stats['windows_closed'])
        if capture_stats:
            logger.info("Capture stats: %s", capture_stats)
        self.reporter.stopped()
