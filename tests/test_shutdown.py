"""Tests for the one-shot shutdown signal and the OS signal listener."""

import os
import signal
import sys
import threading

import pytest

from bcastmon.monitor.shutdown import ShutdownListener, ShutdownSignal


class TestShutdownSignal:

    def test_fires_once(self):
        shutdown = ShutdownSignal()
        calls = []
        shutdown.subscribe(lambda: calls.append("a"))

        assert shutdown.fire() is True
        assert shutdown.fire() is False
        assert shutdown.is_set()
        assert calls == ["a"]

    def test_late_subscriber_runs_immediately(self):
        shutdown = ShutdownSignal()
        shutdown.fire()
        calls = []

        shutdown.subscribe(lambda: calls.append("late"))

        assert calls == ["late"]

    def test_concurrent_fire_notifies_once(self):
        shutdown = ShutdownSignal()
        calls = []
        shutdown.subscribe(lambda: calls.append(1))
        results = []
        threads = [threading.Thread(target=lambda: results.append(shutdown.fire())) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results.count(True) == 1
        assert calls == [1]


class TestShutdownListener:

    def test_install_and_restore(self):
        before = signal.getsignal(signal.SIGINT)
        listener = ShutdownListener(ShutdownSignal(), signals=[signal.SIGINT])

        with listener:
            assert signal.getsignal(signal.SIGINT) == listener._handle

        assert signal.getsignal(signal.SIGINT) == before

    def test_handler_fires_signal(self):
        shutdown = ShutdownSignal()
        listener = ShutdownListener(shutdown, signals=[signal.SIGINT])

        listener._handle(signal.SIGINT, None)
        listener._handle(signal.SIGINT, None)

        assert shutdown.is_set()

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX signal delivery")
    def test_sigint_ends_wait(self):
        shutdown = ShutdownSignal()
        worker = threading.Thread(target=shutdown.wait, daemon=True)
        worker.start()
        timer = threading.Timer(0.1, os.kill, args=(os.getpid(), signal.SIGINT))

        with ShutdownListener(shutdown, signals=[signal.SIGINT], poll_interval=0.05) as listener:
            timer.start()
            interrupted = listener.wait(worker)

        assert interrupted is True
        assert shutdown.is_set()
        assert not worker.is_alive()

    def test_wait_returns_when_worker_exits(self):
        shutdown = ShutdownSignal()
        worker = threading.Thread(target=lambda: None)
        worker.start()
        listener = ShutdownListener(shutdown, signals=[], poll_interval=0.05)

        assert listener.wait(worker) is False
        assert not shutdown.is_set()
