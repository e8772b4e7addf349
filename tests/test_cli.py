"""CLI tests using click's CliRunner and a fake capture backend."""

import signal

import pytest
from click.testing import CliRunner

from bcastmon.capture.exceptions import (
    CaptureOpenError,
    CaptureTerminatedError,
    InterfaceEnumerationError,
)
from bcastmon.cli import interfaces as interfaces_cmd
from bcastmon.cli import monitor as monitor_cmd
from bcastmon.cli.main import cli

from .fakes import FakeBackend, ScriptedHandle
from .frames import broadcast_ipv4, unicast_ipv4


@pytest.fixture
def use_backend(monkeypatch):
    def _install(backend):
        monkeypatch.setattr(monitor_cmd, "load_backend", lambda: backend)
        monkeypatch.setattr(interfaces_cmd, "load_backend", lambda: backend)
        return backend
    return _install


def ending_handle(*frames):
    handle = ScriptedHandle(frames)
    handle.fail(CaptureTerminatedError("device removed"))
    return handle


def test_interfaces_lists_all(use_backend):
    use_backend(FakeBackend())

    result = CliRunner().invoke(cli, ["interfaces"])

    assert result.exit_code == 0
    assert "[1] eth0 (Intel(R) Ethernet Connection) 192.168.1.5" in result.output
    assert "[2] Wi-Fi (Realtek Wireless LAN)" in result.output


def test_interfaces_enumeration_failure(use_backend):
    use_backend(FakeBackend(list_error=InterfaceEnumerationError("no pcap driver")))

    result = CliRunner().invoke(cli, ["interfaces"])

    assert result.exit_code == 1
    assert "no pcap driver" in result.output


def test_monitor_reports_broadcasts(use_backend):
    backend = use_backend(FakeBackend(handle=ending_handle(
        broadcast_ipv4("192.168.1.10"), unicast_ipv4(), broadcast_ipv4("192.168.1.11"))))

    result = CliRunner().invoke(cli, ["monitor", "--interface", "eth0", "--window", "30"])

    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert "Monitoring interface eth0 (Intel(R) Ethernet Connection), window 30s" in lines
    assert [line for line in lines if line.startswith("Broadcast from")] == [
        "Broadcast from aa:bb:cc:00:11:22 (192.168.1.10)",
        "Broadcast from aa:bb:cc:00:11:22 (192.168.1.11)",
    ]
    assert "Stopped." in lines
    assert backend.opened[0][1].filter == "ether broadcast"
    assert backend.handle.closed.is_set()


def test_monitor_extra_filter_and_capture_options(use_backend):
    backend = use_backend(FakeBackend(handle=ending_handle()))

    result = CliRunner().invoke(cli, ["monitor", "-i", "1", "--filter", "arp",
                                      "--snaplen", "128", "--no-promisc", "--buffer-size", "50"])

    assert result.exit_code == 0, result.output
    config = backend.opened[0][1]
    assert config.filter == "(ether broadcast) and (arp)"
    assert config.snaplen == 128
    assert config.promisc is False
    assert config.buffer_size == 50


def test_monitor_prompts_for_interface(use_backend):
    use_backend(FakeBackend(handle=ending_handle()))

    result = CliRunner().invoke(cli, ["monitor"], input="2\n")

    assert result.exit_code == 0, result.output
    assert "Available interfaces:" in result.output
    assert "Monitoring interface Wi-Fi (Realtek Wireless LAN), window 5s" in result.output


class InterruptedDuringOpen(FakeBackend):
    """Delivers Ctrl+C while the capture is being opened."""

    def open(self, interface, config):
        handle = super().open(interface, config)
        signal.raise_signal(signal.SIGINT)
        return handle


def test_ctrl_c_during_startup_releases_capture(use_backend):
    backend = use_backend(InterruptedDuringOpen(handle=ScriptedHandle([broadcast_ipv4()])))

    result = CliRunner().invoke(cli, ["monitor", "-i", "eth0"])

    assert result.exit_code == 0, result.output
    assert "Shutting down..." in result.output
    assert "Broadcast from" not in result.output
    assert backend.handle.closed.is_set()


def test_monitor_open_failure_exits_nonzero(use_backend):
    use_backend(FakeBackend(open_error=CaptureOpenError("Failed to open 'eth0': permission denied")))

    result = CliRunner().invoke(cli, ["monitor", "-i", "eth0"])

    assert result.exit_code == 1
    assert "permission denied" in result.output
    assert "Broadcast packets" not in result.output


def test_monitor_unknown_interface(use_backend):
    use_backend(FakeBackend())

    result = CliRunner().invoke(cli, ["monitor", "-i", "wlan9"])

    assert result.exit_code == 1
    assert "No interface matches 'wlan9'" in result.output


def test_monitor_rejects_zero_window(use_backend):
    use_backend(FakeBackend())

    result = CliRunner().invoke(cli, ["monitor", "-i", "eth0", "--window", "0"])

    assert result.exit_code == 2


def test_window_from_environment(use_backend):
    use_backend(FakeBackend(handle=ending_handle()))

    result = CliRunner().invoke(cli, ["monitor", "-i", "eth0"],
                                env={"BCASTMON_MONITOR_WINDOW_SECONDS": "9"})

    assert result.exit_code == 0, result.output
    assert "window 9s" in result.output


def test_version():
    result = CliRunner().invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "bcastmon" in result.output
