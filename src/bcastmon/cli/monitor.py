"""CLI command for live broadcast monitoring."""
import threading
from typing import Optional

import click

from ..capture.exceptions import CaptureError
from ..capture.icapture_backend import CaptureConfig, ICaptureBackend
from ..capture.live_source import LiveCaptureSource
from ..config import DEFAULT_WINDOW_SECONDS, MonitorConfig
from ..models.interface import InterfaceDescriptor
from ..monitor.controller import CaptureLoopController
from ..monitor.reporter import ConsoleReporter
from ..monitor.shutdown import ShutdownListener, ShutdownSignal
from .interfaces import load_backend


def _prompt_for_interface(backend: ICaptureBackend, reporter: ConsoleReporter) -> InterfaceDescriptor:
    try:
        found = backend.list_interfaces()
    except CaptureError as e:
        raise click.ClickException(str(e))
    if not found:
        raise click.ClickException("No capture interfaces found")

    reporter.interfaces(found)
    by_index = {iface.index: iface for iface in found}
    choice = click.prompt("Select interface to monitor", type=click.Choice([str(i) for i in by_index]),
                          show_choices=False)
    return by_index[int(choice)]


@click.command()
@click.option("--interface", "-i", "selector",
              help="Interface index, name or description (prompted for if omitted)")
@click.option("--window", "-w", "window_seconds", type=click.IntRange(min=1),
              default=DEFAULT_WINDOW_SECONDS, show_default=True,
              help="Counting window length in seconds")
@click.option("--filter", "extra_filter", default="",
              help="Extra BPF expression ANDed with the broadcast filter")
@click.option("--snaplen", type=click.IntRange(min=64), default=1600, show_default=True,
              help="Bytes kept per frame")
@click.option("--promisc/--no-promisc", default=True, show_default=True,
              help="Put the interface in promiscuous mode")
@click.option("--buffer-size", "buffer_size", type=click.IntRange(min=1), default=10000,
              show_default=True, help="Frames queued before drops")
@click.option("--vendor", "show_vendor", is_flag=True,
              help="Show the OUI vendor of each broadcast sender")
def monitor(selector: Optional[str],
            window_seconds: int,
            extra_filter: str,
            snaplen: int,
            promisc: bool,
            buffer_size: int,
            show_vendor: bool):
    """
    Report broadcast frames seen on an interface, with a count per window.

    Example:
      bcastmon monitor --interface eth0 --window 10
    """
    config = MonitorConfig(
        interface_selector=selector,
        window_seconds=window_seconds,
        capture=CaptureConfig(
            interface=selector or "",
            snaplen=snaplen,
            promisc=promisc,
            buffer_size=buffer_size,
        ),
        extra_filter=extra_filter,
        show_vendor=show_vendor,
    )

    backend = load_backend()
    reporter = ConsoleReporter(show_vendor=config.show_vendor)
    target = config.interface_selector
    if target is None:
        target = _prompt_for_interface(backend, reporter)

    shutdown = ShutdownSignal()
    source = LiveCaptureSource(backend, target, config.capture, extra_filter=config.extra_filter)
    controller = CaptureLoopController(source, shutdown,
                                       window_seconds=config.window_seconds,
                                       reporter=reporter)
    # Handlers go in before the capture opens so Ctrl+C during startup
    # becomes a normal shutdown instead of a KeyboardInterrupt
    with ShutdownListener(shutdown) as listener:
        try:
            controller.start()
        except CaptureError as e:
            raise click.ClickException(str(e))

        worker = threading.Thread(target=controller.run, name="capture-loop")
        try:
            worker.start()
            listener.wait(worker)
        finally:
            source.close()
