"""CLI command for listing capture interfaces."""
import click

from ..capture.exceptions import CaptureError
from ..monitor.reporter import ConsoleReporter


def load_backend():
    # scapy is slow to import; defer until a command needs it
    from ..capture.scapy_backend import ScapyBackend
    return ScapyBackend()


@click.command()
def interfaces():
    """List network interfaces available for capture."""
    backend = load_backend()
    try:
        found = backend.list_interfaces()
    except CaptureError as e:
        raise click.ClickException(str(e))
    if not found:
        raise click.ClickException("No capture interfaces found")
    ConsoleReporter().interfaces(found)
