"""Operator-facing output lines."""
from __future__ import annotations

from typing import Iterable

import click

from ..models.frame import ClassificationResult
from ..models.interface import InterfaceDescriptor
from ..models.window import WindowSummary
from ..utils.oui_lookup import lookup_vendor

UNKNOWN = "unknown"


def format_interface_line(iface: InterfaceDescriptor) -> str:
    line = f"[{iface.index}] {iface.name}"
    if iface.description and iface.description != iface.name:
        line += f" ({iface.description})"
    if iface.ipv4_address:
        line += f" {iface.ipv4_address}"
    return line


def format_seconds(value: float) -> str:
    if float(value).is_integer():
        return f"{int(value)}s"
    return f"{value:.2f}s"


class ConsoleReporter:
    """Writes the monitor's report lines to stdout."""

    def __init__(self, show_vendor: bool = False, echo=click.echo):
        self.show_vendor = show_vendor
        self._echo = echo

    def interfaces(self, interfaces: Iterable[InterfaceDescriptor]) -> None:
        self._echo("Available interfaces:")
        for iface in interfaces:
            self._echo(f"  {format_interface_line(iface)}")

    def banner(self, interface: InterfaceDescriptor, window_length: float) -> None:
        name = interface.name
        if interface.description and interface.description != interface.name:
            name += f" ({interface.description})"
        self._echo(f"Monitoring interface {name}, window {format_seconds(window_length)}")
        self._echo("Press Ctrl+C to stop")

    def packet(self, result: ClassificationResult) -> None:
        source = result.source_hardware_addr or UNKNOWN
        if self.show_vendor:
            vendor = lookup_vendor(result.source_hardware_addr)
            if vendor:
                source += f" [{vendor}]"
        self._echo(f"Broadcast from {source} ({result.source_network_addr or UNKNOWN})")

    def window_summary(self, summary: WindowSummary) -> None:
        self._echo(f"Broadcast packets in last {format_seconds(summary.window_length)}: {summary.count}")

    def shutting_down(self) -> None:
        self._echo("Shutting down...")

    def stopped(self) -> None:
        self._echo("Stopped.")
