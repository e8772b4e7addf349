import logging
import queue
import threading
import time
from typing import Dict, Any, Optional, List

from scapy.all import AsyncSniffer, conf
from scapy.arch.common import compile_filter
from scapy.error import Scapy_Exception
from scapy.packet import Packet

from ..models.frame import CapturedFrame
from ..models.interface import InterfaceDescriptor
from .icapture_backend import ICaptureBackend, ICaptureHandle, CaptureConfig
from .exceptions import (
    CaptureOpenError,
    CaptureTerminatedError,
    FilterError,
    InterfaceEnumerationError,
)

logger = logging.getLogger(__name__)

_END = object()

class ScapyCaptureHandle(ICaptureHandle):
    """Live capture on one interface, fed by a Scapy AsyncSniffer."""

    def __init__(self, interface: InterfaceDescriptor, config: CaptureConfig, socket):
        self.interface = interface
        self.config = config
        self._socket = socket
        # Unbounded so the end marker can always be posted; the buffer limit
        # is enforced in _enqueue
        self._queue: "queue.Queue" = queue.Queue()
        self._closed = threading.Event()
        self._end_cause: Optional[BaseException] = None
        self._stats = {
            'packets_total': 0,
            'bytes_total': 0,
            'drops_total': 0,
            'start_time': time.time(),
            'interface_name': interface.capture_name,
        }
        self._sniffer = AsyncSniffer(
            opened_socket=socket,
            prn=self._enqueue,
            store=False,  # Don't store in Scapy's memory
        )
        self._watcher = threading.Thread(
            target=self._watch,
            name=f"sniffer-watch-{interface.name}",
            daemon=True,
        )

    def start(self) -> None:
        logger.debug("Starting sniffer on '%s'", self.interface.capture_name)
        self._sniffer.start()
        self._watcher.start()

    def _enqueue(self, packet: Packet) -> None:
        """Callback for each captured packet."""
        if self._closed.is_set():
            return
        if self._queue.qsize() >= self.config.buffer_size:
            self._stats['drops_total'] += 1
            if self._stats['drops_total'] % 100 == 0:  # Log every 100 drops
                logger.warning("Capture queue full, drops: %d", self._stats['drops_total'])
            return

        data = bytes(packet)
        self._stats['packets_total'] += 1
        self._stats['bytes_total'] += len(data)
        self._queue.put(CapturedFrame(
            data=data[:self.config.snaplen],
            timestamp=float(packet.time),
            link_type=conf.l2types.layer2num.get(type(packet), -1),
            interface=self.interface.capture_name,
        ))

    def _watch(self) -> None:
        self._sniffer.join()
        cause = getattr(self._sniffer, 'exception', None)
        if not self._closed.is_set():
            self._end_cause = cause
            logger.debug("Sniffer on '%s' ended: %s", self.interface.capture_name, cause)
        self._queue.put(_END)

    def next_frame(self) -> CapturedFrame:
        item = self._queue.get()
        if item is _END:
            # Keep the marker for later callers
            self._queue.put(_END)
            if self._closed.is_set():
                raise CaptureTerminatedError("capture closed")
            reason = self._end_cause or "sniffer stopped"
            raise CaptureTerminatedError(f"capture on '{self.interface.name}' ended: {reason}")
        return item

    def close(self) -> None:
        if self._closed.is_set():
            return
        self._closed.set()
        if self._sniffer.running:
            try:
                self._sniffer.stop(join=False)
            except Scapy_Exception as e:
                logger.debug("Sniffer stop: %s", e)
        self._socket.close()
        self._queue.put(_END)

    def stats(self) -> Dict[str, Any]:
        stats = dict(self._stats)
        stats['queue_depth'] = self._queue.qsize()
        return stats

class ScapyBackend(ICaptureBackend):
    """Scapy-based capture backend (libpcap / Npcap / Linux packet sockets)."""

    def list_interfaces(self) -> List[InterfaceDescriptor]:
        try:
            ifaces = list(conf.ifaces.values())
        except Exception as e:
            raise InterfaceEnumerationError(f"Error listing interfaces: {e}") from e

        interfaces = []
        for position, iface in enumerate(ifaces):
            ip = getattr(iface, 'ip', None)
            interfaces.append(InterfaceDescriptor(
                index=position,
                name=iface.name,
                description=iface.description or iface.name,
                ipv4_address=ip if ip and ip != '0.0.0.0' else None,
                network_name=iface.network_name,
                mac=iface.mac or None,
            ))
        return interfaces

    def open(self, interface: InterfaceDescriptor, config: CaptureConfig) -> ScapyCaptureHandle:
        capture_name = interface.capture_name
        logger.debug("Opening capture on '%s' (filter=%r, promisc=%s)",
                     capture_name, config.filter, config.promisc)

        if config.filter:
            try:
                compile_filter(config.filter, iface=capture_name)
            except Scapy_Exception as e:
                raise FilterError(f"Invalid capture filter '{config.filter}': {e}") from e

        try:
            sock = conf.L2listen(
                iface=capture_name,
                filter=config.filter,
                promisc=config.promisc,
            )
        except Scapy_Exception as e:
            raise FilterError(f"Failed to apply filter on '{interface.name}': {e}") from e
        except (OSError, ValueError) as e:
            raise CaptureOpenError(f"Failed to open '{interface.name}': {e}") from e

        handle = ScapyCaptureHandle(interface, config, sock)
        try:
            handle.start()
        except Exception as e:
            sock.close()
            raise CaptureOpenError(f"Failed to start capture on '{interface.name}': {e}") from e
        return handle
