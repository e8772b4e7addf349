"""
Broadcast frame classification.

This module is deterministic and best-effort:
- It never throws on malformed/truncated frames
- Undecodable link layers classify as not broadcast
- Only the Ethernet header and the start of the network header are parsed
"""
from __future__ import annotations

import ipaddress
import logging
import struct
from typing import Optional

from ..models.frame import CapturedFrame, ClassificationResult, DLT_EN10MB

logger = logging.getLogger(__name__)

BROADCAST_MAC = b"\xff\xff\xff\xff\xff\xff"
ETH_HEADER_LEN = 14

# EtherType constants
ETH_TYPE_IPV4 = 0x0800
ETH_TYPE_ARP = 0x0806
ETH_TYPE_IPV6 = 0x86DD
ETH_TYPE_VLAN = 0x8100
ETH_TYPE_QINQ = 0x88A8


def classify(frame: CapturedFrame) -> ClassificationResult:
    """Classify a captured frame and extract its source identifiers."""
    data = frame.data or b""

    if frame.link_type != DLT_EN10MB or len(data) < ETH_HEADER_LEN:
        logger.debug("Undecodable link layer (link_type=%s, %d bytes)",
                     frame.link_type, len(data))
        return ClassificationResult.not_broadcast()

    if data[0:6] != BROADCAST_MAC:
        return ClassificationResult.not_broadcast()

    src_mac = _format_mac(data[6:12])
    ethertype = struct.unpack_from("!H", data, 12)[0]
    offset = ETH_HEADER_LEN

    # VLAN tags (single or double)
    for _ in range(2):
        if ethertype not in (ETH_TYPE_VLAN, ETH_TYPE_QINQ):
            break
        if len(data) < offset + 4:
            return ClassificationResult(is_broadcast=True, source_hardware_addr=src_mac)
        ethertype = struct.unpack_from("!H", data, offset + 2)[0]
        offset += 4

    return ClassificationResult(
        is_broadcast=True,
        source_hardware_addr=src_mac,
        source_network_addr=_source_network_addr(data, offset, ethertype),
    )


def _source_network_addr(data: bytes, offset: int, ethertype: int) -> Optional[str]:
    if ethertype == ETH_TYPE_IPV4:
        return _parse_ipv4_source(data, offset)
    if ethertype == ETH_TYPE_IPV6:
        return _parse_ipv6_source(data, offset)
    if ethertype == ETH_TYPE_ARP:
        return _parse_arp_sender(data, offset)
    return None


def _parse_ipv4_source(data: bytes, offset: int) -> Optional[str]:
    if offset + 20 > len(data):
        return None
    vihl = data[offset]
    if vihl >> 4 != 4 or (vihl & 0x0F) * 4 < 20:
        return None
    return _format_ipv4(data[offset + 12:offset + 16])


def _parse_ipv6_source(data: bytes, offset: int) -> Optional[str]:
    if offset + 40 > len(data):
        return None
    if data[offset] >> 4 != 6:
        return None
    return str(ipaddress.IPv6Address(data[offset + 8:offset + 24]))


def _parse_arp_sender(data: bytes, offset: int) -> Optional[str]:
    # Ethernet ARP payload; expect IPv4/ETH (hlen=6, plen=4)
    if offset + 28 > len(data):
        return None
    _, _, hlen, plen = struct.unpack_from("!HHBB", data, offset)
    if hlen != 6 or plen != 4:
        return None
    return _format_ipv4(data[offset + 14:offset + 18])


def _format_ipv4(addr: bytes) -> Optional[str]:
    if len(addr) != 4:
        return None
    return "{}.{}.{}.{}".format(addr[0], addr[1], addr[2], addr[3])


def _format_mac(addr: bytes) -> str:
    if len(addr) != 6:
        return ""
    return ":".join(f"{b:02x}" for b in addr)
