"""Offline OUI vendor lookup for broadcast senders."""
from __future__ import annotations

from typing import Dict, Optional

# Minimal offline OUI mapping (uppercase hex without separators), biased
# towards devices that chatter on broadcast (ARP, DHCP, NetBIOS, discovery).
OUI_VENDOR_MAP: Dict[str, str] = {
    "000C29": "VMware",
    "005056": "VMware",
    "080027": "VirtualBox",
    "00155D": "Microsoft Hyper-V",
    "001B63": "Apple",
    "3C5A37": "Google",
    "B827EB": "Raspberry Pi",
    "DCA632": "Raspberry Pi",
    "00E04C": "Realtek",
    "F4F5D8": "Google",
    "001A2B": "Cisco Systems",
    "0016EA": "Intel",
    "5C514F": "Intel",
    "18B430": "Nest Labs",
    "000D93": "Apple",
}


def normalize_mac(mac: Optional[str]) -> Optional[str]:
    if not mac:
        return None
    cleaned = "".join(ch for ch in mac if ch not in ":-.").upper()
    if len(cleaned) != 12:
        return None
    return cleaned


def lookup_vendor(mac: Optional[str]) -> Optional[str]:
    """Vendor for mac, or None when the OUI is unknown or locally administered."""
    normalized = normalize_mac(mac)
    if not normalized:
        return None
    # Locally administered bit: randomized/virtual addresses have no vendor
    if int(normalized[0:2], 16) & 0x02:
        return None
    return OUI_VENDOR_MAP.get(normalized[:6])
