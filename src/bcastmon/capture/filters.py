"""BPF filter builder for broadcast-only capture."""

from __future__ import annotations

BROADCAST_FILTER = "ether broadcast"


def build_bpf_filter(extra: str = "") -> str:
    """Return the capture filter string.

    Restricts the kernel filter to link-layer broadcast frames. A
    user-supplied expression, if any, is ANDed onto it.
    """
    bpf = BROADCAST_FILTER

    if extra and extra.strip():
        bpf = f"({bpf}) and ({extra.strip()})"

    return bpf
