"""Address conversion helpers shared by endpoints, senders and receivers."""

from __future__ import annotations

import socket

INVALID_SOCKET_FD = -1

_MAPPED_PREFIX = bytes(10) + b"\xff\xff"

_PACKED_SIZES = {
    socket.AF_INET: 4,
    socket.AF_INET6: 16,
}


class NetworkError(RuntimeError):
    """Raised when an address conversion or socket operation fails."""


def _family_label(family: int) -> str:
    if family == socket.AF_INET:
        return "IPv4"
    if family == socket.AF_INET6:
        return "IPv6"
    return f"family {family}"


def parse_ip(family: int, ip: str) -> bytes:
    """Convert a textual address of the given family to its packed form."""
    try:
        return socket.inet_pton(family, ip)
    except (OSError, ValueError, TypeError) as exc:
        raise NetworkError(
            f"{_family_label(family)} address conversion failed: {ip!r}"
        ) from exc


def format_ip(family: int, packed: bytes) -> str:
    """Convert a packed address of the given family to its textual form."""
    expected = _PACKED_SIZES.get(family)
    if expected is not None and len(packed) != expected:
        raise NetworkError(
            f"{_family_label(family)} address conversion failed: "
            f"expected {expected} bytes, got {len(packed)}"
        )
    try:
        return socket.inet_ntop(family, packed)
    except (OSError, ValueError, TypeError) as exc:
        raise NetworkError(
            f"{_family_label(family)} address conversion failed"
        ) from exc


def map_ipv4_to_ipv6(packed_v4: bytes) -> bytes:
    """Return the IPv4-mapped IPv6 form (::ffff:a.b.c.d) of a packed IPv4 address."""
    if len(packed_v4) != 4:
        raise ValueError(f"packed IPv4 address must be 4 bytes, got {len(packed_v4)}")
    return _MAPPED_PREFIX + bytes(packed_v4)


def check_port(port: int) -> int:
    """Validate a UDP port number and return it."""
    if isinstance(port, bool) or not isinstance(port, int):
        raise TypeError(f"port must be an integer, got {type(port).__name__}")
    if not 0 <= port <= 0xFFFF:
        raise ValueError(f"port out of range 0..65535: {port}")
    return port