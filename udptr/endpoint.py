"""IPv4/IPv6 endpoint description: address family, address and port."""

from __future__ import annotations

import enum
import socket
from typing import Optional, Tuple, Union

from .common import check_port, format_ip, parse_ip


class Mode(enum.Enum):
    """Address family used by an endpoint."""

    IPV4 = "ipv4"
    IPV6 = "ipv6"

    @property
    def family(self) -> int:
        return socket.AF_INET if self is Mode.IPV4 else socket.AF_INET6

    @property
    def packed_size(self) -> int:
        return 4 if self is Mode.IPV4 else 16


def _coerce_mode(mode: Union[Mode, str]) -> Mode:
    if isinstance(mode, Mode):
        return mode
    try:
        return Mode(mode)
    except ValueError:
        raise ValueError(f"Invalid mode: {mode!r}") from None


class Endpoint:
    """An address and port of a given mode; unset parts are the wildcard address and port 0."""

    __slots__ = ("_mode", "_packed", "_port", "_flowinfo", "_scope_id")

    def __init__(
        self,
        mode: Union[Mode, str],
        ip: Optional[str] = None,
        port: int = 0,
    ) -> None:
        self._mode = _coerce_mode(mode)
        self._packed = bytes(self._mode.packed_size)
        self._port = 0
        self._flowinfo = 0
        self._scope_id = 0
        if ip is not None:
            self.use_ip(ip)
        self.use_port(port)

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def ip(self) -> str:
        return format_ip(self._mode.family, self._packed)

    @property
    def port(self) -> int:
        return self._port

    @property
    def packed_ip(self) -> bytes:
        return self._packed

    def use_ip(self, ip: str) -> "Endpoint":
        """Set the address from its textual form; returns self."""
        self._packed = parse_ip(self._mode.family, ip)
        return self

    def use_port(self, port: int) -> "Endpoint":
        """Set the port; returns self."""
        self._port = check_port(port)
        return self

    def use_packed_ip(self, packed: bytes) -> "Endpoint":
        """Set the address from its packed form; returns self."""
        packed = bytes(packed)
        if len(packed) != self._mode.packed_size:
            raise ValueError(
                f"packed {self._mode.value} address must be "
                f"{self._mode.packed_size} bytes, got {len(packed)}"
            )
        self._packed = packed
        return self

    def sockaddr(self) -> Tuple:
        """Return the address tuple accepted by socket bind/sendto."""
        if self._mode is Mode.IPV4:
            return (self.ip, self._port)
        return (self.ip, self._port, self._flowinfo, self._scope_id)

    @classmethod
    def from_sockaddr(cls, mode: Union[Mode, str], sockaddr: Tuple) -> "Endpoint":
        """Build an endpoint from an address tuple as returned by recvfrom."""
        mode = _coerce_mode(mode)
        expected = 2 if mode is Mode.IPV4 else 4
        if len(sockaddr) not in (2, expected) or (mode is Mode.IPV4 and len(sockaddr) != 2):
            raise ValueError(f"Invalid socket address for {mode.value}: {sockaddr!r}")
        host, port = sockaddr[0], sockaddr[1]
        if mode is Mode.IPV6:
            host = host.split("%", 1)[0]
        endpoint = cls(mode, host, port)
        if mode is Mode.IPV6 and len(sockaddr) == 4:
            endpoint._flowinfo = int(sockaddr[2])
            endpoint._scope_id = int(sockaddr[3])
        return endpoint

    def copy(self) -> "Endpoint":
        """Return an independent copy of this endpoint."""
        clone = Endpoint(self._mode)
        clone._packed = self._packed
        clone._port = self._port
        clone._flowinfo = self._flowinfo
        clone._scope_id = self._scope_id
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Endpoint):
            return NotImplemented
        return (
            self._mode is other._mode
            and self._packed == other._packed
            and self._port == other._port
            and self._scope_id == other._scope_id
        )

    def __hash__(self) -> int:
        return hash((self._mode, self._packed, self._port, self._scope_id))

    def __repr__(self) -> str:
        return f"Endpoint({self._mode.value}, {self.ip!r}, {self._port})"