"""Receiving UDP datagrams through an adapter."""

from __future__ import annotations

import select
import socket as _socket
from dataclasses import dataclass
from typing import Optional

from .adapter import Adapter
from .common import NetworkError
from .endpoint import Endpoint

MIN_RECEIVE_BUFFER_SIZE = 8192
MAX_RECEIVE_BUFFER_SIZE = 65536


@dataclass
class Received:
    """Outcome of one receive call."""

    sender: Endpoint
    data: bytes = b""
    timeout: bool = False


class Receiver:
    """Reads datagrams from an adapter's socket."""

    MIN_RECEIVE_BUFFER_SIZE = MIN_RECEIVE_BUFFER_SIZE
    MAX_RECEIVE_BUFFER_SIZE = MAX_RECEIVE_BUFFER_SIZE

    def __init__(self, adapter: Adapter) -> None:
        self._adapter = adapter
        size = 0
        sock = adapter.socket
        if sock is not None:
            try:
                size = sock.getsockopt(_socket.SOL_SOCKET, _socket.SO_RCVBUF)
            except OSError:
                size = 0
        self._buffer_size = min(
            max(size, MIN_RECEIVE_BUFFER_SIZE), MAX_RECEIVE_BUFFER_SIZE
        )

    @property
    def buffer_size(self) -> int:
        return self._buffer_size

    def receive(self, millisec: Optional[int] = -1) -> Received:
        """Wait for one datagram.

        A negative or ``None`` timeout blocks indefinitely. On timeout the
        result has ``timeout`` set and no data.
        """
        mode = self._adapter.config.mode
        sock = self._adapter.socket
        if sock is None:
            raise NetworkError("Failed to poll on the socket: adapter is not open")

        timeout = None if millisec is None or millisec < 0 else millisec / 1000.0
        try:
            readable, _, _ = select.select([sock], [], [], timeout)
        except (OSError, ValueError) as exc:
            code = getattr(exc, "errno", None)
            raise NetworkError(
                f"Failed to poll on the socket, error code={code}"
            ) from exc

        if not readable:
            return Received(sender=Endpoint(mode), timeout=True)

        try:
            data, address = sock.recvfrom(self._buffer_size)
        except OSError as exc:
            raise NetworkError(
                f"Failed to receive udp packet, error code={exc.errno}"
            ) from exc

        return Received(sender=Endpoint.from_sockaddr(mode, address), data=data)