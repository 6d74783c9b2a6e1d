"""A UDP socket bound to a local endpoint."""

from __future__ import annotations

import socket as _socket
from types import TracebackType
from typing import Optional, Type

from .common import NetworkError
from .endpoint import Endpoint, Mode


class Adapter:
    """Owns a UDP socket configured from a local endpoint.

    The socket is only bound when the endpoint names a specific address or a
    non-zero port; otherwise the operating system picks one on first send.
    """

    def __init__(self, endpoint: Endpoint) -> None:
        self._endpoint = endpoint
        self._socket: Optional[_socket.socket] = None

    def use_config(self, endpoint: Endpoint) -> None:
        """Replace the local endpoint; only allowed while the adapter is closed."""
        if self._socket is not None:
            raise NetworkError("Adapter is already opened, close it first")
        self._endpoint = endpoint

    @property
    def config(self) -> Endpoint:
        return self._endpoint

    @property
    def socket(self) -> Optional[_socket.socket]:
        return self._socket

    @property
    def is_open(self) -> bool:
        return self._socket is not None

    def open(self) -> None:
        """Create the socket, enable address reuse and bind it if needed."""
        if self._socket is not None:
            return

        endpoint = self._endpoint
        has_ip = any(endpoint.packed_ip)
        has_port = endpoint.port != 0

        try:
            sock = _socket.socket(endpoint.mode.family, _socket.SOCK_DGRAM)
        except OSError as exc:
            raise NetworkError(
                f"Failed to create a socket, error code={exc.errno}"
            ) from exc

        try:
            sock.setsockopt(_socket.SOL_SOCKET, _socket.SO_REUSEADDR, 1)
        except OSError as exc:
            sock.close()
            raise NetworkError(
                f"Failed to set SO_REUSEADDR option, error code={exc.errno}"
            ) from exc

        if has_ip or has_port:
            try:
                sock.bind(endpoint.sockaddr())
            except OSError as exc:
                sock.close()
                raise NetworkError(
                    f"Failed to bind a socket to adapter, error code={exc.errno}"
                ) from exc

        self._socket = sock

    def close(self) -> None:
        """Close the socket if it is open; safe to call repeatedly."""
        sock, self._socket = self._socket, None
        if sock is not None:
            sock.close()

    def __enter__(self) -> "Adapter":
        self.open()
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "open" if self.is_open else "closed"
        return f"Adapter({self._endpoint!r}, {state})"


__all__ = ["Adapter", "Mode"]