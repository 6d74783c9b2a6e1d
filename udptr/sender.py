"""Sending UDP datagrams through an adapter to a fixed server."""

from __future__ import annotations

from .adapter import Adapter
from .common import NetworkError, map_ipv4_to_ipv6
from .endpoint import Endpoint, Mode


class Sender:
    """Sends datagrams from an adapter to one server endpoint.

    An IPv4 server used with an IPv6 adapter is addressed through its
    IPv4-mapped IPv6 form; the reverse is rejected.
    """

    def __init__(self, adapter: Adapter, server: Endpoint) -> None:
        self._adapter = adapter
        self._server = self._compatible_server(server)

    def _compatible_server(self, server: Endpoint) -> Endpoint:
        adapter_mode = self._adapter.config.mode
        if adapter_mode is server.mode:
            return server.copy()
        if adapter_mode is Mode.IPV4:
            raise NetworkError(
                "Adapter is using IPv4, but target server is using IPv6, "
                "no conversion is possible"
            )
        return (
            Endpoint(Mode.IPV6)
            .use_port(server.port)
            .use_packed_ip(map_ipv4_to_ipv6(server.packed_ip))
        )

    @property
    def server(self) -> Endpoint:
        return self._server

    def send(self, data: bytes) -> None:
        """Send one datagram holding all of ``data``."""
        payload = memoryview(data)
        size = payload.nbytes
        sock = self._adapter.socket
        if sock is None:
            raise NetworkError("Failed to send udp packet: adapter is not open")
        try:
            sent = sock.sendto(payload, self._server.sockaddr())
        except OSError as exc:
            raise NetworkError(
                f"Failed to send udp packet, error code={exc.errno}"
            ) from exc
        if sent != size:
            raise NetworkError(f"Sent only {sent} out of {size} bytes")