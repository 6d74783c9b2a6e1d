import socket
import struct
import time

import pytest

from udptr.adapter import Adapter
from udptr.common import NetworkError
from udptr.endpoint import Endpoint, Mode
from udptr.sender import Sender


@pytest.fixture
def listener():
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(2.0)
    yield sock
    sock.close()


def test_same_mode_server_is_copied():
    server = Endpoint(Mode.IPV4, "127.0.0.1", 6056)
    sender = Sender(Adapter(Endpoint(Mode.IPV4)), server)
    assert sender.server == server
    assert sender.server is not server


def test_ipv6_server_with_ipv4_adapter_raises():
    server = Endpoint(Mode.IPV6, "::1", 6056)
    with pytest.raises(NetworkError):
        Sender(Adapter(Endpoint(Mode.IPV4)), server)


def test_ipv4_server_mapped_for_ipv6_adapter():
    server = Endpoint(Mode.IPV4, "127.0.0.1", 6056)
    sender = Sender(Adapter(Endpoint(Mode.IPV6)), server)
    assert sender.server.mode is Mode.IPV6
    assert sender.server.ip == "::ffff:127.0.0.1"
    assert sender.server.port == 6056


def test_ipv6_server_with_ipv6_adapter():
    server = Endpoint(Mode.IPV6, "::1", 6056)
    sender = Sender(Adapter(Endpoint(Mode.IPV6)), server)
    assert sender.server.ip == "::1"
    assert sender.server.port == 6056


def test_send_on_closed_adapter_raises():
    server = Endpoint(Mode.IPV4, "127.0.0.1", 6056)
    sender = Sender(Adapter(Endpoint(Mode.IPV4)), server)
    with pytest.raises(NetworkError):
        sender.send(b"data")


def test_send_rejects_text(listener):
    port = listener.getsockname()[1]
    with Adapter(Endpoint(Mode.IPV4)) as adapter:
        sender = Sender(adapter, Endpoint(Mode.IPV4, "127.0.0.1", port))
        with pytest.raises(TypeError):
            sender.send("text")


def test_send_delivers_payload(listener):
    port = listener.getsockname()[1]
    with Adapter(Endpoint(Mode.IPV4)) as adapter:
        sender = Sender(adapter, Endpoint(Mode.IPV4, "127.0.0.1", port))
        sender.send(b"payload")
        data, address = listener.recvfrom(65536)
        assert data == b"payload"
        assert address[1] == adapter.socket.getsockname()[1]


def test_send_timestamped_message(listener):
    port = listener.getsockname()[1]
    with Adapter(Endpoint(Mode.IPV4)) as adapter:
        sender = Sender(adapter, Endpoint(Mode.IPV4, "127.0.0.1", port))
        t1 = time.time_ns() // 1000
        message = b"Type anything"
        sender.send(struct.pack("=q", t1) + message)
        data, _ = listener.recvfrom(65536)
        assert struct.unpack("=q", data[:8])[0] == t1
        assert data[8:] == message


def test_send_accepts_bytearray(listener):
    port = listener.getsockname()[1]
    with Adapter(Endpoint(Mode.IPV4)) as adapter:
        sender = Sender(adapter, Endpoint(Mode.IPV4, "127.0.0.1", port))
        sender.send(bytearray(b"abc"))
        data, address = listener.recvfrom(65536)
        assert data == b"abc"
        assert address[1] == adapter.socket.getsockname()[1]
        assert sender.server.port == port


def test_send_uses_current_adapter_socket(listener):
    port = listener.getsockname()[1]
    adapter = Adapter(Endpoint(Mode.IPV4))
    sender = Sender(adapter, Endpoint(Mode.IPV4, "127.0.0.1", port))
    adapter.open()
    try:
        sender.send(b"late")
        data, _ = listener.recvfrom(65536)
        assert data == b"late"
    finally:
        adapter.close()
    with pytest.raises(NetworkError):
        sender.send(b"closed")