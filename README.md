# udptr

A small library for sending and receiving UDP datagrams over IPv4 or IPv6.
It uses only the standard library.

## Install

```
pip install udptr
```

Install with the `test` extra to run the test suite:

```
pip install "udptr[test]"
pytest
```

## Modules

### `udptr.endpoint`

- `Mode`: the address family, `Mode.IPV4` or `Mode.IPV6`. Its `family`
  property gives the matching `socket.AF_*` constant. The strings `"ipv4"`
  and `"ipv6"` are accepted wherever a mode is expected.
- `Endpoint(mode, ip=None, port=0)`: an address and port. If no IP is given,
  the endpoint uses the wildcard address.
  - `mode`, `ip`, `port` and `packed_ip` are read-only properties.
  - `use_ip(ip)`, `use_port(port)` and `use_packed_ip(packed)` each return
    the endpoint, so calls can be chained.
  - `sockaddr()` returns the tuple that `bind`/`sendto` accept.
  - `Endpoint.from_sockaddr(mode, sockaddr)` builds an endpoint from a tuple
    as returned by `recvfrom`. A `%scope` suffix on an IPv6 host is dropped,
    and the scope id is kept from the tuple.
  - `copy()` returns an independent copy. Endpoints compare equal by mode,
    address, port and scope id, and can be hashed.

### `udptr.adapter`

`Adapter(endpoint)` wraps a UDP socket configured from a local endpoint.

- `open()` creates the socket and sets `SO_REUSEADDR`. It binds only when the
  endpoint has a non-wildcard IP or a non-zero port. Calling it on an open
  adapter does nothing.
- `close()` closes the socket. It is safe to call more than once.
- `config`, `socket` and `is_open` are read-only properties.
- `use_config(endpoint)` replaces the endpoint, but only while the adapter is
  closed. Otherwise it raises `NetworkError`.
- The adapter is a context manager: it opens on entry and closes on exit.

### `udptr.sender`

`Sender(adapter, server)` sends datagrams from an adapter to one server
endpoint, which is available as `server`.

- An IPv6 adapter reaches an IPv4 server through the IPv4-mapped form
  (`::ffff:a.b.c.d`).
- An IPv4 adapter given an IPv6 server raises `NetworkError`.
- `send(data)` sends one datagram. It raises `NetworkError` if the adapter is
  not open, if the send fails, or if only part of the data was sent.

### `udptr.receiver`

`Receiver(adapter)` reads datagrams from an open adapter.

- The receive buffer size comes from the socket's `SO_RCVBUF`, clamped to the
  range 8192 to 65536 bytes. It is available as `buffer_size`.
- `receive(millisec=-1)` waits for one datagram. A negative or `None` timeout
  waits forever. It returns a `Received` with these fields:
  - `data`: the payload;
  - `sender`: an `Endpoint` for the sender;
  - `timeout`: `True` if nothing arrived in time. In that case `data` is empty.

### `udptr.common`

Address helpers: `parse_ip`, `format_ip`, `map_ipv4_to_ipv6` and
`check_port`. `NetworkError`, a subclass of `RuntimeError`, is raised for
failed conversions and socket operations. An invalid port raises `ValueError`
or `TypeError`.

## Example

```python
from udptr.endpoint import Endpoint, Mode
from udptr.adapter import Adapter
from udptr.sender import Sender
from udptr.receiver import Receiver

with Adapter(Endpoint(Mode.IPV6, "::1", 6056)) as server, \
     Adapter(Endpoint(Mode.IPV6)) as client:
    receiver = Receiver(server)
    sender = Sender(client, server.config)

    sender.send(b"hello")

    packet = receiver.receive(500)
    if not packet.timeout:
        print(packet.data, packet.sender.ip, packet.sender.port)
```

## What it does not do

udptr is a library only. It provides no command-line program. It does not
handle retransmission, ordering, fragmentation of large payloads, or any
framing: each `send` produces exactly one datagram.