"""UDP endpoints, adapters, senders and receivers for IPv4 and IPv6."""

__version__ = "0.1.0"
__all__ = ["common", "endpoint", "adapter", "sender", "receiver"]