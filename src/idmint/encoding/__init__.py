"""Base-N codecs used by the identifier algorithms."""

from idmint.encoding import base32, base32hex, base62

__all__ = ["base32", "base32hex", "base62"]
