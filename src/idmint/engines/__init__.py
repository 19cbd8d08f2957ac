"""Obfuscating number codecs (Sqids and Hashids)."""

from idmint.engines.hashids import Hashids
from idmint.engines.sqids import Sqids

__all__ = ["Hashids", "Sqids"]
