"""KSUID algorithm (K-Sortable Unique IDentifier).

Layout: 32-bit seconds since the KSUID epoch + 128-bit random payload,
20 bytes encoded as 27 Base62 characters.
"""

import os
import re

from idmint.algorithms.base import Algorithm, Clock, Encoded, now_ms
from idmint.encoding import base62
from idmint.exceptions import InvalidKsuidFormatError

EPOCH = 1400000000  # 2014-05-13T16:53:20Z
BYTE_LENGTH = 20
STRING_LENGTH = 27
PAYLOAD_LENGTH = 16

PATTERN = re.compile(r"^[0-9A-Za-z]{27}$")


class KsuidAlgorithm(Algorithm):
    """KSUID generation with a configurable epoch (Unix seconds)."""

    name = "ksuid"

    def __init__(self, epoch: int = EPOCH, clock: Clock = now_ms):
        self.epoch = epoch
        self.clock = clock

    def generate(self) -> Encoded:
        return self.from_timestamp(self.clock() // 1000)

    def from_timestamp(self, timestamp: int) -> Encoded:
        """Generate a KSUID for a given Unix timestamp in seconds."""
        adjusted = (timestamp - self.epoch) & 0xFFFFFFFF
        return self._build(adjusted.to_bytes(4, "big") + os.urandom(PAYLOAD_LENGTH))

    def min(self) -> Encoded:
        """Smallest KSUID (all zero bytes)."""
        return self._build(bytes(BYTE_LENGTH))

    def max(self) -> Encoded:
        """Largest KSUID (all 0xFF bytes)."""
        return self._build(b"\xff" * BYTE_LENGTH)

    def parse(self, value: str) -> Encoded:
        if not self.is_valid(value):
            raise InvalidKsuidFormatError(value)

        return Encoded(value=value, bytes=base62.decode_bytes(value, BYTE_LENGTH))

    def is_valid(self, value: str) -> bool:
        """27 Base62 characters whose value fits in 160 bits."""
        if not PATTERN.fullmatch(value):
            return False
        return base62.decode_number(value).bit_length() <= BYTE_LENGTH * 8

    def _build(self, data: bytes) -> Encoded:
        return Encoded(value=base62.encode_bytes(data, STRING_LENGTH), bytes=data)
