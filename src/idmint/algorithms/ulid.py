"""ULID algorithm (Universally Unique Lexicographically Sortable Identifier).

Format: 48-bit millisecond timestamp (10 chars) + 80 random bits (16 chars),
Crockford Base32, 26 characters.
"""

import os
import re

from idmint.algorithms.base import Algorithm, Clock, Encoded, now_ms
from idmint.encoding import base32
from idmint.exceptions import InvalidUlidFormatError

MAX_TIMESTAMP = 2**48 - 1
RANDOM_BYTES = 10

PATTERN = re.compile(r"^[0-9A-HJKMNP-TV-Z]{26}$", re.IGNORECASE)


def increment_bytes(data: bytes) -> bytes:
    """Add one to a big-endian byte string, wrapping to zero on overflow."""
    result = bytearray(data)
    for i in range(len(result) - 1, -1, -1):
        if result[i] < 0xFF:
            result[i] += 1
            break
        result[i] = 0
    return bytes(result)


class UlidAlgorithm(Algorithm):
    """ULID generation.

    In monotonic mode (the default) a ULID generated in the same millisecond
    as the previous one reuses its random part incremented by one, so
    consecutive values from one instance always sort in creation order.
    """

    name = "ulid"

    def __init__(self, monotonic: bool = True, clock: Clock = now_ms):
        self.monotonic = monotonic
        self.clock = clock
        self._last_timestamp = 0
        self._last_random = b""

    def generate(self) -> Encoded:
        timestamp = self.clock()

        if self.monotonic and timestamp == self._last_timestamp and self._last_random:
            random = increment_bytes(self._last_random)
        else:
            random = os.urandom(RANDOM_BYTES)

        self._last_timestamp = timestamp
        self._last_random = random
        return self._build(timestamp, random)

    def from_timestamp(self, timestamp: int) -> Encoded:
        """Generate a ULID for a given Unix millisecond timestamp."""
        return self._build(timestamp, os.urandom(RANDOM_BYTES))

    def parse(self, value: str) -> Encoded:
        if not self.is_valid(value):
            raise InvalidUlidFormatError(value)

        value = value.upper()
        return Encoded(value=value, bytes=base32.decode_bytes(value, 16))

    def is_valid(self, value: str) -> bool:
        """Check the alphabet, length and that the timestamp fits in 48 bits."""
        if not PATTERN.fullmatch(value):
            return False
        return base32.decode_number(value[:10]) <= MAX_TIMESTAMP

    def _build(self, timestamp: int, random: bytes) -> Encoded:
        value = base32.encode_number(timestamp, 10) + base32.encode_bytes(random)
        return Encoded(value=value, bytes=timestamp.to_bytes(6, "big") + random)
