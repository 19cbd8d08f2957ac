"""Timeflake algorithm.

Layout: 48-bit millisecond timestamp + 80 random bits, 16 bytes encoded as
22 Base62 characters (or 32 hex characters).
"""

import os
import re

from idmint.algorithms.base import Algorithm, Clock, Encoded, now_ms
from idmint.encoding import base62
from idmint.exceptions import InvalidTimeflakeFormatError

BYTE_LENGTH = 16
STRING_LENGTH = 22
MIN_BASE62_LENGTH = 18
MAX_BASE62_LENGTH = 26

HEX_PATTERN = re.compile(r"^[0-9a-f]{32}$", re.IGNORECASE)
BASE62_PATTERN = re.compile(r"^[0-9A-Za-z]+$")


class TimeflakeAlgorithm(Algorithm):
    """Timeflake generation."""

    name = "timeflake"

    def __init__(self, clock: Clock = now_ms):
        self.clock = clock

    def generate(self) -> Encoded:
        return self.generate_from_timestamp(self.clock())

    def generate_from_timestamp(self, timestamp: int) -> Encoded:
        """Generate a Timeflake for a given Unix millisecond timestamp."""
        data = self._random_bytes(timestamp)
        return Encoded(value=base62.encode_bytes(data, STRING_LENGTH), bytes=data)

    def generate_hex(self) -> Encoded:
        """Generate a Timeflake in its 32-character hex form."""
        data = self._random_bytes(self.clock())
        return Encoded(value=data.hex(), bytes=data)

    def parse(self, value: str) -> Encoded:
        """Parse the hex or Base62 form."""
        if not self.is_valid(value):
            raise InvalidTimeflakeFormatError(value)

        if HEX_PATTERN.fullmatch(value):
            return Encoded(value=value, bytes=bytes.fromhex(value))
        return Encoded(value=value, bytes=base62.decode_bytes(value, BYTE_LENGTH))

    def is_valid(self, value: str) -> bool:
        """Accept 32 hex characters, or 18-26 Base62 characters fitting in 128 bits."""
        if HEX_PATTERN.fullmatch(value):
            return True

        if not MIN_BASE62_LENGTH <= len(value) <= MAX_BASE62_LENGTH:
            return False
        if not BASE62_PATTERN.fullmatch(value):
            return False
        return base62.decode_number(value).bit_length() <= BYTE_LENGTH * 8

    @staticmethod
    def _random_bytes(timestamp: int) -> bytes:
        return (timestamp & 0xFFFFFFFFFFFF).to_bytes(6, "big") + os.urandom(10)
