"""MongoDB ObjectID algorithm.

Layout: 32-bit Unix seconds + 40-bit random value + 24-bit counter,
12 bytes as 24 lowercase hex characters.
"""

import os
import re
import secrets

from idmint.algorithms.base import Algorithm, Clock, Encoded, now_ms
from idmint.exceptions import InvalidObjectIdFormatError

MAX_COUNTER = 0xFFFFFF

PATTERN = re.compile(r"^[0-9a-f]{24}$", re.IGNORECASE)


class ObjectIdAlgorithm(Algorithm):
    """ObjectID generation.

    The random value is drawn once per instance and the counter starts at a
    random offset, wrapping modulo 2**24.
    """

    name = "objectid"

    def __init__(self, clock: Clock = now_ms):
        self.clock = clock
        self.random_value = os.urandom(5)
        self._counter = secrets.randbelow(MAX_COUNTER + 1)

    def generate(self) -> Encoded:
        return self.from_timestamp(self.clock() // 1000)

    def from_timestamp(self, timestamp: int) -> Encoded:
        """Generate an ObjectID for a given Unix timestamp in seconds."""
        data = (
            (timestamp & 0xFFFFFFFF).to_bytes(4, "big")
            + self.random_value
            + self._next_counter().to_bytes(3, "big")
        )
        return Encoded(value=data.hex(), bytes=data)

    def parse(self, value: str) -> Encoded:
        if not self.is_valid(value):
            raise InvalidObjectIdFormatError(value)

        value = value.lower()
        return Encoded(value=value, bytes=bytes.fromhex(value))

    def is_valid(self, value: str) -> bool:
        return bool(PATTERN.fullmatch(value))

    def _next_counter(self) -> int:
        counter = self._counter
        self._counter = (self._counter + 1) & MAX_COUNTER
        return counter
