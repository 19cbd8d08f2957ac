"""XID algorithm.

Layout: 32-bit Unix seconds + 40-bit machine id + 24-bit counter,
12 bytes encoded as 20 lowercase Base32Hex characters.
"""

import os
import re

from idmint.algorithms.base import Algorithm, Clock, Encoded, now_ms
from idmint.encoding import base32hex
from idmint.exceptions import InvalidXidFormatError

BYTE_LENGTH = 12
STRING_LENGTH = 20
MAX_COUNTER = 0xFFFFFF

PATTERN = re.compile(r"^[0-9a-v]{20}$")


class XidAlgorithm(Algorithm):
    """XID generation.

    The machine id is drawn once per instance; the counter starts at zero
    and wraps after 0xFFFFFF.
    """

    name = "xid"

    def __init__(self, clock: Clock = now_ms, machine_id: bytes | None = None):
        self.clock = clock
        self.machine_id = machine_id if machine_id is not None else os.urandom(5)
        self._counter = 0

    def generate(self) -> Encoded:
        return self.generate_from_timestamp(self.clock() // 1000)

    def generate_from_timestamp(self, timestamp: int) -> Encoded:
        """Generate an XID for a given Unix timestamp in seconds."""
        counter = self._counter
        self._counter += 1
        if self._counter > MAX_COUNTER:
            self._counter = 0

        data = (
            (timestamp & 0xFFFFFFFF).to_bytes(4, "big")
            + self.machine_id
            + counter.to_bytes(3, "big")
        )
        return Encoded(value=base32hex.encode_bytes(data), bytes=data)

    def parse(self, value: str) -> Encoded:
        if not self.is_valid(value):
            raise InvalidXidFormatError(value)

        value = value.lower()
        return Encoded(value=value, bytes=base32hex.decode_bytes(value, BYTE_LENGTH))

    def is_valid(self, value: str) -> bool:
        return len(value) == STRING_LENGTH and bool(PATTERN.fullmatch(value.lower()))
