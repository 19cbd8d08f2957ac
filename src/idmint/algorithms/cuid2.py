"""CUID2 algorithm.

A letter followed by a base36 digest of the current time, a random salt,
a counter and a per-instance fingerprint.
"""

import hashlib
import os
import re
import secrets
import socket

from idmint.algorithms.base import Algorithm, Clock, Encoded, now_ms
from idmint.exceptions import InvalidCuid2FormatError, InvalidLengthError

ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
DEFAULT_LENGTH = 24
MIN_LENGTH = 2
MAX_LENGTH = 32

PATTERN = re.compile(r"^[a-z][0-9a-z]+$")


def hex_to_base36(hex: str) -> str:
    """Convert hex to base36 in 8-digit chunks, each left-padded to 6 symbols."""
    result = []
    for i in range(0, len(hex), 8):
        number = int(hex[i : i + 8], 16)
        chars = []
        while number > 0:
            chars.append(ALPHABET[number % 36])
            number //= 36
        result.append("".join(reversed(chars)).rjust(6, "0"))
    return "".join(result)


def create_fingerprint(clock: Clock = now_ms) -> str:
    """Hash host name, process id and random data into a fingerprint."""
    data = f"{socket.gethostname()}-{os.getpid()}-{secrets.token_hex(8)}-{clock()}"
    return hashlib.sha256(data.encode("utf-8")).hexdigest()


class Cuid2Algorithm(Algorithm):
    """CUID2 generation with a fixed length (2-32, default 24)."""

    name = "cuid2"

    def __init__(self, length: int = DEFAULT_LENGTH, clock: Clock = now_ms):
        """Initialize generator.

        Raises:
            InvalidLengthError: If length is outside 2-32
        """
        if length < MIN_LENGTH or length > MAX_LENGTH:
            raise InvalidLengthError(length, MIN_LENGTH, MAX_LENGTH)

        self.length = length
        self.clock = clock
        self.fingerprint = create_fingerprint(clock)
        self._counter = 0

    def generate(self) -> Encoded:
        first_letter = ALPHABET[10 + secrets.randbelow(26)]

        salt = secrets.token_hex(16)
        counter = self._counter
        self._counter += 1

        digest = hashlib.sha3_256(
            f"{self.clock()}{salt}{counter}{self.fingerprint}".encode("utf-8")
        ).hexdigest()
        value = first_letter + hex_to_base36(digest)[: self.length - 1]
        return Encoded(value=value, bytes=value.encode("ascii"))

    def parse(self, value: str) -> Encoded:
        if not self.is_valid(value):
            raise InvalidCuid2FormatError(value)

        return Encoded(value=value, bytes=value.encode("ascii"))

    def is_valid(self, value: str) -> bool:
        """Lowercase base36 starting with a letter, 2-32 characters."""
        if not MIN_LENGTH <= len(value) <= MAX_LENGTH:
            return False
        return bool(PATTERN.fullmatch(value))
