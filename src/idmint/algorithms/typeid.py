"""TypeID algorithm.

A TypeID is an optional type prefix and a UUIDv7 encoded in 26 characters
of lowercase Crockford Base32: ``user_01h455vb4pex5vsknk084sn02q``. The
suffix is the 128-bit value left-padded to 130 bits, so its first
character is always 0-7.
"""

import os
import re

from idmint.algorithms.base import Algorithm, Clock, Encoded, now_ms
from idmint.exceptions import InvalidPrefixError, InvalidTypeIdFormatError

ALPHABET = "0123456789abcdefghjkmnpqrstvwxyz"
SUFFIX_LENGTH = 26
MAX_PREFIX_LENGTH = 63

PREFIX_PATTERN = re.compile(r"^[a-z]([a-z_]*[a-z])?$")
SUFFIX_PATTERN = re.compile(r"^[0-7][0-9a-hjkmnp-tv-z]{25}$")

_LOOKUP = {char: index for index, char in enumerate(ALPHABET)}


def is_valid_prefix(prefix: str) -> bool:
    """Check a (non-empty) prefix against the TypeID prefix grammar."""
    return len(prefix) <= MAX_PREFIX_LENGTH and bool(PREFIX_PATTERN.fullmatch(prefix))


def is_valid_suffix(suffix: str) -> bool:
    return len(suffix) == SUFFIX_LENGTH and bool(SUFFIX_PATTERN.fullmatch(suffix))


def split(value: str) -> tuple[str, str]:
    """Split a TypeID into (prefix, suffix) at the last underscore."""
    prefix, separator, suffix = value.rpartition("_")
    if not separator:
        return "", value
    return prefix, suffix


def encode_suffix(data: bytes) -> str:
    """Encode 16 bytes as a 26-character suffix."""
    number = int.from_bytes(data, "big")
    chars = []
    for _ in range(SUFFIX_LENGTH):
        chars.append(ALPHABET[number & 0x1F])
        number >>= 5
    return "".join(reversed(chars))


def decode_suffix(suffix: str) -> bytes:
    """Decode a 26-character suffix into 16 bytes."""
    number = 0
    for char in suffix:
        number = (number << 5) | _LOOKUP.get(char, 0)
    return (number & ((1 << 128) - 1)).to_bytes(16, "big")


def uuid7_bytes(timestamp: int) -> bytes:
    """UUIDv7 bytes for a Unix millisecond timestamp."""
    random = bytearray(os.urandom(10))
    random[0] = (random[0] & 0x0F) | 0x70
    random[2] = (random[2] & 0x3F) | 0x80
    return (timestamp & 0xFFFFFFFFFFFF).to_bytes(6, "big") + bytes(random)


class TypeIdAlgorithm(Algorithm):
    """TypeID generation for a fixed prefix ('' for no prefix)."""

    name = "typeid"

    def __init__(self, prefix: str = "", clock: Clock = now_ms):
        """Initialize generator.

        Args:
            prefix: Type prefix (empty for a bare suffix)
            clock: Millisecond clock

        Raises:
            InvalidPrefixError: If the prefix does not match the prefix grammar
        """
        if prefix and not is_valid_prefix(prefix):
            raise InvalidPrefixError(prefix)

        self.prefix = prefix
        self.clock = clock

    def generate(self) -> Encoded:
        data = uuid7_bytes(self.clock())
        suffix = encode_suffix(data)
        value = f"{self.prefix}_{suffix}" if self.prefix else suffix
        return Encoded(value=value, bytes=data)

    def parse(self, value: str) -> Encoded:
        if not self.is_valid(value):
            raise InvalidTypeIdFormatError(value)

        _, suffix = split(value)
        return Encoded(value=value, bytes=decode_suffix(suffix))

    def is_valid(self, value: str) -> bool:
        """Validate prefix and suffix.

        Any valid prefix is accepted, not only the configured one.
        """
        if value == "":
            return False

        position = value.rfind("_")
        if position == -1:
            return is_valid_suffix(value)
        if position == 0:
            return False

        prefix, suffix = value[:position], value[position + 1 :]
        if suffix == "":
            return False
        return is_valid_prefix(prefix) and is_valid_suffix(suffix)
