"""UUID algorithm (RFC 9562 versions 1, 3, 4, 5, 6, 7 and 8)."""

import hashlib
import os
import re
import secrets

from idmint.algorithms.base import Algorithm, Clock, Encoded, now_ms
from idmint.exceptions import InvalidUuidFormatError
from idmint.types import UuidVersion

NAMESPACE_DNS = "6ba7b810-9dad-11d1-80b4-00c04fd430c8"
NAMESPACE_URL = "6ba7b811-9dad-11d1-80b4-00c04fd430c8"
NAMESPACE_OID = "6ba7b812-9dad-11d1-80b4-00c04fd430c8"
NAMESPACE_X500 = "6ba7b814-9dad-11d1-80b4-00c04fd430c8"

NIL = "00000000-0000-0000-0000-000000000000"
MAX = "ffffffff-ffff-ffff-ffff-ffffffffffff"

# 100-ns intervals between the Gregorian epoch (1582-10-15) and the Unix epoch
GREGORIAN_OFFSET = 0x01B21DD213814000

PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)


def format_hex(hex: str) -> str:
    """Insert hyphens into 32 hex characters (8-4-4-4-12)."""
    return f"{hex[0:8]}-{hex[8:12]}-{hex[12:16]}-{hex[16:20]}-{hex[20:32]}"


def _set_version(data: bytes, version: int) -> bytes:
    raw = bytearray(data[:16])
    raw[6] = (raw[6] & 0x0F) | (version << 4)
    raw[8] = (raw[8] & 0x3F) | 0x80
    return bytes(raw)


def _encoded(data: bytes) -> Encoded:
    return Encoded(value=format_hex(data.hex()), bytes=data)


def gregorian_timestamp(ms: int) -> int:
    """Unix milliseconds to 100-ns intervals since the Gregorian epoch."""
    return ms * 10_000 + GREGORIAN_OFFSET


def unix_ms_from_gregorian(ticks: int) -> int:
    """100-ns intervals since the Gregorian epoch to Unix milliseconds."""
    return (ticks - GREGORIAN_OFFSET) // 10_000


class UuidAlgorithm(Algorithm):
    """UUID generation for a fixed version.

    Version 7 is the default. Name-based versions (3, 5) hash the namespace
    bytes followed by the UTF-8 name, defaulting to the DNS namespace and an
    empty name.
    """

    name = "uuid"

    def __init__(
        self,
        version: UuidVersion | int = UuidVersion.V7,
        namespace: str | None = None,
        name: str | None = None,
        clock: Clock = now_ms,
    ):
        self.version = UuidVersion(version)
        self.namespace = namespace
        self.name_value = name
        self.clock = clock

    def generate(self) -> Encoded:
        """Generate a UUID of the configured version."""
        generators = {
            UuidVersion.V1: self._generate_v1,
            UuidVersion.V3: self._generate_v3,
            UuidVersion.V4: self._generate_v4,
            UuidVersion.V5: self._generate_v5,
            UuidVersion.V6: self._generate_v6,
            UuidVersion.V7: self._generate_v7,
            UuidVersion.V8: self._generate_v8,
        }
        return generators[self.version]()

    def parse(self, value: str) -> Encoded:
        """Parse a hyphenated UUID; the canonical form is lowercase."""
        if not self.is_valid(value):
            raise InvalidUuidFormatError(value)

        value = value.lower()
        return Encoded(value=value, bytes=bytes.fromhex(value.replace("-", "")))

    def is_valid(self, value: str) -> bool:
        """Validate the 8-4-4-4-12 hex layout (case-insensitive)."""
        return bool(PATTERN.fullmatch(value))

    @staticmethod
    def detect_version(value: str) -> UuidVersion:
        """Read the version nibble; unknown versions are reported as v4."""
        hex = value.replace("-", "")
        nibble = int(hex[12], 16)
        try:
            return UuidVersion(nibble)
        except ValueError:
            return UuidVersion.V4

    def _clock_sequence(self) -> int:
        return secrets.randbelow(0x4000) | 0x8000

    def _generate_v1(self) -> Encoded:
        ticks = gregorian_timestamp(self.clock())

        time_low = ticks & 0xFFFFFFFF
        time_mid = (ticks >> 32) & 0xFFFF
        time_hi = ((ticks >> 48) & 0x0FFF) | 0x1000

        node = bytearray(os.urandom(6))
        node[0] |= 0x01  # multicast bit marks a random node

        data = (
            time_low.to_bytes(4, "big")
            + time_mid.to_bytes(2, "big")
            + time_hi.to_bytes(2, "big")
            + self._clock_sequence().to_bytes(2, "big")
            + bytes(node)
        )
        return _encoded(data)

    def _generate_v6(self) -> Encoded:
        ticks = gregorian_timestamp(self.clock())

        time_high = (ticks >> 28) & 0xFFFFFFFF
        time_mid = (ticks >> 12) & 0xFFFF
        time_low = (ticks & 0x0FFF) | 0x6000

        data = (
            time_high.to_bytes(4, "big")
            + time_mid.to_bytes(2, "big")
            + time_low.to_bytes(2, "big")
            + self._clock_sequence().to_bytes(2, "big")
            + os.urandom(6)
        )
        return _encoded(data)

    def _generate_v7(self) -> Encoded:
        timestamp = self.clock() & 0xFFFFFFFFFFFF
        random = bytearray(os.urandom(10))
        random[0] = (random[0] & 0x0F) | 0x70
        random[2] = (random[2] & 0x3F) | 0x80
        return _encoded(timestamp.to_bytes(6, "big") + bytes(random))

    def _name_based(self, version: int, digest: str) -> Encoded:
        namespace = bytes.fromhex((self.namespace or NAMESPACE_DNS).replace("-", ""))
        hashed = hashlib.new(digest, namespace + (self.name_value or "").encode("utf-8")).digest()
        return _encoded(_set_version(hashed, version))

    def _generate_v3(self) -> Encoded:
        return self._name_based(3, "md5")

    def _generate_v5(self) -> Encoded:
        return self._name_based(5, "sha1")

    def _generate_v4(self) -> Encoded:
        return _encoded(_set_version(os.urandom(16), 4))

    def _generate_v8(self) -> Encoded:
        return _encoded(_set_version(os.urandom(16), 8))
