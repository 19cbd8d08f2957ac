"""Identifier value objects.

Each generated or parsed identifier is an immutable value holding its
canonical string form and the bytes it encodes. Components (timestamp,
node id, counter, ...) are derived from those on access.
"""

from dataclasses import dataclass
from typing import Any

from idmint.algorithms import pushid
from idmint.algorithms.ksuid import EPOCH as KSUID_EPOCH
from idmint.algorithms.snowflake import DEFAULT_EPOCH, NODE_ID_SHIFT, TIMESTAMP_SHIFT
from idmint.algorithms.uuid import format_hex, unix_ms_from_gregorian
from idmint.encoding import base32
from idmint.types import UuidVersion


@dataclass(frozen=True, eq=False)
class Identifier:
    """Base identifier value.

    Two identifiers are equal when their string forms are equal.
    """

    value: str
    bytes: bytes

    def __str__(self) -> str:
        return self.value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Identifier):
            return self.value == other.value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)

    def to_string(self) -> str:
        """Canonical string form."""
        return self.value

    def to_bytes(self) -> bytes:
        """Binary form."""
        return self.bytes

    def equals(self, other: "Identifier") -> bool:
        """Compare string forms."""
        return self.value == other.to_string()

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable form."""
        return {"value": self.value}

    @property
    def timestamp(self) -> int | None:
        """Embedded Unix timestamp in milliseconds, or None."""
        return None

    @property
    def is_sortable(self) -> bool:
        """Whether values sort chronologically as strings."""
        return False


@dataclass(frozen=True, eq=False)
class Uuid(Identifier):
    """UUID of a known version."""

    version: UuidVersion = UuidVersion.V4

    @property
    def timestamp(self) -> int | None:
        """Timestamp of v1, v6 and v7 UUIDs; None for other versions."""
        if self.version == UuidVersion.V1:
            time_low = int.from_bytes(self.bytes[0:4], "big")
            time_mid = int.from_bytes(self.bytes[4:6], "big")
            time_hi = int.from_bytes(self.bytes[6:8], "big") & 0x0FFF
            return unix_ms_from_gregorian((time_hi << 48) | (time_mid << 32) | time_low)

        if self.version == UuidVersion.V6:
            time_high = int.from_bytes(self.bytes[0:4], "big")
            time_mid = int.from_bytes(self.bytes[4:6], "big")
            time_low = int.from_bytes(self.bytes[6:8], "big") & 0x0FFF
            return unix_ms_from_gregorian((time_high << 28) | (time_mid << 12) | time_low)

        if self.version == UuidVersion.V7:
            return int.from_bytes(self.bytes[0:6], "big")

        return None

    @property
    def is_sortable(self) -> bool:
        return self.version.is_sortable


@dataclass(frozen=True, eq=False)
class Ulid(Identifier):
    @property
    def timestamp(self) -> int:
        return base32.decode_number(self.value[:10])

    @property
    def randomness(self) -> str:
        """The 16-character random part."""
        return self.value[10:26]

    @property
    def is_sortable(self) -> bool:
        return True

    def to_uuid(self) -> str:
        """Same 128 bits as a hyphenated UUID string."""
        return format_hex(self.bytes.hex())


@dataclass(frozen=True, eq=False)
class Snowflake(Identifier):
    epoch: int = DEFAULT_EPOCH

    @property
    def id(self) -> int:
        return int.from_bytes(self.bytes, "big")

    @property
    def timestamp(self) -> int:
        return (self.id >> TIMESTAMP_SHIFT) + self.epoch

    @property
    def node_id(self) -> int:
        return (self.id >> NODE_ID_SHIFT) & 0x3FF

    @property
    def sequence(self) -> int:
        return self.id & 0xFFF

    @property
    def is_sortable(self) -> bool:
        return True


@dataclass(frozen=True, eq=False)
class Ksuid(Identifier):
    epoch: int = KSUID_EPOCH

    @property
    def timestamp(self) -> int:
        return (int.from_bytes(self.bytes[0:4], "big") + self.epoch) * 1000

    @property
    def payload(self) -> str:
        """Random payload as hex."""
        return self.bytes[4:20].hex()

    @property
    def is_sortable(self) -> bool:
        return True


@dataclass(frozen=True, eq=False)
class TypeId(Identifier):
    prefix: str = ""
    suffix: str = ""

    @property
    def timestamp(self) -> int:
        return int.from_bytes(self.bytes[0:6], "big")

    @property
    def is_sortable(self) -> bool:
        return True

    def to_uuid(self) -> str:
        """The UUID encoded by the suffix."""
        return format_hex(self.bytes.hex())


@dataclass(frozen=True, eq=False)
class Xid(Identifier):
    @property
    def timestamp(self) -> int:
        return int.from_bytes(self.bytes[0:4], "big") * 1000

    @property
    def machine_id(self) -> str:
        return self.bytes[4:9].hex()

    @property
    def counter(self) -> int:
        return int.from_bytes(self.bytes[9:12], "big")

    @property
    def is_sortable(self) -> bool:
        return True


@dataclass(frozen=True, eq=False)
class ObjectId(Identifier):
    @property
    def timestamp(self) -> int:
        return int.from_bytes(self.bytes[0:4], "big") * 1000

    @property
    def random_value(self) -> str:
        return self.bytes[4:9].hex()

    @property
    def counter(self) -> int:
        return int.from_bytes(self.bytes[9:12], "big")

    @property
    def is_sortable(self) -> bool:
        return True


@dataclass(frozen=True, eq=False)
class PushId(Identifier):
    @property
    def timestamp(self) -> int:
        timestamp = 0
        for char in self.value[: pushid.TIMESTAMP_LENGTH]:
            timestamp = timestamp * 64 + pushid.ALPHABET.index(char)
        return timestamp

    @property
    def random_part(self) -> str:
        return self.value[pushid.TIMESTAMP_LENGTH :]

    @property
    def is_sortable(self) -> bool:
        return True


@dataclass(frozen=True, eq=False)
class Timeflake(Identifier):
    @property
    def timestamp(self) -> int:
        return int.from_bytes(self.bytes[0:6], "big")

    @property
    def randomness(self) -> str:
        return self.bytes[6:16].hex()

    @property
    def is_sortable(self) -> bool:
        return True

    def to_uuid(self) -> str:
        return format_hex(self.bytes.hex())


@dataclass(frozen=True, eq=False)
class Cuid2(Identifier):
    @property
    def length(self) -> int:
        return len(self.value)


@dataclass(frozen=True, eq=False)
class NanoId(Identifier):
    @property
    def length(self) -> int:
        return len(self.value)


@dataclass(frozen=True, eq=False)
class Sqid(Identifier):
    numbers: tuple[int, ...] = ()

    @property
    def number(self) -> int | None:
        """First encoded number."""
        return self.numbers[0] if self.numbers else None

    def decode(self) -> list[int]:
        return list(self.numbers)


@dataclass(frozen=True, eq=False)
class Hashid(Identifier):
    numbers: tuple[int, ...] = ()
    hex: str | None = None

    @property
    def number(self) -> int | None:
        """First encoded number."""
        return self.numbers[0] if self.numbers else None

    @property
    def is_hex_encoded(self) -> bool:
        return self.hex is not None

    def decode(self) -> list[int]:
        return list(self.numbers)
