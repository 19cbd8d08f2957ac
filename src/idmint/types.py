"""Identifier type and UUID version enums."""

from enum import Enum, IntEnum


class IdentifierType(str, Enum):
    """Supported identifier types, valued by their canonical name."""

    UUID = "uuid"
    ULID = "ulid"
    SNOWFLAKE = "snowflake"
    NANOID = "nanoid"
    SQID = "sqid"
    HASHID = "hashid"
    KSUID = "ksuid"
    CUID2 = "cuid2"
    TYPEID = "typeid"
    XID = "xid"
    OBJECTID = "objectid"
    PUSHID = "pushid"
    TIMEFLAKE = "timeflake"

    @property
    def is_sortable(self) -> bool:
        """Whether values of this type sort chronologically as strings."""
        return self in _SORTABLE_TYPES

    @property
    def length(self) -> int | None:
        """Canonical string length, or None when it varies."""
        return _LENGTHS[self]

    @property
    def bit_size(self) -> int:
        """Bits of information in a value (0 when it varies)."""
        return _BIT_SIZES[self]


_SORTABLE_TYPES = frozenset(
    {
        IdentifierType.ULID,
        IdentifierType.SNOWFLAKE,
        IdentifierType.KSUID,
        IdentifierType.TYPEID,
        IdentifierType.XID,
        IdentifierType.OBJECTID,
        IdentifierType.PUSHID,
        IdentifierType.TIMEFLAKE,
    }
)

_LENGTHS: dict[IdentifierType, int | None] = {
    IdentifierType.UUID: 36,  # 8-4-4-4-12 hyphenated hex
    IdentifierType.ULID: 26,
    IdentifierType.SNOWFLAKE: None,  # decimal int64
    IdentifierType.NANOID: 21,  # default size
    IdentifierType.SQID: None,
    IdentifierType.HASHID: None,
    IdentifierType.KSUID: 27,
    IdentifierType.CUID2: 24,  # default length
    IdentifierType.TYPEID: None,  # prefix + 26-char suffix
    IdentifierType.XID: 20,
    IdentifierType.OBJECTID: 24,
    IdentifierType.PUSHID: 20,
    IdentifierType.TIMEFLAKE: 26,
}

_BIT_SIZES: dict[IdentifierType, int] = {
    IdentifierType.UUID: 128,
    IdentifierType.ULID: 128,
    IdentifierType.SNOWFLAKE: 64,
    IdentifierType.NANOID: 126,  # 21 symbols x 6 bits
    IdentifierType.SQID: 0,
    IdentifierType.HASHID: 0,
    IdentifierType.KSUID: 160,
    IdentifierType.CUID2: 0,
    IdentifierType.TYPEID: 128,  # prefix not counted
    IdentifierType.XID: 96,
    IdentifierType.OBJECTID: 96,
    IdentifierType.PUSHID: 120,
    IdentifierType.TIMEFLAKE: 128,
}


class UuidVersion(IntEnum):
    """UUID versions that can be generated."""

    V1 = 1
    V3 = 3
    V4 = 4
    V5 = 5
    V6 = 6
    V7 = 7
    V8 = 8

    @property
    def is_sortable(self) -> bool:
        """Whether the version embeds a leading timestamp."""
        return self in (UuidVersion.V1, UuidVersion.V6, UuidVersion.V7)

    @property
    def description(self) -> str:
        """Human-readable description."""
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    UuidVersion.V1: "Time-based with MAC address",
    UuidVersion.V3: "Name-based using MD5 hash",
    UuidVersion.V4: "Random",
    UuidVersion.V5: "Name-based using SHA-1 hash",
    UuidVersion.V6: "Reordered time-based for database optimization",
    UuidVersion.V7: "Unix Epoch time-based (recommended)",
    UuidVersion.V8: "Custom implementation",
}
