"""Identifier generators.

A generator pairs an algorithm with its value object: it generates and
parses strings through the algorithm and wraps the result.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from typing import Generic, TypeVar

from idmint.algorithms import (
    Algorithm,
    Cuid2Algorithm,
    Encoded,
    HashidAlgorithm,
    KsuidAlgorithm,
    NanoIdAlgorithm,
    ObjectIdAlgorithm,
    PushIdAlgorithm,
    SnowflakeAlgorithm,
    SqidAlgorithm,
    TimeflakeAlgorithm,
    TypeIdAlgorithm,
    UlidAlgorithm,
    UuidAlgorithm,
    XidAlgorithm,
    now_ms,
)
from idmint.algorithms import cuid2 as cuid2_algorithm
from idmint.algorithms import ksuid as ksuid_algorithm
from idmint.algorithms import nanoid as nanoid_algorithm
from idmint.algorithms import snowflake as snowflake_algorithm
from idmint.algorithms import typeid as typeid_algorithm
from idmint.algorithms import uuid as uuid_algorithm
from idmint.algorithms.base import Clock
from idmint.engines.hashids import DEFAULT_ALPHABET as HASHID_ALPHABET
from idmint.engines.sqids import DEFAULT_ALPHABET as SQID_ALPHABET
from idmint.identifiers import (
    Cuid2,
    Hashid,
    Identifier,
    Ksuid,
    NanoId,
    ObjectId,
    PushId,
    Snowflake,
    Sqid,
    Timeflake,
    TypeId,
    Ulid,
    Uuid,
    Xid,
)
from idmint.types import UuidVersion

T = TypeVar("T", bound=Identifier)


class Generator(ABC, Generic[T]):
    """Base class for identifier generators."""

    algorithm: Algorithm

    @property
    def name(self) -> str:
        """Canonical lowercase type name."""
        return self.algorithm.name

    def generate(self) -> T:
        """Generate a new identifier."""
        return self._wrap(self.algorithm.generate())

    def parse(self, value: str) -> T:
        """Parse an identifier string.

        Raises:
            InvalidIdentifierError: If the value is not in this format
        """
        return self._wrap(self.algorithm.parse(value))

    def is_valid(self, value: str) -> bool:
        """Check the format without raising."""
        return self.algorithm.is_valid(value)

    def generate_batch(self, count: int) -> list[T]:
        """Generate several identifiers in order."""
        return [self.generate() for _ in range(count)]

    @abstractmethod
    def _wrap(self, encoded: Encoded) -> T:
        pass


class UuidGenerator(Generator[Uuid]):
    """UUID generator (v7 by default)."""

    NAMESPACE_DNS = uuid_algorithm.NAMESPACE_DNS
    NAMESPACE_URL = uuid_algorithm.NAMESPACE_URL
    NAMESPACE_OID = uuid_algorithm.NAMESPACE_OID
    NAMESPACE_X500 = uuid_algorithm.NAMESPACE_X500

    def __init__(
        self,
        version: UuidVersion | int = UuidVersion.V7,
        namespace: str | None = None,
        name: str | None = None,
        clock: Clock = now_ms,
    ):
        self.algorithm: UuidAlgorithm = UuidAlgorithm(version, namespace, name, clock)

    @property
    def version(self) -> UuidVersion:
        return self.algorithm.version

    def generate(self) -> Uuid:
        encoded = self.algorithm.generate()
        return Uuid(encoded.value, encoded.bytes, self.algorithm.version)

    def nil(self) -> Uuid:
        """The nil UUID (all zero bits)."""
        return Uuid(uuid_algorithm.NIL, bytes(16), UuidVersion.V4)

    def max(self) -> Uuid:
        """The max UUID (all one bits)."""
        return Uuid(uuid_algorithm.MAX, b"\xff" * 16, UuidVersion.V4)

    def _wrap(self, encoded: Encoded) -> Uuid:
        return Uuid(encoded.value, encoded.bytes, UuidAlgorithm.detect_version(encoded.value))


class UlidGenerator(Generator[Ulid]):
    """ULID generator (monotonic by default)."""

    def __init__(self, monotonic: bool = True, clock: Clock = now_ms):
        self.algorithm: UlidAlgorithm = UlidAlgorithm(monotonic, clock)

    @property
    def monotonic(self) -> bool:
        return self.algorithm.monotonic

    def from_timestamp(self, timestamp: int) -> Ulid:
        """ULID for a Unix millisecond timestamp."""
        return self._wrap(self.algorithm.from_timestamp(timestamp))

    def _wrap(self, encoded: Encoded) -> Ulid:
        return Ulid(encoded.value, encoded.bytes)


class SnowflakeGenerator(Generator[Snowflake]):
    """Snowflake generator for one node.

    Raises:
        InvalidNodeIdError: If node_id is outside 0-1023
    """

    def __init__(
        self,
        node_id: int = 0,
        epoch: int = snowflake_algorithm.DEFAULT_EPOCH,
        clock: Clock = now_ms,
    ):
        self.algorithm: SnowflakeAlgorithm = SnowflakeAlgorithm(node_id, epoch, clock)

    @property
    def node_id(self) -> int:
        return self.algorithm.node_id

    @property
    def epoch(self) -> int:
        return self.algorithm.epoch

    def _wrap(self, encoded: Encoded) -> Snowflake:
        return Snowflake(encoded.value, encoded.bytes, self.algorithm.epoch)


class KsuidGenerator(Generator[Ksuid]):
    """KSUID generator."""

    def __init__(self, epoch: int = ksuid_algorithm.EPOCH, clock: Clock = now_ms):
        self.algorithm: KsuidAlgorithm = KsuidAlgorithm(epoch, clock)

    def from_timestamp(self, timestamp: int) -> Ksuid:
        """KSUID for a Unix timestamp in seconds."""
        return self._wrap(self.algorithm.from_timestamp(timestamp))

    def min(self) -> Ksuid:
        return self._wrap(self.algorithm.min())

    def max(self) -> Ksuid:
        return self._wrap(self.algorithm.max())

    def _wrap(self, encoded: Encoded) -> Ksuid:
        return Ksuid(encoded.value, encoded.bytes, self.algorithm.epoch)


class TypeIdGenerator(Generator[TypeId]):
    """TypeID generator for a fixed prefix.

    Raises:
        InvalidPrefixError: If the prefix is not a valid TypeID prefix
    """

    def __init__(self, prefix: str = "", clock: Clock = now_ms):
        self.algorithm: TypeIdAlgorithm = TypeIdAlgorithm(prefix, clock)

    @property
    def prefix(self) -> str:
        return self.algorithm.prefix

    def with_prefix(self, prefix: str) -> TypeId:
        """Generate one TypeID with another prefix."""
        return TypeIdGenerator(prefix, self.algorithm.clock).generate()

    def _wrap(self, encoded: Encoded) -> TypeId:
        prefix, suffix = typeid_algorithm.split(encoded.value)
        return TypeId(encoded.value, encoded.bytes, prefix, suffix)


class XidGenerator(Generator[Xid]):
    """XID generator."""

    def __init__(self, clock: Clock = now_ms):
        self.algorithm: XidAlgorithm = XidAlgorithm(clock)

    def generate_from_timestamp(self, timestamp: int) -> Xid:
        """XID for a Unix timestamp in seconds."""
        return self._wrap(self.algorithm.generate_from_timestamp(timestamp))

    def _wrap(self, encoded: Encoded) -> Xid:
        return Xid(encoded.value, encoded.bytes)


class ObjectIdGenerator(Generator[ObjectId]):
    """MongoDB ObjectID generator."""

    def __init__(self, clock: Clock = now_ms):
        self.algorithm: ObjectIdAlgorithm = ObjectIdAlgorithm(clock)

    def from_timestamp(self, timestamp: int) -> ObjectId:
        """ObjectID for a Unix timestamp in seconds."""
        return self._wrap(self.algorithm.from_timestamp(timestamp))

    def _wrap(self, encoded: Encoded) -> ObjectId:
        return ObjectId(encoded.value, encoded.bytes)


class PushIdGenerator(Generator[PushId]):
    """Firebase PushID generator."""

    def __init__(self, clock: Clock = now_ms):
        self.algorithm: PushIdAlgorithm = PushIdAlgorithm(clock)

    def generate_from_timestamp(self, timestamp: int) -> PushId:
        """PushID for a Unix millisecond timestamp."""
        return self._wrap(self.algorithm.generate_from_timestamp(timestamp))

    def _wrap(self, encoded: Encoded) -> PushId:
        return PushId(encoded.value, encoded.bytes)


class TimeflakeGenerator(Generator[Timeflake]):
    """Timeflake generator."""

    def __init__(self, clock: Clock = now_ms):
        self.algorithm: TimeflakeAlgorithm = TimeflakeAlgorithm(clock)

    def generate_from_timestamp(self, timestamp: int) -> Timeflake:
        """Timeflake for a Unix millisecond timestamp."""
        return self._wrap(self.algorithm.generate_from_timestamp(timestamp))

    def generate_hex(self) -> Timeflake:
        """Timeflake in its 32-character hex form."""
        return self._wrap(self.algorithm.generate_hex())

    def _wrap(self, encoded: Encoded) -> Timeflake:
        return Timeflake(encoded.value, encoded.bytes)


class Cuid2Generator(Generator[Cuid2]):
    """CUID2 generator.

    Raises:
        InvalidLengthError: If length is outside 2-32
    """

    def __init__(self, length: int = cuid2_algorithm.DEFAULT_LENGTH, clock: Clock = now_ms):
        self.algorithm: Cuid2Algorithm = Cuid2Algorithm(length, clock)

    @property
    def length(self) -> int:
        return self.algorithm.length

    def _wrap(self, encoded: Encoded) -> Cuid2:
        return Cuid2(encoded.value, encoded.bytes)


class NanoIdGenerator(Generator[NanoId]):
    """NanoID generator."""

    def __init__(
        self,
        length: int = nanoid_algorithm.DEFAULT_LENGTH,
        alphabet: str = nanoid_algorithm.DEFAULT_ALPHABET,
    ):
        self.algorithm: NanoIdAlgorithm = NanoIdAlgorithm(length, alphabet)

    @property
    def length(self) -> int:
        return self.algorithm.length

    @property
    def alphabet(self) -> str:
        return self.algorithm.alphabet

    @classmethod
    def alphanumeric(cls, length: int = nanoid_algorithm.DEFAULT_LENGTH) -> "NanoIdGenerator":
        """Digits and lowercase letters."""
        return cls(length, "0123456789abcdefghijklmnopqrstuvwxyz")

    @classmethod
    def numeric(cls, length: int = nanoid_algorithm.DEFAULT_LENGTH) -> "NanoIdGenerator":
        return cls(length, "0123456789")

    @classmethod
    def hex(cls, length: int = nanoid_algorithm.DEFAULT_LENGTH) -> "NanoIdGenerator":
        """Lowercase hexadecimal digits."""
        return cls(length, "0123456789abcdef")

    @classmethod
    def with_alphabet(
        cls, alphabet: str, length: int = nanoid_algorithm.DEFAULT_LENGTH
    ) -> "NanoIdGenerator":
        return cls(length, alphabet)

    def _wrap(self, encoded: Encoded) -> NanoId:
        return NanoId(encoded.value, encoded.bytes)


class SqidGenerator(Generator[Sqid]):
    """Sqid generator.

    Raises:
        AlphabetError: If the alphabet is invalid
        MinLengthOutOfRangeError: If min_length is outside 0-255
    """

    def __init__(
        self,
        alphabet: str = SQID_ALPHABET,
        min_length: int = 0,
        blocklist: Iterable[str] | None = None,
        clock: Clock = now_ms,
    ):
        self.algorithm: SqidAlgorithm = SqidAlgorithm(alphabet, min_length, blocklist, clock)

    def encode(self, numbers: Sequence[int]) -> Sqid:
        """Encode numbers into a Sqid."""
        encoded = self.algorithm.encode(numbers)
        return Sqid(encoded.value, encoded.bytes, tuple(numbers))

    def encode_number(self, number: int) -> Sqid:
        return self.encode([number])

    def decode(self, value: str) -> list[int]:
        """Decode a Sqid into numbers ([] if it is not decodable)."""
        return self.algorithm.decode(value)

    def _wrap(self, encoded: Encoded) -> Sqid:
        return Sqid(encoded.value, encoded.bytes, tuple(self.algorithm.decode(encoded.value)))


class HashidGenerator(Generator[Hashid]):
    """Hashid generator.

    Raises:
        AlphabetError: If the alphabet is invalid
    """

    def __init__(
        self,
        salt: str = "",
        min_length: int = 0,
        alphabet: str = HASHID_ALPHABET,
        clock: Clock = now_ms,
    ):
        self.algorithm: HashidAlgorithm = HashidAlgorithm(salt, min_length, alphabet, clock)

    def encode(self, numbers: Sequence[int]) -> Hashid:
        """Encode numbers into a Hashid."""
        encoded = self.algorithm.encode(numbers)
        return Hashid(encoded.value, encoded.bytes, tuple(numbers))

    def encode_number(self, number: int) -> Hashid:
        return self.encode([number])

    def encode_hex(self, hex: str) -> Hashid:
        """Encode a hex string; the value's numbers are empty and `hex` is set."""
        encoded = self.algorithm.encode_hex(hex)
        return Hashid(encoded.value, encoded.bytes, (), hex)

    def decode(self, value: str) -> list[int]:
        return self.algorithm.decode(value)

    def decode_hex(self, value: str) -> str:
        return self.algorithm.decode_hex(value)

    def _wrap(self, encoded: Encoded) -> Hashid:
        return Hashid(encoded.value, encoded.bytes, tuple(self.algorithm.decode(encoded.value)))


__all__ = [
    "Cuid2Generator",
    "Generator",
    "HashidGenerator",
    "KsuidGenerator",
    "NanoIdGenerator",
    "ObjectIdGenerator",
    "PushIdGenerator",
    "SnowflakeGenerator",
    "SqidGenerator",
    "TimeflakeGenerator",
    "TypeIdGenerator",
    "UlidGenerator",
    "UuidGenerator",
    "XidGenerator",
]
