"""Identifier generator registry."""

import hashlib
import json
import logging
from typing import Any

from idmint.config import MintConfig
from idmint.exceptions import UnknownGeneratorError
from idmint.generators import (
    Cuid2Generator,
    Generator,
    HashidGenerator,
    KsuidGenerator,
    NanoIdGenerator,
    ObjectIdGenerator,
    PushIdGenerator,
    SnowflakeGenerator,
    SqidGenerator,
    TimeflakeGenerator,
    TypeIdGenerator,
    UlidGenerator,
    UuidGenerator,
    XidGenerator,
)
from idmint.types import IdentifierType

logger = logging.getLogger(__name__)


class GeneratorRegistry:
    """Registry mapping identifier types to generators.

    Generators are cached per type and call-site overrides, so counters and
    monotonic state carry over between calls that ask for the same
    configuration.

    Example:
        >>> registry = GeneratorRegistry()
        >>> registry.get("ulid").generate()
        >>> registry.snowflake(node_id=7).generate()
    """

    BUILTIN_GENERATORS: dict[IdentifierType, type[Generator[Any]]] = {
        IdentifierType.UUID: UuidGenerator,
        IdentifierType.ULID: UlidGenerator,
        IdentifierType.SNOWFLAKE: SnowflakeGenerator,
        IdentifierType.NANOID: NanoIdGenerator,
        IdentifierType.SQID: SqidGenerator,
        IdentifierType.HASHID: HashidGenerator,
        IdentifierType.KSUID: KsuidGenerator,
        IdentifierType.CUID2: Cuid2Generator,
        IdentifierType.TYPEID: TypeIdGenerator,
        IdentifierType.XID: XidGenerator,
        IdentifierType.OBJECTID: ObjectIdGenerator,
        IdentifierType.PUSHID: PushIdGenerator,
        IdentifierType.TIMEFLAKE: TimeflakeGenerator,
    }

    def __init__(self, config: MintConfig | None = None) -> None:
        """Initialize registry.

        Args:
            config: Per-type defaults (environment-backed MintConfig if omitted)
        """
        self.config = config if config is not None else MintConfig()
        self.generators: dict[str, Generator[Any]] = {}

    @staticmethod
    def resolve(name: IdentifierType | str) -> IdentifierType:
        """Resolve a type name (case-insensitive) to an IdentifierType.

        Raises:
            UnknownGeneratorError: If the name is not a supported type
        """
        if isinstance(name, IdentifierType):
            return name
        try:
            return IdentifierType(name.lower())
        except ValueError:
            raise UnknownGeneratorError(name, [t.value for t in IdentifierType]) from None

    @classmethod
    def load(
        cls, name: IdentifierType | str, config: dict[str, Any] | None = None
    ) -> Generator[Any]:
        """Create an uncached generator by type name.

        Args:
            name: Identifier type ('uuid', 'ulid', ...)
            config: Generator keyword arguments

        Returns:
            Generator instance

        Raises:
            UnknownGeneratorError: If the type is not recognized
            ConfigurationError: If the configuration is invalid

        Example:
            >>> generator = GeneratorRegistry.load('nanoid', {'length': 10})
            >>> len(generator.generate().to_string())
            10
        """
        identifier_type = cls.resolve(name)
        generator_class = cls.BUILTIN_GENERATORS[identifier_type]
        return generator_class(**(config or {}))

    def get(self, name: IdentifierType | str, **overrides: Any) -> Generator[Any]:
        """Get the cached generator for a type, creating it on first use.

        Args:
            name: Identifier type
            **overrides: Keyword arguments that replace configured defaults

        Returns:
            Generator instance
        """
        key = self._cache_key(name, overrides)
        if key in self.generators:
            return self.generators[key]

        identifier_type = self.resolve(name)
        options = {**self.config.for_type(identifier_type), **overrides}
        logger.debug(f"Creating {identifier_type.value} generator with {options}")

        generator = self.load(identifier_type, options)
        self.generators[key] = generator
        return generator

    def register(self, name: str, generator: Generator[Any]) -> None:
        """Register a prebuilt generator under a type name.

        Args:
            name: Identifier type the generator serves
            generator: Generator instance
        """
        self.generators[self._cache_key(name, {})] = generator

    def clear(self) -> None:
        """Drop all cached generators."""
        self.generators.clear()

    def _cache_key(self, name: IdentifierType | str, overrides: dict[str, Any]) -> str:
        identifier_type = self.resolve(name)
        if not overrides:
            return identifier_type.value
        digest = hashlib.md5(
            json.dumps(overrides, sort_keys=True, default=str).encode("utf-8")
        ).hexdigest()
        return f"{identifier_type.value}_{digest}"

    def uuid(self, **overrides: Any) -> UuidGenerator:
        return self.get(IdentifierType.UUID, **overrides)  # type: ignore[return-value]

    def ulid(self, **overrides: Any) -> UlidGenerator:
        return self.get(IdentifierType.ULID, **overrides)  # type: ignore[return-value]

    def snowflake(self, **overrides: Any) -> SnowflakeGenerator:
        return self.get(IdentifierType.SNOWFLAKE, **overrides)  # type: ignore[return-value]

    def nanoid(self, **overrides: Any) -> NanoIdGenerator:
        return self.get(IdentifierType.NANOID, **overrides)  # type: ignore[return-value]

    def sqid(self, **overrides: Any) -> SqidGenerator:
        return self.get(IdentifierType.SQID, **overrides)  # type: ignore[return-value]

    def hashid(self, **overrides: Any) -> HashidGenerator:
        return self.get(IdentifierType.HASHID, **overrides)  # type: ignore[return-value]

    def ksuid(self, **overrides: Any) -> KsuidGenerator:
        return self.get(IdentifierType.KSUID, **overrides)  # type: ignore[return-value]

    def cuid2(self, **overrides: Any) -> Cuid2Generator:
        return self.get(IdentifierType.CUID2, **overrides)  # type: ignore[return-value]

    def typeid(self, **overrides: Any) -> TypeIdGenerator:
        return self.get(IdentifierType.TYPEID, **overrides)  # type: ignore[return-value]

    def xid(self) -> XidGenerator:
        return self.get(IdentifierType.XID)  # type: ignore[return-value]

    def objectid(self) -> ObjectIdGenerator:
        return self.get(IdentifierType.OBJECTID)  # type: ignore[return-value]

    def pushid(self) -> PushIdGenerator:
        return self.get(IdentifierType.PUSHID)  # type: ignore[return-value]

    def timeflake(self) -> TimeflakeGenerator:
        return self.get(IdentifierType.TIMEFLAKE)  # type: ignore[return-value]
