"""
idmint - Unified unique identifier library

Generates, parses and validates UUID (v1/3/4/5/6/7/8), ULID, Snowflake,
NanoID, Sqids, Hashids, KSUID, CUID2, TypeID, XID, ObjectID, PushID and
Timeflake identifiers behind one generator interface.
"""

from idmint.config import MintConfig
from idmint.exceptions import (
    ConfigurationError,
    GeneratorError,
    InvalidIdentifierError,
    MintError,
)
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
from idmint.registry import GeneratorRegistry
from idmint.types import IdentifierType, UuidVersion
from idmint.validator import IdentifierValidator, ValidationResult

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "Cuid2",
    "Cuid2Generator",
    "Generator",
    "GeneratorError",
    "GeneratorRegistry",
    "Hashid",
    "HashidGenerator",
    "Identifier",
    "IdentifierType",
    "IdentifierValidator",
    "InvalidIdentifierError",
    "Ksuid",
    "KsuidGenerator",
    "MintConfig",
    "MintError",
    "NanoId",
    "NanoIdGenerator",
    "ObjectId",
    "ObjectIdGenerator",
    "PushId",
    "PushIdGenerator",
    "Snowflake",
    "SnowflakeGenerator",
    "Sqid",
    "SqidGenerator",
    "Timeflake",
    "TimeflakeGenerator",
    "TypeId",
    "TypeIdGenerator",
    "Ulid",
    "UlidGenerator",
    "Uuid",
    "UuidGenerator",
    "UuidVersion",
    "ValidationResult",
    "Xid",
    "XidGenerator",
    "__version__",
]
