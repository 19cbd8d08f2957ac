"""Per-type identifier algorithms."""

from idmint.algorithms.base import Algorithm, Encoded, now_ms
from idmint.algorithms.cuid2 import Cuid2Algorithm
from idmint.algorithms.hashid import HashidAlgorithm
from idmint.algorithms.ksuid import KsuidAlgorithm
from idmint.algorithms.nanoid import NanoIdAlgorithm
from idmint.algorithms.objectid import ObjectIdAlgorithm
from idmint.algorithms.pushid import PushIdAlgorithm
from idmint.algorithms.snowflake import SnowflakeAlgorithm
from idmint.algorithms.sqid import SqidAlgorithm
from idmint.algorithms.timeflake import TimeflakeAlgorithm
from idmint.algorithms.typeid import TypeIdAlgorithm
from idmint.algorithms.ulid import UlidAlgorithm
from idmint.algorithms.uuid import UuidAlgorithm
from idmint.algorithms.xid import XidAlgorithm

__all__ = [
    "Algorithm",
    "Cuid2Algorithm",
    "Encoded",
    "HashidAlgorithm",
    "KsuidAlgorithm",
    "NanoIdAlgorithm",
    "ObjectIdAlgorithm",
    "PushIdAlgorithm",
    "SnowflakeAlgorithm",
    "SqidAlgorithm",
    "TimeflakeAlgorithm",
    "TypeIdAlgorithm",
    "UlidAlgorithm",
    "UuidAlgorithm",
    "XidAlgorithm",
    "now_ms",
]
