"""
Configuration management for idmint.

Per-type generator defaults, loaded from idmint.toml files and IDMINT_*
environment variables using Pydantic.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from idmint.algorithms import cuid2, ksuid, nanoid, snowflake
from idmint.engines import hashids, sqids
from idmint.types import IdentifierType, UuidVersion

CONFIG_FILENAME = "idmint.toml"


class UuidConfig(BaseModel):
    """UUID generator configuration."""

    version: UuidVersion = Field(default=UuidVersion.V7, description="UUID version to generate")
    namespace: Optional[str] = Field(
        default=None, description="Namespace UUID for v3/v5 (defaults to DNS)"
    )
    name: Optional[str] = Field(default=None, description="Name hashed by v3/v5")


class UlidConfig(BaseModel):
    """ULID generator configuration."""

    monotonic: bool = Field(
        default=True, description="Increment randomness within the same millisecond"
    )


class SnowflakeConfig(BaseModel):
    """Snowflake generator configuration."""

    node_id: int = Field(
        default=0, ge=0, le=snowflake.MAX_NODE_ID, description="Node (worker) id"
    )
    epoch: int = Field(
        default=snowflake.DEFAULT_EPOCH, description="Custom epoch in Unix milliseconds"
    )


class NanoIdConfig(BaseModel):
    """NanoID generator configuration."""

    alphabet: str = Field(default=nanoid.DEFAULT_ALPHABET, description="Symbols to draw from")
    length: int = Field(default=nanoid.DEFAULT_LENGTH, ge=1, description="Symbols per id")


class SqidConfig(BaseModel):
    """Sqid generator configuration."""

    alphabet: str = Field(default=sqids.DEFAULT_ALPHABET, description="Encoding alphabet")
    min_length: int = Field(
        default=0, ge=0, le=sqids.MIN_LENGTH_LIMIT, description="Minimum id length"
    )
    blocklist: Optional[list[str]] = Field(
        default=None, description="Blocked words (defaults to the built-in list)"
    )


class HashidConfig(BaseModel):
    """Hashid generator configuration."""

    salt: str = Field(default="", description="Secret salt")
    min_length: int = Field(default=0, ge=0, description="Minimum hash length")
    alphabet: str = Field(default=hashids.DEFAULT_ALPHABET, description="Encoding alphabet")


class Cuid2Config(BaseModel):
    """CUID2 generator configuration."""

    length: int = Field(
        default=cuid2.DEFAULT_LENGTH,
        ge=cuid2.MIN_LENGTH,
        le=cuid2.MAX_LENGTH,
        description="Id length",
    )


class TypeIdConfig(BaseModel):
    """TypeID generator configuration."""

    prefix: str = Field(default="", description="Type prefix (empty for none)")


class KsuidConfig(BaseModel):
    """KSUID generator configuration."""

    epoch: int = Field(default=ksuid.EPOCH, description="Custom epoch in Unix seconds")


class MintConfig(BaseSettings):
    """Main configuration for idmint.

    Environment variables override defaults, e.g. ``IDMINT_HASHID__SALT``.
    """

    model_config = SettingsConfigDict(env_prefix="IDMINT_", env_nested_delimiter="__")

    uuid: UuidConfig = Field(default_factory=UuidConfig)
    ulid: UlidConfig = Field(default_factory=UlidConfig)
    snowflake: SnowflakeConfig = Field(default_factory=SnowflakeConfig)
    nanoid: NanoIdConfig = Field(default_factory=NanoIdConfig)
    sqid: SqidConfig = Field(default_factory=SqidConfig)
    hashid: HashidConfig = Field(default_factory=HashidConfig)
    cuid2: Cuid2Config = Field(default_factory=Cuid2Config)
    typeid: TypeIdConfig = Field(default_factory=TypeIdConfig)
    ksuid: KsuidConfig = Field(default_factory=KsuidConfig)

    @classmethod
    def from_toml(cls, path: Path | str) -> MintConfig:
        """
        Load configuration from TOML file.

        Args:
            path: Path to idmint.toml file

        Returns:
            MintConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file is invalid
        """
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        return cls(**data)

    @classmethod
    def find_and_load(cls, start_dir: Optional[Path] = None) -> MintConfig:
        """
        Find and load configuration from idmint.toml.

        Searches for idmint.toml starting from start_dir and walking up
        parent directories until found or reaching filesystem root.

        Args:
            start_dir: Directory to start search (defaults to current directory)

        Returns:
            MintConfig instance

        Raises:
            FileNotFoundError: If no config file found
        """
        if start_dir is None:
            start_dir = Path.cwd()

        current = Path(start_dir).resolve()

        while True:
            config_path = current / CONFIG_FILENAME
            if config_path.exists():
                return cls.from_toml(config_path)

            parent = current.parent
            if parent == current:
                break
            current = parent

        raise FileNotFoundError(
            f"No {CONFIG_FILENAME} found in {start_dir} or parent directories."
        )

    def for_type(self, identifier_type: IdentifierType | str) -> dict[str, Any]:
        """Generator keyword arguments configured for a type.

        Types without settings (xid, objectid, pushid, timeflake) return {}.
        """
        section = getattr(self, IdentifierType(identifier_type).value, None)
        if section is None:
            return {}
        return section.model_dump()
