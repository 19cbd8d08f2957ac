"""Base algorithm interface and models."""

import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

Clock = Callable[[], int]


def now_ms() -> int:
    """Current Unix time in milliseconds."""
    return time.time_ns() // 1_000_000


@dataclass(frozen=True)
class Encoded:
    """Encoded identifier: canonical string form and the bytes it encodes."""

    value: str
    bytes: bytes


class Algorithm(ABC):
    """Base class for identifier algorithms."""

    name: str = ""

    @abstractmethod
    def generate(self) -> Encoded:
        """Generate a new identifier.

        Returns:
            Encoded identifier
        """
        pass

    @abstractmethod
    def parse(self, value: str) -> Encoded:
        """Parse an identifier string.

        Args:
            value: Identifier string to parse

        Returns:
            Encoded identifier in canonical form

        Raises:
            InvalidIdentifierError: If the value is not in this format
        """
        pass

    @abstractmethod
    def is_valid(self, value: str) -> bool:
        """Validate identifier format.

        Args:
            value: Identifier string to validate

        Returns:
            True if valid format
        """
        pass
