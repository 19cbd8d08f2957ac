"""Sqid identifier algorithm built on the Sqids engine."""

from collections.abc import Iterable, Sequence

from idmint.algorithms.base import Algorithm, Clock, Encoded, now_ms
from idmint.engines.sqids import DEFAULT_ALPHABET, DEFAULT_BLOCKLIST, Sqids
from idmint.exceptions import GeneratorError, InvalidSqidFormatError


class SqidAlgorithm(Algorithm):
    """Sqid generation.

    generate() encodes ``timestamp_ms * 1000 + counter % 1000`` so ids from
    one instance are unique up to 1000 per millisecond.
    """

    name = "sqid"

    def __init__(
        self,
        alphabet: str = DEFAULT_ALPHABET,
        min_length: int = 0,
        blocklist: Iterable[str] | None = None,
        clock: Clock = now_ms,
    ):
        self.sqids = Sqids(
            alphabet,
            min_length,
            DEFAULT_BLOCKLIST if blocklist is None else blocklist,
        )
        self.clock = clock
        self._counter = 0

    def generate(self) -> Encoded:
        number = self.clock() * 1000 + self._counter % 1000
        self._counter += 1
        return self.encode([number])

    def encode(self, numbers: Sequence[int]) -> Encoded:
        """Encode numbers into a Sqid."""
        value = self.sqids.encode(numbers)
        return Encoded(value=value, bytes=value.encode("ascii"))

    def decode(self, value: str) -> list[int]:
        """Decode a Sqid into numbers ([] if it is not decodable)."""
        return self.sqids.decode(value)

    def parse(self, value: str) -> Encoded:
        if not self.is_valid(value):
            raise InvalidSqidFormatError(value)

        return Encoded(value=value, bytes=value.encode("ascii"))

    def is_valid(self, value: str) -> bool:
        """Valid when the value decodes and re-encodes to itself."""
        if value == "":
            return False

        numbers = self.sqids.decode(value)
        if not numbers:
            return False

        try:
            return self.sqids.encode(numbers) == value
        except GeneratorError:
            return False
