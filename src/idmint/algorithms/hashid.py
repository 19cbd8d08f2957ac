"""Hashid identifier algorithm built on the Hashids engine."""

from collections.abc import Sequence

from idmint.algorithms.base import Algorithm, Clock, Encoded, now_ms
from idmint.engines.hashids import DEFAULT_ALPHABET, Hashids
from idmint.exceptions import InvalidHashidFormatError


class HashidAlgorithm(Algorithm):
    """Hashid generation.

    generate() encodes ``timestamp_ms * 1000 + counter % 1000`` so ids from
    one instance are unique up to 1000 per millisecond.
    """

    name = "hashid"

    def __init__(
        self,
        salt: str = "",
        min_length: int = 0,
        alphabet: str = DEFAULT_ALPHABET,
        clock: Clock = now_ms,
    ):
        self.hashids = Hashids(salt, min_length, alphabet)
        self.clock = clock
        self._counter = 0

    def generate(self) -> Encoded:
        number = self.clock() * 1000 + self._counter % 1000
        self._counter += 1
        return self._encoded(self.hashids.encode(number))

    def encode(self, numbers: Sequence[int]) -> Encoded:
        """Encode numbers into a Hashid."""
        return self._encoded(self.hashids.encode(list(numbers)))

    def encode_hex(self, hex: str) -> Encoded:
        """Encode a hex string into a Hashid."""
        return self._encoded(self.hashids.encode_hex(hex))

    def decode(self, value: str) -> list[int]:
        return self.hashids.decode(value)

    def decode_hex(self, value: str) -> str:
        return self.hashids.decode_hex(value)

    def parse(self, value: str) -> Encoded:
        if not self.is_valid(value):
            raise InvalidHashidFormatError(value)

        return self._encoded(value)

    def is_valid(self, value: str) -> bool:
        """Valid when the value decodes and re-encodes to itself.

        Hex-encoded values decode to their prefixed chunk numbers, so they are
        covered by the same check.
        """
        if value == "":
            return False

        numbers = self.hashids.decode(value)
        return bool(numbers) and self.hashids.encode(numbers) == value

    @staticmethod
    def _encoded(value: str) -> Encoded:
        return Encoded(value=value, bytes=value.encode("utf-8"))
