"""Firebase PushID algorithm.

20 characters from a 64-symbol alphabet ordered by ASCII value: 8 characters
of millisecond timestamp followed by 12 random characters.
"""

import re
import secrets

from idmint.algorithms.base import Algorithm, Clock, Encoded, now_ms
from idmint.exceptions import InvalidPushIdFormatError

ALPHABET = "-0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ_abcdefghijklmnopqrstuvwxyz"
LENGTH = 20
TIMESTAMP_LENGTH = 8
RANDOM_LENGTH = 12
BYTE_LENGTH = 15  # 20 symbols x 6 bits

PATTERN = re.compile(f"^[{re.escape(ALPHABET)}]{{{LENGTH}}}$")

_LOOKUP = {char: index for index, char in enumerate(ALPHABET)}


def encode_timestamp(timestamp: int) -> str:
    """Encode a millisecond timestamp as 8 symbols, most significant first."""
    chars = []
    for _ in range(TIMESTAMP_LENGTH):
        chars.append(ALPHABET[timestamp % 64])
        timestamp //= 64
    return "".join(reversed(chars))


def to_bytes(value: str) -> bytes:
    """Pack the twenty 6-bit symbols into 15 bytes."""
    number = 0
    for char in value:
        number = (number << 6) | _LOOKUP[char]
    return number.to_bytes(BYTE_LENGTH, "big")


class PushIdAlgorithm(Algorithm):
    """PushID generation.

    Within one millisecond the random part is incremented as a base-64
    counter so ids from the same instance keep their creation order. If all
    twelve symbols are at their maximum the counter wraps to zero.
    """

    name = "pushid"

    def __init__(self, clock: Clock = now_ms):
        self.clock = clock
        self._last_timestamp = 0
        self._last_random: list[int] = []

    def generate(self) -> Encoded:
        timestamp = self.clock()

        if timestamp != self._last_timestamp or not self._last_random:
            self._last_random = [secrets.randbelow(64) for _ in range(RANDOM_LENGTH)]
            self._last_timestamp = timestamp
        else:
            self._increment_random()

        return self._build(timestamp, self._last_random)

    def generate_from_timestamp(self, timestamp: int) -> Encoded:
        """Generate a PushID for a given Unix millisecond timestamp.

        Fresh randomness is used and the monotonic state is left untouched.
        """
        return self._build(timestamp, [secrets.randbelow(64) for _ in range(RANDOM_LENGTH)])

    def parse(self, value: str) -> Encoded:
        if not self.is_valid(value):
            raise InvalidPushIdFormatError(value)

        return Encoded(value=value, bytes=to_bytes(value))

    def is_valid(self, value: str) -> bool:
        return bool(PATTERN.fullmatch(value))

    def _increment_random(self) -> None:
        for i in range(RANDOM_LENGTH - 1, -1, -1):
            if self._last_random[i] < 63:
                self._last_random[i] += 1
                return
            self._last_random[i] = 0

    def _build(self, timestamp: int, random: list[int]) -> Encoded:
        value = encode_timestamp(timestamp) + "".join(ALPHABET[symbol] for symbol in random)
        return Encoded(value=value, bytes=to_bytes(value))
