"""Sqids engine.

Encodes lists of non-negative integers into short, URL-safe strings and
decodes them back. Output is compatible with the other Sqids
implementations for the same alphabet, minimum length and blocklist.
"""

import logging
import sys
from collections.abc import Iterable, Sequence

from idmint.arithmetic import MathBackend, Number, get_math
from idmint.engines.blocklist import DEFAULT_BLOCKLIST, compile_blocklist
from idmint.exceptions import (
    AlphabetContainsDuplicatesError,
    AlphabetContainsMultibyteError,
    AlphabetTooShortError,
    MaxRegenerationAttemptsError,
    MinLengthOutOfRangeError,
    NumberOutOfRangeError,
)

logger = logging.getLogger(__name__)

DEFAULT_ALPHABET = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
DEFAULT_MIN_LENGTH = 0
MIN_LENGTH_LIMIT = 255
MIN_ALPHABET_LENGTH = 3

__all__ = [
    "DEFAULT_ALPHABET",
    "DEFAULT_BLOCKLIST",
    "DEFAULT_MIN_LENGTH",
    "MIN_LENGTH_LIMIT",
    "Sqids",
]


def shuffle(alphabet: str) -> str:
    """Deterministically permute an alphabet (consistent shuffle)."""
    chars = list(alphabet)
    size = len(chars)
    i, j = 0, size - 1
    while j > 0:
        r = (i * j + ord(chars[i]) + ord(chars[j])) % size
        chars[i], chars[r] = chars[r], chars[i]
        i += 1
        j -= 1
    return "".join(chars)


class Sqids:
    """Sqids encoder/decoder.

    Example:
        >>> sqids = Sqids()
        >>> sqids.encode([1, 2, 3])
        '86Rf07'
        >>> sqids.decode('86Rf07')
        [1, 2, 3]
    """

    def __init__(
        self,
        alphabet: str = DEFAULT_ALPHABET,
        min_length: int = DEFAULT_MIN_LENGTH,
        blocklist: Iterable[str] = DEFAULT_BLOCKLIST,
        math: MathBackend | None = None,
    ):
        """Initialize and validate the engine.

        Args:
            alphabet: Characters to encode with (empty string selects the default)
            min_length: Minimum length of encoded ids (0-255)
            blocklist: Words that must not appear in encoded ids
            math: Arithmetic backend for base conversion

        Raises:
            AlphabetContainsMultibyteError: If the alphabet is not single-byte
            AlphabetTooShortError: If the alphabet has fewer than 3 characters
            AlphabetContainsDuplicatesError: If a character repeats
            MinLengthOutOfRangeError: If min_length is outside 0-255
        """
        self.math = math or get_math()

        if alphabet == "":
            alphabet = DEFAULT_ALPHABET

        if len(alphabet.encode("utf-8")) != len(alphabet):
            raise AlphabetContainsMultibyteError()

        if len(alphabet) < MIN_ALPHABET_LENGTH:
            raise AlphabetTooShortError(MIN_ALPHABET_LENGTH)

        if len(set(alphabet)) != len(alphabet):
            raise AlphabetContainsDuplicatesError()

        if min_length < 0 or min_length > MIN_LENGTH_LIMIT:
            raise MinLengthOutOfRangeError(0, MIN_LENGTH_LIMIT)

        self.min_length = min_length
        self.blocklist = tuple(str(word) for word in blocklist)
        self._blocklist_pattern = compile_blocklist(self.blocklist)
        self.alphabet = shuffle(alphabet)

    @property
    def max_value(self) -> int:
        """Largest number accepted by encode()."""
        return sys.maxsize

    def encode(self, numbers: Sequence[int]) -> str:
        """Encode numbers into an id.

        Args:
            numbers: Non-negative integers

        Returns:
            Encoded id ("" for an empty list)

        Raises:
            NumberOutOfRangeError: If a number is negative or above max_value
            MaxRegenerationAttemptsError: If every offset produced a blocked id
        """
        if not numbers:
            return ""

        for number in numbers:
            if number < 0 or number > self.max_value:
                raise NumberOutOfRangeError(self.max_value)

        numbers = list(numbers)
        increment = 0
        while True:
            if increment > len(self.alphabet):
                raise MaxRegenerationAttemptsError(increment)

            encoded = self._encode_numbers(numbers, increment)
            if not self._is_blocked(encoded):
                return encoded

            logger.debug(f"Sqid '{encoded}' matched the blocklist, regenerating (attempt {increment + 1})")
            increment += 1

    def decode(self, id: str) -> list[int]:
        """Decode an id back into numbers.

        Returns an empty list for an empty id or one containing characters
        outside the alphabet.
        """
        result: list[int] = []
        if id == "":
            return result

        if any(char not in self.alphabet for char in id):
            return result

        offset = self.alphabet.index(id[0])
        alphabet = (self.alphabet[offset:] + self.alphabet[:offset])[::-1]
        id = id[1:]

        while id:
            separator = alphabet[0]
            chunks = id.split(separator, 1)
            if chunks[0] == "":
                return result

            result.append(self._to_number(chunks[0], alphabet[1:]))

            if len(chunks) > 1:
                alphabet = shuffle(alphabet)
            id = chunks[1] if len(chunks) > 1 else ""

        return result

    def _encode_numbers(self, numbers: list[int], increment: int) -> str:
        size = len(self.alphabet)

        offset = len(numbers)
        for i, number in enumerate(numbers):
            offset += ord(self.alphabet[number % size]) + i
        offset %= size
        offset = (offset + increment) % size

        alphabet = self.alphabet[offset:] + self.alphabet[:offset]
        prefix = alphabet[0]
        alphabet = alphabet[::-1]
        encoded = prefix

        for i, number in enumerate(numbers):
            encoded += self._to_id(number, alphabet[1:])
            if i < len(numbers) - 1:
                encoded += alphabet[0]
                alphabet = shuffle(alphabet)

        if self.min_length > len(encoded):
            encoded += alphabet[0]
            while len(encoded) < self.min_length:
                alphabet = shuffle(alphabet)
                encoded += alphabet[: min(self.min_length - len(encoded), size)]

        return encoded

    def _to_id(self, number: Number, alphabet: str) -> str:
        chars = []
        size = len(alphabet)
        while True:
            chars.append(alphabet[self.math.to_int(self.math.mod(number, size))])
            number = self.math.divide(number, size)
            if not self.math.greater_than(number, 0):
                break
        return "".join(reversed(chars))

    def _to_number(self, id: str, alphabet: str) -> int:
        number: Number = 0
        size = len(alphabet)
        for char in id:
            position = alphabet.find(char)
            if position == -1:
                continue
            number = self.math.add(self.math.multiply(number, size), position)
        return self.math.to_int(number)

    def _is_blocked(self, id: str) -> bool:
        return self._blocklist_pattern is not None and self._blocklist_pattern.search(id) is not None
