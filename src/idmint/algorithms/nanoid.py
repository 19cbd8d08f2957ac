"""NanoID algorithm.

Random ids over an arbitrary alphabet. Random bytes are masked to the next
power of two above the alphabet size and out-of-range values are discarded,
so every symbol is equally likely.
"""

import math
import os

from idmint.algorithms.base import Algorithm, Encoded
from idmint.exceptions import (
    AlphabetContainsDuplicatesError,
    AlphabetTooShortError,
    ConfigurationError,
    InvalidLengthError,
    InvalidNanoIdFormatError,
)

DEFAULT_ALPHABET = "_-0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
DEFAULT_LENGTH = 21
MAX_ALPHABET_LENGTH = 256


class NanoIdAlgorithm(Algorithm):
    """NanoID generation."""

    name = "nanoid"

    def __init__(self, length: int = DEFAULT_LENGTH, alphabet: str = DEFAULT_ALPHABET):
        """Initialize generator.

        Args:
            length: Number of symbols per id
            alphabet: 1-256 unique characters

        Raises:
            InvalidLengthError: If length is not positive
            AlphabetTooShortError: If the alphabet is empty
            AlphabetContainsDuplicatesError: If a character repeats
            ConfigurationError: If the alphabet has more than 256 characters
        """
        if length < 1:
            raise InvalidLengthError(length, 1)
        if not alphabet:
            raise AlphabetTooShortError(1)
        if len(set(alphabet)) != len(alphabet):
            raise AlphabetContainsDuplicatesError()
        if len(alphabet) > MAX_ALPHABET_LENGTH:
            raise ConfigurationError(
                f"Alphabet must contain at most {MAX_ALPHABET_LENGTH} characters, "
                f"got: {len(alphabet)}"
            )

        self.length = length
        self.alphabet = alphabet
        self._alphabet_set = frozenset(alphabet)
        self._mask = (1 << (len(alphabet) - 1).bit_length()) - 1
        self._step = max(1, math.ceil(1.6 * self._mask * length / len(alphabet)))

    def generate(self) -> Encoded:
        size = len(self.alphabet)
        chars: list[str] = []
        while len(chars) < self.length:
            for byte in os.urandom(self._step):
                index = byte & self._mask
                if index >= size:
                    continue
                chars.append(self.alphabet[index])
                if len(chars) == self.length:
                    break

        value = "".join(chars)
        return Encoded(value=value, bytes=value.encode("utf-8"))

    def parse(self, value: str) -> Encoded:
        if not self.is_valid(value):
            raise InvalidNanoIdFormatError(value)

        return Encoded(value=value, bytes=value.encode("utf-8"))

    def is_valid(self, value: str) -> bool:
        """Non-empty and drawn entirely from the alphabet (any length)."""
        return bool(value) and all(char in self._alphabet_set for char in value)
