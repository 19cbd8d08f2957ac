"""Hashids engine.

Generates short, unique, non-sequential ids from numbers, salted so that
different salts produce unrelated ids. Output matches hashids.js and the
other Hashids ports for the same salt, alphabet and minimum length.
"""

import math as _math
import string
from typing import Any

from idmint.arithmetic import MathBackend, Number, get_math
from idmint.exceptions import (
    AlphabetContainsSpacesError,
    AlphabetTooShortError,
    MinLengthOutOfRangeError,
)

DEFAULT_ALPHABET = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ1234567890"
DEFAULT_SEPS = "cfhistuCFHISTU"
MIN_ALPHABET_LENGTH = 16
SEP_DIV = 3.5
GUARD_DIV = 12
HEX_CHUNK_SIZE = 12


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value >= 0
    return isinstance(value, str) and value.isascii() and value.isdigit()


class Hashids:
    """Hashids encoder/decoder.

    Example:
        >>> hashids = Hashids()
        >>> hashids.encode(1, 2, 3)
        'o2fXhV'
        >>> hashids.decode('o2fXhV')
        [1, 2, 3]
    """

    def __init__(
        self,
        salt: str = "",
        min_length: int = 0,
        alphabet: str = DEFAULT_ALPHABET,
        math: MathBackend | None = None,
    ):
        """Initialize the engine and partition the alphabet.

        Args:
            salt: Secret salt; ids produced with different salts are unrelated
            min_length: Minimum length of encoded ids
            alphabet: Characters to encode with (duplicates are dropped)
            math: Arithmetic backend for base conversion

        Raises:
            AlphabetTooShortError: If fewer than 16 unique characters remain
            AlphabetContainsSpacesError: If the alphabet contains a space
            MinLengthOutOfRangeError: If min_length is negative
        """
        if min_length < 0:
            raise MinLengthOutOfRangeError(0)

        self.math = math or get_math()
        self.salt = salt
        self.min_length = min_length
        self._shuffled: dict[tuple[str, str], str] = {}

        alphabet = "".join(dict.fromkeys(alphabet))
        if len(alphabet) < MIN_ALPHABET_LENGTH:
            raise AlphabetTooShortError(MIN_ALPHABET_LENGTH)
        if " " in alphabet:
            raise AlphabetContainsSpacesError()

        seps = "".join(char for char in DEFAULT_SEPS if char in alphabet)
        alphabet = "".join(char for char in alphabet if char not in DEFAULT_SEPS)
        seps = self._shuffle(seps, salt)

        if not seps or len(alphabet) / len(seps) > SEP_DIV:
            seps_length = _math.ceil(len(alphabet) / SEP_DIV)
            if seps_length > len(seps):
                diff = seps_length - len(seps)
                seps += alphabet[:diff]
                alphabet = alphabet[diff:]

        alphabet = self._shuffle(alphabet, salt)
        guard_count = _math.ceil(len(alphabet) / GUARD_DIV)

        if len(alphabet) < 3:
            self.guards = seps[:guard_count]
            seps = seps[guard_count:]
        else:
            self.guards = alphabet[:guard_count]
            alphabet = alphabet[guard_count:]

        self.alphabet = alphabet
        self.seps = seps

    def encode(self, *numbers: Any) -> str:
        """Encode one or more non-negative integers.

        Accepts ints or digit strings, either as separate arguments or as a
        single list. Returns "" for empty or non-numeric input.
        """
        if len(numbers) == 1 and isinstance(numbers[0], (list, tuple)):
            numbers = tuple(numbers[0])

        if not numbers or not all(_is_number(number) for number in numbers):
            return ""

        values = [int(number) for number in numbers]
        alphabet = self.alphabet
        hash_int = 0
        for i, number in enumerate(values):
            hash_int += self.math.to_int(self.math.mod(number, i + 100))

        lottery = alphabet[hash_int % len(alphabet)]
        encoded = lottery

        for i, number in enumerate(values):
            alphabet = self._shuffle(alphabet, (lottery + self.salt + alphabet)[: len(alphabet)])
            last = self._hash(number, alphabet)
            encoded += last

            if i + 1 < len(values):
                number = self.math.mod(number, ord(last[0]) + i)
                encoded += self.seps[self.math.to_int(self.math.mod(number, len(self.seps)))]

        if len(encoded) < self.min_length:
            guard_index = (hash_int + ord(encoded[0])) % len(self.guards)
            encoded = self.guards[guard_index] + encoded

            if len(encoded) < self.min_length:
                guard_index = (hash_int + ord(encoded[2])) % len(self.guards)
                encoded += self.guards[guard_index]

        half_length = len(alphabet) // 2
        while len(encoded) < self.min_length:
            alphabet = self._shuffle(alphabet, alphabet)
            encoded = alphabet[half_length:] + encoded + alphabet[:half_length]

            excess = len(encoded) - self.min_length
            if excess > 0:
                start = excess // 2
                encoded = encoded[start : start + self.min_length]

        return encoded

    def decode(self, hash: str) -> list[int]:
        """Decode a hash back into numbers.

        Returns an empty list when the hash was not produced by this
        configuration (the decoded numbers must re-encode to the same hash).
        """
        hash = hash.strip()
        if hash in ("", "0"):
            return []

        breakdown = hash
        for guard in self.guards:
            breakdown = breakdown.replace(guard, " ")
        parts = breakdown.split(" ")
        breakdown = parts[1] if len(parts) in (2, 3) else parts[0]

        if breakdown == "":
            return []

        lottery = breakdown[0]
        breakdown = breakdown[1:]
        for sep in self.seps:
            breakdown = breakdown.replace(sep, " ")

        result = []
        alphabet = self.alphabet
        for sub_hash in breakdown.split(" "):
            alphabet = self._shuffle(alphabet, (lottery + self.salt + alphabet)[: len(alphabet)])
            result.append(self._unhash(sub_hash, alphabet))

        if self.encode(result) != hash:
            return []
        return result

    def encode_hex(self, value: str) -> str:
        """Encode a hexadecimal string; returns "" for non-hex input."""
        if not value or any(char not in string.hexdigits for char in value):
            return ""

        numbers = [
            int("1" + value[i : i + HEX_CHUNK_SIZE], 16)
            for i in range(0, len(value), HEX_CHUNK_SIZE)
        ]
        return self.encode(numbers)

    def decode_hex(self, hash: str) -> str:
        """Decode a hash produced by encode_hex() into lowercase hex."""
        return "".join(format(number, "x")[1:] for number in self.decode(hash))

    def _shuffle(self, alphabet: str, salt: str) -> str:
        if not salt:
            return alphabet

        key = (alphabet, salt)
        cached = self._shuffled.get(key)
        if cached is not None:
            return cached

        chars = list(alphabet)
        v = p = 0
        for i in range(len(chars) - 1, 0, -1):
            v %= len(salt)
            code = ord(salt[v])
            p += code
            j = (code + v + p) % i
            chars[i], chars[j] = chars[j], chars[i]
            v += 1

        shuffled = "".join(chars)
        self._shuffled[key] = shuffled
        return shuffled

    def _hash(self, number: Number, alphabet: str) -> str:
        chars = []
        size = len(alphabet)
        while True:
            chars.append(alphabet[self.math.to_int(self.math.mod(number, size))])
            number = self.math.divide(number, size)
            if not self.math.greater_than(number, 0):
                break
        return "".join(reversed(chars))

    def _unhash(self, value: str, alphabet: str) -> int:
        number: Number = 0
        size = len(alphabet)
        for char in value:
            position = alphabet.find(char)
            if position == -1:
                continue
            number = self.math.add(self.math.multiply(number, size), position)
        return self.math.to_int(number)
