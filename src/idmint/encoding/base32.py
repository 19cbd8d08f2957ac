"""Crockford Base32 codec.

Alphabet: 0123456789ABCDEFGHJKMNPQRSTVWXYZ (no I, L, O, U).

Decoding is case-insensitive and corrects the ambiguous characters
I and L to 1 and O to 0. Byte mode works on 5-byte (40-bit) chunks, each
producing 8 symbols.
"""

from idmint.arithmetic import MathBackend, Number, get_math

ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"

_LOOKUP = {char: index for index, char in enumerate(ALPHABET)}
_SUBSTITUTIONS = {"I": "1", "L": "1", "O": "0"}
_BASE = 32


def _normalize(char: str) -> str:
    return _SUBSTITUTIONS.get(char, char)


def encode_number(number: Number, min_length: int = 0, math: MathBackend | None = None) -> str:
    """Encode a non-negative integer, left-padded with '0' to min_length.

    Args:
        number: Integer (or decimal string) to encode
        min_length: Minimum length of the result
        math: Arithmetic backend (defaults to native integers)

    Returns:
        Base32 string
    """
    math = math or get_math()
    chars = []
    while math.greater_than(number, 0):
        chars.append(ALPHABET[math.to_int(math.mod(number, _BASE))])
        number = math.divide(number, _BASE)

    encoded = "".join(reversed(chars)) or "0"
    return encoded.rjust(min_length, "0")


def decode_number(value: str, math: MathBackend | None = None) -> int:
    """Decode a Base32 string into an integer.

    Characters outside the alphabet (after correction) are ignored.
    """
    math = math or get_math()
    number: Number = 0
    for char in value.upper():
        digit = _LOOKUP.get(_normalize(char))
        if digit is None:
            continue
        number = math.add(math.multiply(number, _BASE), digit)
    return math.to_int(number)


def encode_bytes(data: bytes, length: int = 0) -> str:
    """Encode raw bytes.

    Args:
        data: Bytes to encode
        length: Canonical output length; leading zero symbols are trimmed or
            added to reach it. 0 keeps the natural 8-symbols-per-5-bytes length.

    Returns:
        Base32 string

    Raises:
        ValueError: If the data does not fit in `length` symbols
    """
    padding = (5 - len(data) % 5) % 5
    data = bytes(padding) + data

    chars = []
    for i in range(0, len(data), 5):
        chunk = int.from_bytes(data[i : i + 5], "big")
        for shift in range(35, -1, -5):
            chars.append(ALPHABET[(chunk >> shift) & 0x1F])
    encoded = "".join(chars)

    if not length:
        return encoded
    surplus = len(encoded) - length
    if surplus <= 0:
        return encoded.rjust(length, "0")
    if encoded[:surplus].strip("0"):
        raise ValueError(f"{len(data) - padding} bytes do not fit in {length} Base32 characters")
    return encoded[surplus:]


def decode_bytes(value: str, length: int = 0) -> bytes:
    """Decode a Base32 string into raw bytes.

    Args:
        value: Base32 string
        length: Expected byte length; leading zero bytes are trimmed or added
            to reach it. 0 keeps the natural 5-bytes-per-8-symbols length.

    Raises:
        ValueError: If the decoded value does not fit in `length` bytes
    """
    value = value.upper()
    padding = (8 - len(value) % 8) % 8
    value = "0" * padding + value

    result = bytearray()
    for i in range(0, len(value), 8):
        chunk = 0
        for char in value[i : i + 8]:
            chunk = (chunk << 5) | _LOOKUP.get(_normalize(char), 0)
        result += chunk.to_bytes(5, "big")

    if not length:
        return bytes(result)
    surplus = len(result) - length
    if surplus <= 0:
        return bytes(-surplus) + bytes(result)
    if any(result[:surplus]):
        raise ValueError(f"Base32 value does not fit in {length} bytes")
    return bytes(result[surplus:])
