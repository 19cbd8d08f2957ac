"""Base62 codec.

Alphabet ordering is digits, then uppercase, then lowercase, which keeps
encoded values sorting in the same order as the numbers they represent.
Decoding is case-sensitive.
"""

from idmint.arithmetic import MathBackend, Number, get_math

ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"

_LOOKUP = {char: index for index, char in enumerate(ALPHABET)}
_BASE = 62


def encode_number(number: Number, min_length: int = 0, math: MathBackend | None = None) -> str:
    """Encode a non-negative integer, left-padded with '0' to min_length."""
    math = math or get_math()
    chars = []
    while math.greater_than(number, 0):
        chars.append(ALPHABET[math.to_int(math.mod(number, _BASE))])
        number = math.divide(number, _BASE)

    encoded = "".join(reversed(chars)) or "0"
    return encoded.rjust(min_length, "0")


def decode_number(value: str, math: MathBackend | None = None) -> int:
    """Decode a Base62 string into an integer; unknown characters are ignored."""
    math = math or get_math()
    number: Number = 0
    for char in value:
        digit = _LOOKUP.get(char)
        if digit is None:
            continue
        number = math.add(math.multiply(number, _BASE), digit)
    return math.to_int(number)


def encode_bytes(data: bytes, length: int = 0, math: MathBackend | None = None) -> str:
    """Encode bytes as a big-endian integer, left-padded with '0' to length."""
    return encode_number(int.from_bytes(data, "big"), length, math)


def decode_bytes(value: str, length: int = 0, math: MathBackend | None = None) -> bytes:
    """Decode a Base62 string into big-endian bytes.

    Args:
        value: Base62 string
        length: Byte length to left-pad the result to (0 for minimal length)

    Raises:
        ValueError: If the decoded number needs more than `length` bytes
    """
    number = decode_number(value, math)
    size = max((number.bit_length() + 7) // 8, length)
    if length and size > length:
        raise ValueError(f"Base62 value does not fit in {length} bytes")
    return number.to_bytes(size, "big")
