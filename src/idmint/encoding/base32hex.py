"""Base32Hex codec (RFC 4648 "extended hex" alphabet, lowercase, no padding)."""

from idmint.arithmetic import MathBackend, Number, get_math

ALPHABET = "0123456789abcdefghijklmnopqrstuv"

_LOOKUP = {char: index for index, char in enumerate(ALPHABET)}
_BASE = 32


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
    """Decode a Base32Hex string into an integer (case-insensitive)."""
    math = math or get_math()
    number: Number = 0
    for char in value.lower():
        digit = _LOOKUP.get(char)
        if digit is None:
            continue
        number = math.add(math.multiply(number, _BASE), digit)
    return math.to_int(number)


def encode_bytes(data: bytes, length: int = 0) -> str:
    """Encode bytes as a bit stream, 5 bits per symbol.

    A trailing partial group is padded with zero bits on the right, so
    12 bytes (96 bits) become 20 symbols.
    """
    chars = []
    buffer = 0
    bits = 0
    for byte in data:
        buffer = (buffer << 8) | byte
        bits += 8
        while bits >= 5:
            bits -= 5
            chars.append(ALPHABET[(buffer >> bits) & 0x1F])
        buffer &= (1 << bits) - 1

    if bits > 0:
        chars.append(ALPHABET[(buffer << (5 - bits)) & 0x1F])

    return "".join(chars).rjust(length, "0")


def decode_bytes(value: str, length: int = 0) -> bytes:
    """Decode a Base32Hex bit stream; trailing bits that do not fill a byte are dropped."""
    result = bytearray()
    buffer = 0
    bits = 0
    for char in value.lower():
        digit = _LOOKUP.get(char)
        if digit is None:
            continue
        buffer = (buffer << 5) | digit
        bits += 5
        if bits >= 8:
            bits -= 8
            result.append((buffer >> bits) & 0xFF)
            buffer &= (1 << bits) - 1

    if length and len(result) < length:
        return bytes(length - len(result)) + bytes(result)
    return bytes(result)
