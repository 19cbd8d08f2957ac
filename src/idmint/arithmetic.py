"""Arbitrary-precision integer arithmetic.

Sqids, Hashids and the Base32/Base62 codecs convert between custom bases and
integers that may not fit in 64 bits. They do the arithmetic through a
``MathBackend`` so the representation of intermediate values is swappable:

- ``IntegerMath`` works on native Python integers (the default).
- ``DecimalMath`` works on canonical decimal strings and computes with the
  ``decimal`` module in a wide context that refuses to round.

Both backends accept ints or decimal strings as operands.
"""

import decimal
from abc import ABC, abstractmethod
from typing import Union

from idmint.exceptions import MissingMathBackendError

Number = Union[int, str]

# Digits kept by DecimalMath; results that would need rounding raise Inexact.
PRECISION = 4096


class MathBackend(ABC):
    """Arithmetic operations on arbitrarily large non-negative integers."""

    name: str = ""

    @abstractmethod
    def add(self, a: Number, b: Number) -> Number:
        pass

    @abstractmethod
    def multiply(self, a: Number, b: Number) -> Number:
        pass

    @abstractmethod
    def divide(self, a: Number, b: Number) -> Number:
        """Truncating integer quotient."""
        pass

    @abstractmethod
    def mod(self, a: Number, b: Number) -> Number:
        pass

    @abstractmethod
    def greater_than(self, a: Number, b: Number) -> bool:
        pass

    def to_int(self, a: Number) -> int:
        """Convert to a native integer."""
        return int(a)

    def to_str(self, a: Number) -> str:
        """Canonical decimal string form."""
        return str(int(a))


class IntegerMath(MathBackend):
    """Backend using native Python integers."""

    name = "integer"

    def add(self, a: Number, b: Number) -> int:
        return int(a) + int(b)

    def multiply(self, a: Number, b: Number) -> int:
        return int(a) * int(b)

    def divide(self, a: Number, b: Number) -> int:
        a, b = int(a), int(b)
        quotient = abs(a) // abs(b)
        return quotient if (a >= 0) == (b >= 0) else -quotient

    def mod(self, a: Number, b: Number) -> int:
        a, b = int(a), int(b)
        remainder = abs(a) % abs(b)
        return remainder if a >= 0 else -remainder

    def greater_than(self, a: Number, b: Number) -> bool:
        return int(a) > int(b)


class DecimalMath(MathBackend):
    """Backend operating on decimal strings."""

    name = "decimal"

    def __init__(self) -> None:
        self._context = decimal.Context(
            prec=PRECISION,
            Emax=decimal.MAX_EMAX,
            Emin=decimal.MIN_EMIN,
            traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Inexact],
        )

    def _dec(self, a: Number) -> decimal.Decimal:
        return decimal.Decimal(str(a))

    def _str(self, value: decimal.Decimal) -> str:
        return format(value.to_integral_value(context=self._context), "f")

    def add(self, a: Number, b: Number) -> str:
        return self._str(self._context.add(self._dec(a), self._dec(b)))

    def multiply(self, a: Number, b: Number) -> str:
        return self._str(self._context.multiply(self._dec(a), self._dec(b)))

    def divide(self, a: Number, b: Number) -> str:
        return self._str(self._context.divide_int(self._dec(a), self._dec(b)))

    def mod(self, a: Number, b: Number) -> str:
        return self._str(self._context.remainder(self._dec(a), self._dec(b)))

    def greater_than(self, a: Number, b: Number) -> bool:
        return self._context.compare(self._dec(a), self._dec(b)) > 0

    def to_str(self, a: Number) -> str:
        return self._str(self._dec(a))


BACKENDS: dict[str, type[MathBackend]] = {
    IntegerMath.name: IntegerMath,
    DecimalMath.name: DecimalMath,
}


def get_math(name: str | None = None) -> MathBackend:
    """Return a math backend.

    Args:
        name: Backend name ('integer' or 'decimal'). Defaults to 'integer'.

    Returns:
        MathBackend instance

    Raises:
        MissingMathBackendError: If the backend name is not recognized
    """
    backend_name = name or IntegerMath.name
    if backend_name not in BACKENDS:
        raise MissingMathBackendError(backend_name, list(BACKENDS))
    return BACKENDS[backend_name]()
