"""Tests for arithmetic backends."""

import pytest
from idmint.arithmetic import DecimalMath, IntegerMath, get_math
from idmint.exceptions import ConfigurationError, MissingMathBackendError

U64_MAX = "18446744073709551615"


class TestGetMath:
    """Tests for get_math()."""

    def test_default_is_integer(self) -> None:
        """Test that the default backend uses native integers."""
        assert isinstance(get_math(), IntegerMath)

    def test_select_by_name(self) -> None:
        """Test selecting backends by name."""
        assert isinstance(get_math("integer"), IntegerMath)
        assert isinstance(get_math("decimal"), DecimalMath)

    def test_unknown_backend(self) -> None:
        """Test that unknown backend names raise a configuration error."""
        with pytest.raises(MissingMathBackendError, match="gmp"):
            get_math("gmp")

    def test_unknown_backend_is_configuration_error(self) -> None:
        """Test the error hierarchy."""
        with pytest.raises(ConfigurationError):
            get_math("bcmath")


@pytest.mark.parametrize("math", [IntegerMath(), DecimalMath()], ids=["integer", "decimal"])
class TestBackends:
    """Tests shared by both backends."""

    def test_add(self, math) -> None:
        """Test addition beyond 64 bits."""
        assert math.to_str(math.add(U64_MAX, 1)) == "18446744073709551616"

    def test_multiply(self, math) -> None:
        """Test multiplication beyond 64 bits."""
        assert math.to_str(math.multiply(U64_MAX, 2)) == "36893488147419103230"

    def test_divide_truncates(self, math) -> None:
        """Test that division returns the truncated quotient."""
        assert math.to_int(math.divide(7, 2)) == 3
        assert math.to_int(math.divide(U64_MAX, 62)) == 18446744073709551615 // 62

    def test_mod(self, math) -> None:
        """Test remainder."""
        assert math.to_int(math.mod(U64_MAX, 62)) == 18446744073709551615 % 62
        assert math.to_int(math.mod(10, 5)) == 0

    def test_greater_than(self, math) -> None:
        """Test comparison."""
        assert math.greater_than(U64_MAX, 0) is True
        assert math.greater_than(0, 0) is False
        assert math.greater_than(1, U64_MAX) is False

    def test_accepts_strings_and_ints(self, math) -> None:
        """Test that operands may be ints or decimal strings."""
        assert math.to_int(math.add("40", 2)) == 42


class TestDecimalMath:
    """Tests specific to DecimalMath."""

    def test_results_are_strings(self) -> None:
        """Test that results are canonical decimal strings."""
        math = DecimalMath()

        assert math.add(1, 2) == "3"
        assert math.multiply("100000000000000000000", "100000000000000000000") == (
            "10000000000000000000000000000000000000000"
        )

    def test_no_exponent_notation(self) -> None:
        """Test that large values are never rendered in exponent form."""
        math = DecimalMath()
        value = math.multiply("1" + "0" * 50, 10)

        assert value == "1" + "0" * 51
        assert "E" not in value
