"""Tests for TimeflakeGenerator."""

import pytest
from idmint import Timeflake, TimeflakeGenerator
from idmint.exceptions import InvalidTimeflakeFormatError

NOW = 1_700_000_000_000


class TestTimeflakeGeneratorGenerate:
    """Tests for TimeflakeGenerator.generate()."""

    def test_format(self) -> None:
        """Test 16 bytes as 22 Base62 characters."""
        timeflake = TimeflakeGenerator().generate()

        assert isinstance(timeflake, Timeflake)
        assert len(timeflake.to_string()) == 22
        assert len(timeflake.to_bytes()) == 16

    def test_timestamp(self) -> None:
        """Test the 48-bit millisecond timestamp."""
        timeflake = TimeflakeGenerator(clock=lambda: NOW).generate()

        assert timeflake.timestamp == NOW
        assert len(timeflake.randomness) == 20

    def test_generate_hex(self) -> None:
        """Test the 32-character hex form."""
        timeflake = TimeflakeGenerator(clock=lambda: NOW).generate_hex()

        assert len(timeflake.to_string()) == 32
        assert timeflake.to_string() == timeflake.to_bytes().hex()
        assert timeflake.timestamp == NOW

    def test_generate_from_timestamp(self) -> None:
        """Test generating for an explicit timestamp."""
        timeflake = TimeflakeGenerator().generate_from_timestamp(NOW + 5)

        assert timeflake.timestamp == NOW + 5

    def test_sorted_by_time(self) -> None:
        """Test that later Timeflakes sort after earlier ones."""
        generator = TimeflakeGenerator()
        earlier = generator.generate_from_timestamp(NOW)
        later = generator.generate_from_timestamp(NOW + 1000)

        assert earlier.to_string() < later.to_string()

    def test_to_uuid(self) -> None:
        """Test the UUID view of the same bits."""
        timeflake = TimeflakeGenerator(clock=lambda: NOW).generate()

        assert timeflake.to_uuid().replace("-", "") == timeflake.to_bytes().hex()


class TestTimeflakeGeneratorParse:
    """Tests for TimeflakeGenerator.parse()."""

    def test_round_trip(self) -> None:
        """Test that bytes survive a string round trip."""
        generator = TimeflakeGenerator()
        timeflake = generator.generate()
        parsed = generator.parse(timeflake.to_string())

        assert parsed == timeflake
        assert parsed.to_bytes() == timeflake.to_bytes()

    def test_parse_hex(self) -> None:
        """Test parsing the hex form."""
        generator = TimeflakeGenerator(clock=lambda: NOW)
        timeflake = generator.generate_hex()
        parsed = generator.parse(timeflake.to_string())

        assert parsed.to_bytes() == timeflake.to_bytes()
        assert parsed.timestamp == NOW

    def test_hex_and_base62_agree(self) -> None:
        """Test that both forms of one value decode to the same bytes."""
        generator = TimeflakeGenerator()
        timeflake = generator.generate()

        assert generator.parse(timeflake.to_bytes().hex()).to_bytes() == timeflake.to_bytes()

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "abc",
            "0" * 17,
            "0" * 27,
            "0" * 21 + "-",
            "z" * 26,
        ],
    )
    def test_parse_invalid(self, value: str) -> None:
        """Test bad lengths, characters and 128-bit overflow."""
        with pytest.raises(InvalidTimeflakeFormatError):
            TimeflakeGenerator().parse(value)
