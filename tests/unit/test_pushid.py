"""Tests for PushIdGenerator."""

import pytest
from idmint import PushId, PushIdGenerator
from idmint.algorithms.pushid import ALPHABET, PushIdAlgorithm, encode_timestamp, to_bytes
from idmint.exceptions import InvalidPushIdFormatError

NOW = 1_700_000_000_000


class TestPushIdGeneratorGenerate:
    """Tests for PushIdGenerator.generate()."""

    def test_format(self) -> None:
        """Test 20 characters from the PushID alphabet."""
        pushid = PushIdGenerator().generate()

        assert isinstance(pushid, PushId)
        assert len(pushid.to_string()) == 20
        assert all(char in ALPHABET for char in pushid.to_string())
        assert len(pushid.to_bytes()) == 15

    def test_timestamp(self) -> None:
        """Test the eight timestamp characters."""
        pushid = PushIdGenerator(clock=lambda: NOW).generate()

        assert pushid.to_string()[:8] == encode_timestamp(NOW)
        assert pushid.timestamp == NOW
        assert len(pushid.random_part) == 12

    def test_monotonic_same_millisecond(self) -> None:
        """Test that ids within one millisecond strictly increase."""
        generator = PushIdGenerator(clock=lambda: NOW)
        pushids = [p.to_string() for p in generator.generate_batch(50)]

        assert pushids == sorted(pushids)
        assert len(set(pushids)) == 50

    def test_sorted_by_time(self) -> None:
        """Test that later PushIDs sort after earlier ones."""
        ticks = iter([NOW, NOW + 1])
        generator = PushIdGenerator(clock=lambda: next(ticks))
        first, second = generator.generate_batch(2)

        assert first.to_string() < second.to_string()

    def test_random_overflow_wraps(self) -> None:
        """Test the known edge case: a saturated random part wraps to zero."""
        algorithm = PushIdAlgorithm(clock=lambda: NOW)
        algorithm.generate()
        algorithm._last_random = [63] * 12

        encoded = algorithm.generate()

        assert encoded.value[8:] == "-" * 12

    def test_generate_from_timestamp(self) -> None:
        """Test generating for an explicit timestamp."""
        generator = PushIdGenerator(clock=lambda: NOW)
        pushid = generator.generate_from_timestamp(0)

        assert pushid.to_string().startswith("--------")
        assert pushid.timestamp == 0


class TestPushIdGeneratorParse:
    """Tests for PushIdGenerator.parse()."""

    def test_round_trip(self) -> None:
        """Test that bytes survive a string round trip."""
        generator = PushIdGenerator()
        pushid = generator.generate()
        parsed = generator.parse(pushid.to_string())

        assert parsed == pushid
        assert parsed.to_bytes() == pushid.to_bytes()

    def test_bytes_pack_symbols(self) -> None:
        """Test packing twenty 6-bit symbols into 15 bytes."""
        assert to_bytes("-" * 20) == bytes(15)
        assert to_bytes("z" * 20) == b"\xff" * 15

    @pytest.mark.parametrize("value", ["", "-" * 19, "-" * 21, "-" * 19 + "!"])
    def test_parse_invalid(self, value: str) -> None:
        """Test wrong length and characters outside the alphabet."""
        with pytest.raises(InvalidPushIdFormatError):
            PushIdGenerator().parse(value)


class TestEncodeTimestamp:
    """Tests for encode_timestamp()."""

    def test_zero(self) -> None:
        """Test the epoch."""
        assert encode_timestamp(0) == "--------"

    def test_ordering(self) -> None:
        """Test that encoded timestamps sort numerically."""
        assert encode_timestamp(63) < encode_timestamp(64) < encode_timestamp(NOW)
