"""Tests for SnowflakeGenerator."""

import itertools
import logging

import pytest
from idmint import Snowflake, SnowflakeGenerator
from idmint.algorithms.snowflake import DEFAULT_EPOCH, MAX_SEQUENCE
from idmint.exceptions import (
    ClockBeforeEpochError,
    ClockMovedBackwardsError,
    InvalidNodeIdError,
    InvalidSnowflakeFormatError,
)

NOW = 1_700_000_000_000


class TestSnowflakeGeneratorInit:
    """Tests for SnowflakeGenerator.__init__()."""

    @pytest.mark.parametrize("node_id", [0, 1023])
    def test_node_id_bounds(self, node_id: int) -> None:
        """Test the smallest and largest node ids."""
        generator = SnowflakeGenerator(node_id, clock=lambda: NOW)

        assert generator.node_id == node_id
        assert generator.generate().node_id == node_id

    @pytest.mark.parametrize("node_id", [-1, 1024])
    def test_node_id_out_of_range(self, node_id: int) -> None:
        """Test that node ids outside 10 bits are rejected."""
        with pytest.raises(InvalidNodeIdError):
            SnowflakeGenerator(node_id)

    def test_default_epoch(self) -> None:
        """Test the default Twitter epoch."""
        assert SnowflakeGenerator().epoch == DEFAULT_EPOCH


class TestSnowflakeGeneratorGenerate:
    """Tests for SnowflakeGenerator.generate()."""

    def test_components(self) -> None:
        """Test timestamp, node id and sequence."""
        snowflake = SnowflakeGenerator(42, clock=lambda: NOW).generate()

        assert isinstance(snowflake, Snowflake)
        assert snowflake.timestamp == NOW
        assert snowflake.node_id == 42
        assert snowflake.sequence == 0
        assert snowflake.id == ((NOW - DEFAULT_EPOCH) << 22) | (42 << 12)
        assert snowflake.to_string() == str(snowflake.id)
        assert snowflake.to_bytes() == snowflake.id.to_bytes(8, "big")

    def test_custom_epoch(self) -> None:
        """Test ids relative to a custom epoch."""
        epoch = 1_600_000_000_000
        snowflake = SnowflakeGenerator(epoch=epoch, clock=lambda: NOW).generate()

        assert snowflake.id >> 22 == NOW - epoch
        assert snowflake.timestamp == NOW

    def test_sequence_increments_within_millisecond(self) -> None:
        """Test strictly increasing sequence numbers."""
        generator = SnowflakeGenerator(clock=lambda: NOW)
        sequences = [snowflake.sequence for snowflake in generator.generate_batch(5)]

        assert sequences == [0, 1, 2, 3, 4]

    def test_sequence_resets_on_new_millisecond(self) -> None:
        """Test that the sequence restarts at zero."""
        ticks = iter([NOW, NOW, NOW + 1])
        generator = SnowflakeGenerator(clock=lambda: next(ticks))
        snowflakes = generator.generate_batch(3)

        assert [s.sequence for s in snowflakes] == [0, 1, 0]
        assert snowflakes[2].timestamp == NOW + 1

    def test_sequence_exhaustion_waits_for_next_millisecond(self) -> None:
        """Test that a full sequence blocks until the clock advances."""
        ticks = itertools.chain(
            itertools.repeat(NOW, MAX_SEQUENCE + 3), itertools.repeat(NOW + 1)
        )
        generator = SnowflakeGenerator(clock=lambda: next(ticks))
        snowflakes = generator.generate_batch(MAX_SEQUENCE + 2)

        assert snowflakes[MAX_SEQUENCE].sequence == MAX_SEQUENCE
        assert snowflakes[MAX_SEQUENCE].timestamp == NOW
        assert snowflakes[-1].sequence == 0
        assert snowflakes[-1].timestamp == NOW + 1

    def test_ids_strictly_increase(self) -> None:
        """Test ordering over a batch."""
        ids = [s.id for s in SnowflakeGenerator().generate_batch(1000)]

        assert ids == sorted(ids)
        assert len(set(ids)) == 1000

    def test_clock_moved_backwards(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that a clock regression raises and is logged."""
        ticks = iter([NOW, NOW - 5])
        generator = SnowflakeGenerator(clock=lambda: next(ticks))
        generator.generate()

        with caplog.at_level(logging.ERROR, logger="idmint.algorithms.snowflake"):
            with pytest.raises(ClockMovedBackwardsError) as exc_info:
                generator.generate()

        assert exc_info.value.last_timestamp == NOW
        assert exc_info.value.current_timestamp == NOW - 5
        assert "Clock moved backwards by 5ms" in caplog.text


class TestSnowflakeGeneratorParse:
    """Tests for SnowflakeGenerator.parse()."""

    def test_parse_round_trip(self) -> None:
        """Test that bytes survive a string round trip."""
        generator = SnowflakeGenerator(7)
        snowflake = generator.generate()
        parsed = generator.parse(snowflake.to_string())

        assert parsed == snowflake
        assert parsed.to_bytes() == snowflake.to_bytes()
        assert parsed.node_id == 7

    def test_parse_max(self) -> None:
        """Test the largest signed 64-bit value."""
        parsed = SnowflakeGenerator().parse("9223372036854775807")

        assert parsed.to_bytes() == b"\x7f" + b"\xff" * 7

    @pytest.mark.parametrize(
        "value",
        ["", "abc", "-1", "12.5", "9223372036854775808", "123\n", "9" * 5000, "1" + "0" * 19],
    )
    def test_parse_invalid(self, value: str) -> None:
        """Test non-numeric and out-of-range values."""
        with pytest.raises(InvalidSnowflakeFormatError):
            SnowflakeGenerator().parse(value)

    @pytest.mark.parametrize("value", ["9" * 5000, "1" * 20, "-5", "12a"])
    def test_is_valid_rejects_without_raising(self, value: str) -> None:
        """Test that oversized and malformed values are simply invalid."""
        assert SnowflakeGenerator().is_valid(value) is False

    def test_leading_zeros(self) -> None:
        """Test that zero padding does not count against the 64-bit range."""
        value = "0" * 5000 + "42"
        parsed = SnowflakeGenerator().parse(value)

        assert parsed.to_string() == value
        assert parsed.id == 42


class TestSnowflakeGeneratorEpoch:
    """Tests for clocks earlier than the configured epoch."""

    def test_clock_before_epoch(self) -> None:
        """Test that a clock behind the epoch raises a generator error."""
        generator = SnowflakeGenerator(epoch=NOW + 1000, clock=lambda: NOW)

        with pytest.raises(ClockBeforeEpochError) as exc_info:
            generator.generate()

        assert exc_info.value.epoch == NOW + 1000
        assert exc_info.value.current_timestamp == NOW
        assert "1000 milliseconds before the epoch" in str(exc_info.value)

    def test_clock_at_epoch(self) -> None:
        """Test that the epoch itself is a valid generation time."""
        snowflake = SnowflakeGenerator(5, epoch=NOW, clock=lambda: NOW).generate()

        assert snowflake.id == 5 << 12
        assert snowflake.timestamp == NOW
