"""Tests for KsuidGenerator."""

import pytest
from idmint import Ksuid, KsuidGenerator
from idmint.algorithms.ksuid import EPOCH
from idmint.exceptions import InvalidKsuidFormatError

KNOWN = "0ujtsYcgvSTl8PAuAdqWYSMnLOv"
KNOWN_HEX = "0669f7efb5a1cd34b5f99d1154fb6853345c9735"


class TestKsuidGeneratorGenerate:
    """Tests for KsuidGenerator.generate()."""

    def test_lengths(self) -> None:
        """Test 20 bytes encoded as 27 characters."""
        ksuid = KsuidGenerator().generate()

        assert isinstance(ksuid, Ksuid)
        assert len(ksuid.to_bytes()) == 20
        assert len(ksuid.to_string()) == 27
        assert ksuid.is_sortable is True

    def test_timestamp_resolution_is_seconds(self) -> None:
        """Test that the timestamp is truncated to whole seconds."""
        ksuid = KsuidGenerator(clock=lambda: 1_700_000_000_123).generate()

        assert ksuid.timestamp == 1_700_000_000_000

    def test_from_timestamp(self) -> None:
        """Test generating for an explicit timestamp in seconds."""
        ksuid = KsuidGenerator().from_timestamp(EPOCH + 10)

        assert ksuid.to_bytes()[:4] == (10).to_bytes(4, "big")
        assert ksuid.timestamp == (EPOCH + 10) * 1000

    def test_custom_epoch(self) -> None:
        """Test timestamps relative to a custom epoch."""
        generator = KsuidGenerator(epoch=1_600_000_000)
        ksuid = generator.from_timestamp(1_600_000_100)

        assert ksuid.to_bytes()[:4] == (100).to_bytes(4, "big")
        assert ksuid.timestamp == 1_600_000_100_000

    def test_sorted_by_time(self) -> None:
        """Test that later KSUIDs sort after earlier ones."""
        generator = KsuidGenerator()
        earlier = generator.from_timestamp(EPOCH + 1)
        later = generator.from_timestamp(EPOCH + 2)

        assert earlier.to_string() < later.to_string()

    def test_min_and_max(self) -> None:
        """Test the smallest and largest KSUIDs."""
        generator = KsuidGenerator()

        assert generator.min().to_string() == "0" * 27
        assert generator.min().to_bytes() == bytes(20)
        assert generator.max().to_string() == "aWgEPTl1tmebfsQzFP4bxwgy80V"
        assert generator.max().to_bytes() == b"\xff" * 20


class TestKsuidGeneratorParse:
    """Tests for KsuidGenerator.parse()."""

    def test_parse_known_value(self) -> None:
        """Test a known KSUID."""
        ksuid = KsuidGenerator().parse(KNOWN)

        assert ksuid.to_bytes().hex() == KNOWN_HEX
        assert ksuid.timestamp == (107608047 + EPOCH) * 1000
        assert ksuid.payload == KNOWN_HEX[8:]

    def test_parse_round_trip(self) -> None:
        """Test that bytes survive a string round trip."""
        generator = KsuidGenerator()
        ksuid = generator.generate()

        assert generator.parse(ksuid.to_string()).to_bytes() == ksuid.to_bytes()

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "0ujtsYcgvSTl8PAuAdqWYSMnLO",
            "0ujtsYcgvSTl8PAuAdqWYSMnLOvX",
            "0ujtsYcgvSTl8PAuAdqWYSMnLO-",
            "zzzzzzzzzzzzzzzzzzzzzzzzzzz",
        ],
    )
    def test_parse_invalid(self, value: str) -> None:
        """Test wrong length, bad characters and 160-bit overflow."""
        with pytest.raises(InvalidKsuidFormatError):
            KsuidGenerator().parse(value)
