"""Tests for the idmint command line interface."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner
from idmint.cli import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def invoke(runner: CliRunner, args: list[str]):
    with runner.isolated_filesystem():
        return runner.invoke(cli, args)


class TestTypesCommand:
    """Tests for `idmint types`."""

    def test_table(self, runner: CliRunner) -> None:
        """Test the plain text table."""
        result = invoke(runner, ["types"])

        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0].split() == ["TYPE", "SORTABLE", "LENGTH", "BITS"]
        assert len(lines) == 14
        assert lines[1].split() == ["uuid", "no", "36", "128"]

    def test_json(self, runner: CliRunner) -> None:
        """Test the JSON listing."""
        result = invoke(runner, ["types", "--json"])
        rows = json.loads(result.output)

        assert result.exit_code == 0
        assert len(rows) == 13
        assert {"type": "ksuid", "sortable": True, "length": 27, "bits": 160} in rows


class TestGenerateCommand:
    """Tests for `idmint generate`."""

    def test_generate_default_count(self, runner: CliRunner) -> None:
        """Test generating a single identifier."""
        result = invoke(runner, ["generate", "uuid"])

        assert result.exit_code == 0
        value = result.output.strip()
        assert len(value) == 36
        assert value[14] == "7"

    def test_generate_count(self, runner: CliRunner) -> None:
        """Test generating several sortable identifiers."""
        result = invoke(runner, ["generate", "ulid", "--count", "3"])

        assert result.exit_code == 0
        values = result.output.split()
        assert len(values) == 3
        assert values == sorted(values)
        assert all(len(value) == 26 for value in values)

    def test_generate_case_insensitive_type(self, runner: CliRunner) -> None:
        """Test that type names ignore case."""
        result = invoke(runner, ["generate", "KSUID"])

        assert result.exit_code == 0
        assert len(result.output.strip()) == 27

    def test_generate_uuid_version(self, runner: CliRunner) -> None:
        """Test the --version option."""
        result = invoke(runner, ["generate", "uuid", "--version", "4"])

        assert result.exit_code == 0
        assert result.output.strip()[14] == "4"

    def test_generate_invalid_uuid_version(self, runner: CliRunner) -> None:
        """Test an unsupported UUID version."""
        result = invoke(runner, ["generate", "uuid", "--version", "2"])

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_generate_typeid_prefix(self, runner: CliRunner) -> None:
        """Test the --prefix option."""
        result = invoke(runner, ["generate", "typeid", "--prefix", "user"])

        assert result.exit_code == 0
        assert result.output.startswith("user_")

    def test_generate_nanoid_options(self, runner: CliRunner) -> None:
        """Test the --length and --alphabet options."""
        result = invoke(runner, ["generate", "nanoid", "--length", "8", "--alphabet", "ab"])

        assert result.exit_code == 0
        value = result.output.strip()
        assert len(value) == 8
        assert set(value) <= {"a", "b"}

    def test_generate_sqid_numbers(self, runner: CliRunner) -> None:
        """Test encoding numbers as a Sqid."""
        result = invoke(runner, ["generate", "sqid", "-n", "1", "-n", "2", "-n", "3"])

        assert result.exit_code == 0
        assert result.output.strip() == "86Rf07"

    def test_generate_hashid_numbers(self, runner: CliRunner) -> None:
        """Test encoding numbers as a Hashid."""
        result = invoke(runner, ["generate", "hashid", "--number", "1", "--number", "2", "--number", "3"])

        assert result.exit_code == 0
        assert result.output.strip() == "o2fXhV"

    def test_generate_numbers_unsupported(self, runner: CliRunner) -> None:
        """Test that --number only applies to Sqid and Hashid."""
        result = invoke(runner, ["generate", "ulid", "-n", "1"])

        assert result.exit_code == 1
        assert "--number is not supported for ulid" in result.output

    def test_generate_unsupported_option(self, runner: CliRunner) -> None:
        """Test that options for other types are a usage error."""
        result = invoke(runner, ["generate", "snowflake", "--salt", "x"])

        assert result.exit_code == 2
        assert "--salt not supported for snowflake" in result.output

    def test_generate_invalid_node_id(self, runner: CliRunner) -> None:
        """Test that generator validation errors are reported."""
        result = invoke(runner, ["generate", "snowflake", "--node-id", "5000"])

        assert result.exit_code == 1
        assert "Error: Node ID must be between 0 and 1023" in result.output

    def test_generate_invalid_count(self, runner: CliRunner) -> None:
        """Test that --count must be positive."""
        result = invoke(runner, ["generate", "ulid", "--count", "0"])

        assert result.exit_code == 1

    def test_generate_unknown_type(self, runner: CliRunner) -> None:
        """Test that unknown types are rejected by click."""
        result = invoke(runner, ["generate", "guid"])

        assert result.exit_code == 2


class TestParseCommand:
    """Tests for `idmint parse`."""

    def test_parse_objectid_json(self, runner: CliRunner) -> None:
        """Test decoding ObjectID components as JSON."""
        result = invoke(runner, ["parse", "objectid", "507f1f77bcf86cd799439011", "--json"])
        components = json.loads(result.output)

        assert result.exit_code == 0
        assert components["type"] == "objectid"
        assert components["timestamp"] == 1350508407000
        assert components["datetime"] == "2012-10-17T21:13:27+00:00"
        assert components["bytes"] == "507f1f77bcf86cd799439011"
        assert components["sortable"] is True

    def test_parse_uuid_text(self, runner: CliRunner) -> None:
        """Test the plain text output."""
        result = invoke(runner, ["parse", "uuid", "886313e1-3b8a-5372-9b90-0c9aee199e5d"])

        assert result.exit_code == 0
        assert result.output.startswith("UUID: 886313e1-3b8a-5372-9b90-0c9aee199e5d")
        assert "sortable:" in result.output

    def test_parse_hashid_numbers(self, runner: CliRunner) -> None:
        """Test decoding numbers from a Hashid."""
        result = invoke(runner, ["parse", "hashid", "o2fXhV", "--json"])

        assert result.exit_code == 0
        assert json.loads(result.output)["numbers"] == [1, 2, 3]

    def test_parse_invalid(self, runner: CliRunner) -> None:
        """Test that malformed values exit with an error."""
        result = invoke(runner, ["parse", "xid", "not-an-xid"])

        assert result.exit_code == 1
        assert "Error:" in result.output


class TestValidateCommand:
    """Tests for `idmint validate`."""

    def test_validate_valid(self, runner: CliRunner) -> None:
        """Test a valid value."""
        result = invoke(runner, ["validate", "ksuid", "0ujtsYcgvSTl8PAuAdqWYSMnLOv"])

        assert result.exit_code == 0
        assert "✓ Valid ksuid: 0ujtsYcgvSTl8PAuAdqWYSMnLOv" in result.output

    def test_validate_invalid(self, runner: CliRunner) -> None:
        """Test an invalid value."""
        result = invoke(runner, ["validate", "uuid", "not-a-uuid"])

        assert result.exit_code == 1
        assert "✗ Invalid uuid" in result.output

    def test_validate_warning(self, runner: CliRunner) -> None:
        """Test that non-canonical values are reported."""
        result = invoke(runner, ["validate", "objectid", "507F1F77BCF86CD799439011"])

        assert result.exit_code == 0
        assert "warning: Not in canonical form" in result.output

    @pytest.mark.parametrize(
        "value,exit_code",
        [("507f1f77bcf86cd799439011", 0), ("507f1f77", 1)],
    )
    def test_validate_quiet(self, runner: CliRunner, value: str, exit_code: int) -> None:
        """Test that --quiet only sets the exit code."""
        result = invoke(runner, ["validate", "objectid", value, "--quiet"])

        assert result.exit_code == exit_code
        assert result.output == ""


class TestConfigOption:
    """Tests for the --config option."""

    def test_config_file(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test that configured defaults are used."""
        config_file = tmp_path / "idmint.toml"
        config_file.write_text('[typeid]\nprefix = "order"\n')

        result = runner.invoke(cli, ["--config", str(config_file), "generate", "typeid"])

        assert result.exit_code == 0
        assert result.output.startswith("order_")

    def test_config_file_discovered(self, runner: CliRunner) -> None:
        """Test that idmint.toml in the working directory is found."""
        with runner.isolated_filesystem():
            Path("idmint.toml").write_text('[typeid]\nprefix = "post"\n')
            result = runner.invoke(cli, ["generate", "typeid"])

        assert result.exit_code == 0
        assert result.output.startswith("post_")

    def test_missing_config_file(self, runner: CliRunner) -> None:
        """Test that --config must point to an existing file."""
        result = invoke(runner, ["--config", "missing.toml", "types"])

        assert result.exit_code == 2
