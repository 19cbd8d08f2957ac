"""CLI commands for idmint."""

import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import click

from idmint.config import MintConfig
from idmint.exceptions import MintError
from idmint.generators import HashidGenerator, SqidGenerator
from idmint.identifiers import Identifier
from idmint.registry import GeneratorRegistry
from idmint.types import IdentifierType
from idmint.validator import IdentifierValidator

TYPE_NAMES = [t.value for t in IdentifierType]

# Generator options each type accepts from the command line
TYPE_OPTIONS: dict[IdentifierType, set[str]] = {
    IdentifierType.UUID: {"version"},
    IdentifierType.ULID: set(),
    IdentifierType.SNOWFLAKE: {"node_id", "epoch"},
    IdentifierType.NANOID: {"length", "alphabet"},
    IdentifierType.SQID: {"alphabet", "min_length"},
    IdentifierType.HASHID: {"salt", "min_length", "alphabet"},
    IdentifierType.KSUID: {"epoch"},
    IdentifierType.CUID2: {"length"},
    IdentifierType.TYPEID: {"prefix"},
    IdentifierType.XID: set(),
    IdentifierType.OBJECTID: set(),
    IdentifierType.PUSHID: set(),
    IdentifierType.TIMEFLAKE: set(),
}

COMPONENTS = [
    "version",
    "prefix",
    "suffix",
    "node_id",
    "sequence",
    "machine_id",
    "counter",
    "random_value",
    "randomness",
    "random_part",
    "payload",
    "numbers",
    "hex",
]


def generator_options(f: Any) -> Any:
    """Attach the per-type generator options to a command."""
    options = [
        click.option("--version", "version", type=int, help="UUID version (1,3,4,5,6,7,8)"),
        click.option("--node-id", type=int, help="Snowflake node id (0-1023)"),
        click.option("--epoch", type=int, help="Custom epoch (Snowflake ms, KSUID s)"),
        click.option("--prefix", help="TypeID prefix"),
        click.option("--alphabet", help="Alphabet (NanoID, Sqid, Hashid)"),
        click.option("--length", type=int, help="Length (NanoID, CUID2)"),
        click.option("--salt", help="Hashid salt"),
        click.option("--min-length", type=int, help="Minimum length (Sqid, Hashid)"),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def _overrides(identifier_type: IdentifierType, options: dict[str, Any]) -> dict[str, Any]:
    given = {name: value for name, value in options.items() if value is not None}
    unsupported = sorted(set(given) - TYPE_OPTIONS[identifier_type])
    if unsupported:
        flags = ", ".join(f"--{name.replace('_', '-')}" for name in unsupported)
        raise click.UsageError(f"{flags} not supported for {identifier_type.value}")
    return given


def _components(identifier: Identifier, identifier_type: IdentifierType) -> dict[str, Any]:
    components: dict[str, Any] = {"type": identifier_type.value, "value": identifier.to_string()}

    timestamp = identifier.timestamp
    if timestamp is not None:
        components["timestamp"] = timestamp
        try:
            components["datetime"] = datetime.fromtimestamp(
                timestamp / 1000, tz=timezone.utc
            ).isoformat()
        except (OverflowError, OSError, ValueError):
            # beyond the year 9999
            components["datetime"] = None

    for name in COMPONENTS:
        value = getattr(identifier, name, None)
        if value is None:
            continue
        if isinstance(value, tuple):
            value = list(value)
        elif isinstance(value, int):
            value = int(value)
        components[name] = value

    components["bytes"] = identifier.to_bytes().hex()
    components["sortable"] = identifier.is_sortable
    return components


def _registry(ctx: click.Context) -> GeneratorRegistry:
    return ctx.obj["registry"]


@click.group()
@click.version_option(package_name="idmint")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to idmint.toml (default: search from current directory)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None) -> None:
    """idmint - generate, parse and validate unique identifiers."""
    if config_path is not None:
        config = MintConfig.from_toml(config_path)
    else:
        try:
            config = MintConfig.find_and_load()
        except FileNotFoundError:
            config = MintConfig()

    ctx.ensure_object(dict)
    ctx.obj["registry"] = GeneratorRegistry(config)


@cli.command()
@click.argument("type_name", metavar="TYPE", type=click.Choice(TYPE_NAMES, case_sensitive=False))
@click.option("--count", type=int, default=1, help="Number of identifiers to generate")
@click.option(
    "--number",
    "-n",
    "numbers",
    type=int,
    multiple=True,
    help="Number to encode (Sqid, Hashid; repeatable)",
)
@generator_options
@click.pass_context
def generate(
    ctx: click.Context,
    type_name: str,
    count: int,
    numbers: tuple[int, ...],
    **options: Any,
) -> None:
    """Generate identifier(s) of TYPE."""
    identifier_type = IdentifierType(type_name.lower())
    overrides = _overrides(identifier_type, options)

    if count < 1:
        click.echo("Error: --count must be at least 1", err=True)
        sys.exit(1)

    try:
        generator = _registry(ctx).get(identifier_type, **overrides)

        if numbers:
            if not isinstance(generator, (SqidGenerator, HashidGenerator)):
                click.echo(f"Error: --number is not supported for {identifier_type.value}", err=True)
                sys.exit(1)
            click.echo(generator.encode(list(numbers)))
            return

        for identifier in generator.generate_batch(count):
            click.echo(identifier)

    except (MintError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("type_name", metavar="TYPE", type=click.Choice(TYPE_NAMES, case_sensitive=False))
@click.argument("value")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@generator_options
@click.pass_context
def parse(ctx: click.Context, type_name: str, value: str, output_json: bool, **options: Any) -> None:
    """Parse an identifier into its components."""
    identifier_type = IdentifierType(type_name.lower())
    overrides = _overrides(identifier_type, options)

    try:
        identifier = _registry(ctx).get(identifier_type, **overrides).parse(value)
    except (MintError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    components = _components(identifier, identifier_type)

    if output_json:
        click.echo(json.dumps(components, indent=2))
        return

    click.echo(f"{identifier_type.value.upper()}: {identifier}")
    for name, component in components.items():
        if name in ("type", "value"):
            continue
        click.echo(f"  {name + ':':<13} {component}")


@cli.command()
@click.argument("type_name", metavar="TYPE", type=click.Choice(TYPE_NAMES, case_sensitive=False))
@click.argument("value")
@click.option("--quiet", "-q", is_flag=True, help="Only output result (0=valid, 1=invalid)")
@generator_options
@click.pass_context
def validate(ctx: click.Context, type_name: str, value: str, quiet: bool, **options: Any) -> None:
    """Validate identifier format."""
    identifier_type = IdentifierType(type_name.lower())
    overrides = _overrides(identifier_type, options)

    try:
        generator = _registry(ctx).get(identifier_type, **overrides)
    except (MintError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    result = IdentifierValidator(generator).validate(value)

    if quiet:
        sys.exit(0 if result.valid else 1)

    if result.valid:
        click.echo(f"✓ Valid {identifier_type.value}: {value}")
        for warning in result.warnings or []:
            click.echo(f"  warning: {warning}")
        sys.exit(0)
    else:
        click.echo(f"✗ Invalid {identifier_type.value}: {result.error}", err=True)
        sys.exit(1)


@cli.command("types")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def list_types(output_json: bool) -> None:
    """List supported identifier types."""
    rows = [
        {
            "type": t.value,
            "sortable": t.is_sortable,
            "length": t.length,
            "bits": t.bit_size,
        }
        for t in IdentifierType
    ]

    if output_json:
        click.echo(json.dumps(rows, indent=2))
        return

    click.echo(f"{'TYPE':<10} {'SORTABLE':<9} {'LENGTH':<7} BITS")
    for row in rows:
        length = row["length"] if row["length"] is not None else "-"
        bits = row["bits"] or "-"
        sortable = "yes" if row["sortable"] else "no"
        click.echo(f"{row['type']:<10} {sortable:<9} {length!s:<7} {bits}")


if __name__ == "__main__":
    cli()
