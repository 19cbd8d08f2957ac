"""Identifier validator."""

from dataclasses import dataclass

from idmint.exceptions import InvalidIdentifierError
from idmint.generators import Generator
from idmint.identifiers import Identifier


@dataclass
class ValidationResult:
    """Identifier validation result."""

    valid: bool
    error: str | None = None
    warnings: list[str] | None = None
    identifier: Identifier | None = None

    def __post_init__(self) -> None:
        """Initialize warnings list."""
        if self.warnings is None:
            self.warnings = []


class IdentifierValidator:
    """Identifier validator using a specific generator."""

    def __init__(self, generator: Generator):
        """Initialize validator.

        Args:
            generator: Generator whose format values are checked against
        """
        self.generator = generator

    def validate(self, value: str) -> ValidationResult:
        """Validate an identifier.

        Args:
            value: Identifier string to validate

        Returns:
            Validation result carrying the parsed identifier when valid
        """
        if not self.generator.is_valid(value):
            return ValidationResult(
                valid=False,
                error=f"Invalid {self.generator.name} format: {value}",
            )

        try:
            identifier = self.generator.parse(value)
        except InvalidIdentifierError as e:
            return ValidationResult(valid=False, error=str(e))

        warnings = []
        if identifier.to_string() != value:
            warnings.append(f"Not in canonical form, expected: {identifier.to_string()}")

        return ValidationResult(valid=True, warnings=warnings, identifier=identifier)
