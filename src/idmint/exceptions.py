"""Custom exceptions with helpful error messages."""


class MintError(Exception):
    """Base exception for idmint errors."""

    pass


# ---------------------------------------------------------------------------
# Configuration errors (raised at construction time)
# ---------------------------------------------------------------------------


class ConfigurationError(MintError, ValueError):
    """Generator or engine was configured with invalid parameters."""

    pass


class AlphabetError(ConfigurationError):
    """Alphabet does not satisfy the engine's requirements."""

    pass


class AlphabetTooShortError(AlphabetError):
    """Alphabet has fewer unique characters than required."""

    def __init__(self, minimum: int):
        self.minimum = minimum
        super().__init__(f"Alphabet length must be at least {minimum}")


class AlphabetContainsDuplicatesError(AlphabetError):
    """Alphabet repeats a character."""

    def __init__(self) -> None:
        super().__init__("Alphabet must not contain duplicate characters")


class AlphabetContainsMultibyteError(AlphabetError):
    """Alphabet contains characters that are not single-byte."""

    def __init__(self) -> None:
        super().__init__("Alphabet must not contain multibyte characters")


class AlphabetContainsSpacesError(AlphabetError):
    """Alphabet contains a space character."""

    def __init__(self) -> None:
        super().__init__("Alphabet must not contain spaces")


class MinLengthOutOfRangeError(ConfigurationError):
    """Minimum length is outside the allowed range."""

    def __init__(self, minimum: int, maximum: int | None = None):
        self.minimum = minimum
        self.maximum = maximum
        if maximum is None:
            message = f"Minimum length must be at least {minimum}"
        else:
            message = f"Minimum length must be between {minimum} and {maximum}"
        super().__init__(message)


class InvalidNodeIdError(ConfigurationError):
    """Snowflake node id does not fit in its bit field."""

    def __init__(self, node_id: int, max_node_id: int):
        self.node_id = node_id
        self.max_node_id = max_node_id
        super().__init__(f"Node ID must be between 0 and {max_node_id}, got: {node_id}")


class InvalidPrefixError(ConfigurationError):
    """TypeID prefix does not match the prefix grammar."""

    def __init__(self, prefix: str):
        self.prefix = prefix
        super().__init__(
            f"Invalid TypeID prefix: '{prefix}'.\n\n"
            f"Prefixes must be at most 63 lowercase letters (a-z), may contain "
            f"underscores, and must not start or end with an underscore."
        )


class InvalidLengthError(ConfigurationError):
    """Requested identifier length is outside the supported range."""

    def __init__(self, length: int, minimum: int, maximum: int | None = None):
        self.length = length
        if maximum is None:
            message = f"Length must be at least {minimum}, got: {length}"
        else:
            message = f"Length must be between {minimum} and {maximum}, got: {length}"
        super().__init__(message)


class MissingMathBackendError(ConfigurationError):
    """Requested arbitrary-precision backend is not available."""

    def __init__(self, backend: str, available: list[str]):
        self.backend = backend
        super().__init__(
            f"Math backend '{backend}' is not available. "
            f"Available: {', '.join(available)}"
        )


class UnknownGeneratorError(ConfigurationError):
    """No generator is registered for the requested identifier type."""

    def __init__(self, name: str, available: list[str]):
        self.name = name
        super().__init__(
            f"Unknown identifier type: '{name}'.\n\n"
            f"Available: {', '.join(available)}"
        )


# ---------------------------------------------------------------------------
# Format errors (raised by parse)
# ---------------------------------------------------------------------------


class InvalidIdentifierError(MintError, ValueError):
    """Value could not be parsed as an identifier of the expected type."""

    type_name = "identifier"

    def __init__(self, value: str):
        self.value = value
        super().__init__(f'Invalid {self.type_name} format: "{value}"')


class InvalidUuidFormatError(InvalidIdentifierError):
    type_name = "UUID"


class InvalidUlidFormatError(InvalidIdentifierError):
    type_name = "ULID"


class InvalidSnowflakeFormatError(InvalidIdentifierError):
    type_name = "Snowflake"


class InvalidKsuidFormatError(InvalidIdentifierError):
    type_name = "KSUID"


class InvalidTypeIdFormatError(InvalidIdentifierError):
    type_name = "TypeID"


class InvalidXidFormatError(InvalidIdentifierError):
    type_name = "XID"


class InvalidObjectIdFormatError(InvalidIdentifierError):
    type_name = "ObjectID"


class InvalidPushIdFormatError(InvalidIdentifierError):
    type_name = "PushID"


class InvalidTimeflakeFormatError(InvalidIdentifierError):
    type_name = "Timeflake"


class InvalidCuid2FormatError(InvalidIdentifierError):
    type_name = "CUID2"


class InvalidNanoIdFormatError(InvalidIdentifierError):
    type_name = "NanoID"


class InvalidSqidFormatError(InvalidIdentifierError):
    type_name = "Sqid"


class InvalidHashidFormatError(InvalidIdentifierError):
    type_name = "Hashid"


# ---------------------------------------------------------------------------
# Operational errors (raised while generating)
# ---------------------------------------------------------------------------


class GeneratorError(MintError, RuntimeError):
    """Generator could not produce an identifier."""

    pass


class ClockMovedBackwardsError(GeneratorError):
    """System clock went backwards between two generate() calls."""

    def __init__(self, last_timestamp: int, current_timestamp: int):
        self.last_timestamp = last_timestamp
        self.current_timestamp = current_timestamp
        super().__init__(
            f"Clock moved backwards. Refusing to generate ID for "
            f"{last_timestamp - current_timestamp} milliseconds "
            f"(last: {last_timestamp}, current: {current_timestamp})"
        )


class ClockBeforeEpochError(GeneratorError):
    """System clock reads earlier than the configured epoch."""

    def __init__(self, epoch: int, current_timestamp: int):
        self.epoch = epoch
        self.current_timestamp = current_timestamp
        super().__init__(
            f"Clock is {epoch - current_timestamp} milliseconds before the epoch "
            f"(epoch: {epoch}, current: {current_timestamp}).\n\n"
            f"Suggestions:\n"
            f"1. Use an epoch in the past\n"
            f"2. Check the system clock"
        )


class MaxRegenerationAttemptsError(GeneratorError):
    """Blocklist avoidance gave up after trying every offset."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(
            f"Reached max attempts ({attempts}) to re-generate the ID.\n\n"
            f"Suggestions:\n"
            f"1. Use a longer alphabet\n"
            f"2. Remove short words from the blocklist"
        )


class NumberOutOfRangeError(GeneratorError, ValueError):
    """Number cannot be encoded by the engine."""

    def __init__(self, max_value: int):
        self.max_value = max_value
        super().__init__(f"Encoding supports numbers between 0 and {max_value}")
