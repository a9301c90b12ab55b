"""
Custom exception types for the gcodeblock parsing and checksum pipeline.
Every failure carries the offending value so callers can report which line
or field was rejected.
"""


class GcodeBlockError(ValueError):
    """Root of every error raised by gcodeblock."""

    prefix = "GCODE ERROR"

    def __init__(self, message: str):
        self.original_message = message
        super().__init__(f"{self.prefix}: {message}")

    def __str__(self):
        return f"{self.prefix}: {self.original_message}"


class WordInvalidValue(GcodeBlockError):
    """Word character outside A-Z and '*'."""

    prefix = "Word Error"

    def __init__(self, value):
        self.value = value
        super().__init__(f"invalid word value {value!r}, expected A-Z or '*'")


# ----- Address errors -----


class AddressError(GcodeBlockError):
    """Address text could not be turned into a typed value."""

    prefix = "Address Error"

    def __init__(self, text: str, message: str):
        self.text = text
        super().__init__(message)


class AddressStringTooShort(AddressError):
    def __init__(self, text: str):
        super().__init__(text, f"string address {text!r} is too short, need at least 2 characters")


class AddressStringContainInvalidChars(AddressError):
    def __init__(self, text: str):
        super().__init__(text, f"string address {text!r} contains control characters")


class AddressStringQuoteError(AddressError):
    """Quoting rule broken: missing open quote, stray quote or unterminated string."""

    def __init__(self, text: str, reason: str = "malformed quotes"):
        self.reason = reason
        super().__init__(text, f"string address {text!r}: {reason}")


class AddressValueError(AddressError):
    """Numeric text that does not fit the requested address type."""

    def __init__(self, text: str, kind: str):
        self.kind = kind
        super().__init__(text, f"{text!r} is not a valid {kind} address")


# ----- Block errors -----


class BlockError(GcodeBlockError):
    prefix = "Block Error"


class BlockMissingCommand(BlockError):
    def __init__(self, line: str = ""):
        self.line = line
        detail = f" in {line!r}" if line else ""
        super().__init__(f"command is required{detail}")


class BlockConfigurationNil(BlockError):
    """A builder setter received None."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"{field} must not be None")


class BlockConfigurationInvalid(BlockError):
    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"invalid {field}: {reason}")


class BlockParseAmbiguous(BlockError):
    """No address shape accepted the token."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"token {token!r} is not an int32, float32 or quoted string gcode")


class BlockLineNumberInvalid(BlockError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f"line number {token!r} must be a non-negative integer")


# ----- Checksum errors -----


class ChecksumError(GcodeBlockError):
    prefix = "Checksum Error"


class ChecksumUnavailable(ChecksumError):
    def __init__(self, line: str = ""):
        self.line = line
        super().__init__(f"block {line!r} has no checksum section")


class ChecksumComputationFailed(ChecksumError):
    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"failed to compute checksum: {cause}")
