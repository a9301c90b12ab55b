"""
Typed addresses of gcode expressions.

An address is the value attached to a word. Four closed variants exist:

- Int32Address: signed 32-bit integer (X12, G92, E-3)
- UInt32Address: unsigned 32-bit integer (line numbers and checksums)
- Float32Address: single precision float, always rendered with one decimal (X2.0)
- StringAddress: double quoted text with "" escaping, for example P"say ""hi"" now"

Each variant parses text into a value and formats the value back into its
canonical text. sniff_address() applies the int -> float -> string precedence
used by the block parser.
"""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

import numpy as np

from gcodeblock.config import QUOTE_CHAR
from gcodeblock.utils.errors import (
    AddressError,
    AddressStringContainInvalidChars,
    AddressStringQuoteError,
    AddressStringTooShort,
    AddressValueError,
)

logger = logging.getLogger(__name__)

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_UINT_PATTERN = re.compile(r"[0-9]+")
_FLOAT_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

_INT32 = np.iinfo(np.int32)
_UINT32 = np.iinfo(np.uint32)
_FLOAT32_MAX = float(np.finfo(np.float32).max)

# Characters that may not appear inside a quoted string
CONTROL_CHARS = frozenset("\t\r\n")


@dataclass(frozen=True)
class Address(ABC):
    """Immutable typed address value."""

    value: Any
    kind: ClassVar[str] = "address"

    @classmethod
    @abstractmethod
    def parse(cls, text: str) -> "Address":
        """Parse address text into an address of this variant."""

    @classmethod
    @abstractmethod
    def format(cls, value: Any) -> str:
        """Canonical text of a value of this variant."""

    def to_string(self) -> str:
        return self.format(self.value)

    def __str__(self):
        return self.to_string()


def _check_integer(value: Any, bounds: np.iinfo, kind: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise AddressValueError(repr(value), kind)
    if not bounds.min <= int(value) <= bounds.max:
        raise AddressValueError(str(value), kind)
    return int(value)


@dataclass(frozen=True)
class Int32Address(Address):
    value: int
    kind: ClassVar[str] = "int32"

    def __post_init__(self):
        object.__setattr__(self, "value", _check_integer(self.value, _INT32, self.kind))

    @classmethod
    def parse(cls, text: str) -> "Int32Address":
        if not _INT_PATTERN.fullmatch(text):
            raise AddressValueError(text, cls.kind)
        return cls(int(text))

    @classmethod
    def format(cls, value: int) -> str:
        return str(int(value))


@dataclass(frozen=True)
class UInt32Address(Address):
    value: int
    kind: ClassVar[str] = "uint32"

    def __post_init__(self):
        object.__setattr__(self, "value", _check_integer(self.value, _UINT32, self.kind))

    @classmethod
    def parse(cls, text: str) -> "UInt32Address":
        if not _UINT_PATTERN.fullmatch(text):
            raise AddressValueError(text, cls.kind)
        return cls(int(text))

    @classmethod
    def format(cls, value: int) -> str:
        return str(int(value))


@dataclass(frozen=True)
class Float32Address(Address):
    """Single precision value; stored already rounded to float32."""

    value: float
    kind: ClassVar[str] = "float32"

    def __post_init__(self):
        value = self.value
        if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
            raise AddressValueError(repr(value), self.kind)
        value = float(value)
        if not np.isfinite(value) or abs(value) > _FLOAT32_MAX:
            raise AddressValueError(str(self.value), self.kind)
        object.__setattr__(self, "value", float(np.float32(value)))

    @classmethod
    def parse(cls, text: str) -> "Float32Address":
        if not _FLOAT_PATTERN.fullmatch(text):
            raise AddressValueError(text, cls.kind)
        return cls(float(text))

    @classmethod
    def format(cls, value: float) -> str:
        return f"{float(np.float32(value)):.1f}"


class _QuoteState(Enum):
    START = 0
    IN_QUOTE = 1
    SAW_QUOTE = 2


def validate_quoted(text: str) -> str:
    """
    Check a quoted string address and return its decoded content.

    Raises:
        AddressStringTooShort: Fewer than 2 characters
        AddressStringContainInvalidChars: Tab, CR or LF inside the quotes
        AddressStringQuoteError: Missing open quote, stray quote or unterminated string
    """
    if len(text) < 2:
        raise AddressStringTooShort(text)

    state = _QuoteState.START
    content: list[str] = []
    for ch in text:
        if state is _QuoteState.START:
            if ch != QUOTE_CHAR:
                raise AddressStringQuoteError(text, "missing opening quote")
            state = _QuoteState.IN_QUOTE
        elif state is _QuoteState.IN_QUOTE:
            if ch == QUOTE_CHAR:
                state = _QuoteState.SAW_QUOTE
            elif ch in CONTROL_CHARS:
                raise AddressStringContainInvalidChars(text)
            else:
                content.append(ch)
        else:
            if ch != QUOTE_CHAR:
                raise AddressStringQuoteError(text, "unescaped quote inside string")
            # "" pair
            content.append(QUOTE_CHAR)
            state = _QuoteState.IN_QUOTE

    if state is not _QuoteState.SAW_QUOTE:
        raise AddressStringQuoteError(text, "unterminated string")
    return "".join(content)


@dataclass(frozen=True)
class StringAddress(Address):
    """Quoted text, kept verbatim including the surrounding quotes."""

    value: str
    kind: ClassVar[str] = "string"

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise AddressValueError(repr(self.value), self.kind)
        validate_quoted(self.value)

    @classmethod
    def parse(cls, text: str) -> "StringAddress":
        return cls(text)

    @classmethod
    def format(cls, value: str) -> str:
        validate_quoted(value)
        return value

    @classmethod
    def quote(cls, content: str) -> "StringAddress":
        """Build an address from raw content, doubling embedded quotes."""
        escaped = content.replace(QUOTE_CHAR, QUOTE_CHAR * 2)
        return cls(f"{QUOTE_CHAR}{escaped}{QUOTE_CHAR}")

    @property
    def unquoted(self) -> str:
        return validate_quoted(self.value)


# Order matters: the first variant that accepts the text wins
SNIFF_ORDER: tuple[type[Address], ...] = (Int32Address, Float32Address, StringAddress)


def sniff_address(text: str) -> Address:
    """
    Parse address text trying int32, then float32, then quoted string.

    Raises:
        AddressError: The error of the last variant tried when none accepts the text
    """
    error: AddressError | None = None
    for variant in SNIFF_ORDER:
        try:
            return variant.parse(text)
        except AddressError as e:
            error = e
    logger.debug(f"No address variant accepts {text!r}: {error}")
    assert error is not None
    raise error
