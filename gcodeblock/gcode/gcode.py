"""
Gcode expressions: a word with an optional typed address.

Gcoder is the capability every expression offers (has_address, word,
to_string); AddressableGcoder adds access to the address and structural
comparison. Gcode and AddressableGcode are the concrete immutable values.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from .address import Address
from .word import Word

A = TypeVar("A", bound=Address)


class Gcoder(ABC):
    """Read-only view of a gcode expression."""

    __slots__ = ()

    @abstractmethod
    def has_address(self) -> bool:
        """True when the expression carries an address."""

    @abstractmethod
    def word(self) -> Word:
        """Command letter of the expression."""

    @abstractmethod
    def to_string(self) -> str:
        """Canonical text of the expression."""

    def __str__(self):
        return self.to_string()


class AddressableGcoder(Gcoder, Generic[A]):
    """Gcoder that carries a typed address."""

    __slots__ = ()

    @abstractmethod
    def address(self) -> Any:
        """Python value of the address."""

    @abstractmethod
    def typed_address(self) -> A:
        """The Address object, variant included."""

    @abstractmethod
    def compare(self, other: Gcoder) -> bool:
        """Structural equality of word and address."""


class Gcode(Gcoder):
    """Unaddressable expression, for example 'G' or 'X' on its own."""

    __slots__ = ("_word",)

    def __init__(self, word: "str | int | Word"):
        self._word = Word.validate(word)

    def has_address(self) -> bool:
        return False

    def word(self) -> Word:
        return self._word

    def to_string(self) -> str:
        return self._word.to_string()

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._word == other._word

    def __hash__(self):
        return hash((type(self), self._word))

    def __repr__(self):
        return f"Gcode({self.to_string()!r})"


class AddressableGcode(AddressableGcoder[A]):
    """Word plus address, for example 'X2.0', 'N7' or 'M117 "hi"'."""

    __slots__ = ("_word", "_address")

    def __init__(self, word: "str | int | Word", address: A):
        self._word = Word.validate(word)
        if not isinstance(address, Address):
            raise TypeError(f"address must be an Address, got {type(address).__name__}")
        self._address = address

    def has_address(self) -> bool:
        return True

    def word(self) -> Word:
        return self._word

    def address(self) -> Any:
        return self._address.value

    def typed_address(self) -> A:
        return self._address

    def compare(self, other: Gcoder) -> bool:
        if not isinstance(other, AddressableGcoder):
            return False
        return self._word == other.word() and self._address == other.typed_address()

    def with_address(self, value: Any) -> "AddressableGcode[A]":
        """Copy of this expression with a new value of the same address variant."""
        return AddressableGcode(self._word, type(self._address)(value))

    def to_string(self) -> str:
        return f"{self._word.to_string()}{self._address.to_string()}"

    def __eq__(self, other):
        if not isinstance(other, AddressableGcode):
            return NotImplemented
        return self.compare(other)

    def __hash__(self):
        return hash((self._word, self._address))

    def __repr__(self):
        return f"AddressableGcode({self.to_string()!r}, {type(self._address).__name__})"
