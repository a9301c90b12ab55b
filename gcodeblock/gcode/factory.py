"""
Construction surface for gcode expressions.

The parser and Block only build expressions through a GcoderFactory, so an
alternate validation policy or a test double can be swapped in.
"""

from abc import ABC, abstractmethod

from .address import Float32Address, Int32Address, StringAddress, UInt32Address
from .gcode import AddressableGcode, AddressableGcoder, Gcode, Gcoder
from .word import Word


class GcoderFactory(ABC):
    """One constructor per concrete gcode shape."""

    @abstractmethod
    def new_gcode(self, word: "str | int | Word") -> Gcoder: ...

    @abstractmethod
    def new_addressable_gcode_int32(
        self, word: "str | int | Word", address: int
    ) -> AddressableGcoder[Int32Address]: ...

    @abstractmethod
    def new_addressable_gcode_uint32(
        self, word: "str | int | Word", address: int
    ) -> AddressableGcoder[UInt32Address]: ...

    @abstractmethod
    def new_addressable_gcode_float32(
        self, word: "str | int | Word", address: float
    ) -> AddressableGcoder[Float32Address]: ...

    @abstractmethod
    def new_addressable_gcode_string(
        self, word: "str | int | Word", address: str
    ) -> AddressableGcoder[StringAddress]: ...


class GcodeFactory(GcoderFactory):
    """Default factory building Gcode and AddressableGcode values."""

    def new_gcode(self, word):
        return Gcode(word)

    def new_addressable_gcode_int32(self, word, address):
        return AddressableGcode(word, Int32Address(address))

    def new_addressable_gcode_uint32(self, word, address):
        return AddressableGcode(word, UInt32Address(address))

    def new_addressable_gcode_float32(self, word, address):
        return AddressableGcode(word, Float32Address(address))

    def new_addressable_gcode_string(self, word, address):
        return AddressableGcode(word, StringAddress(address))
