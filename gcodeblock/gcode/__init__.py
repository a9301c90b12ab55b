"""
Gcode expression model

Main components:
- word.py: command letter validation
- address.py: typed addresses (int32, uint32, float32, quoted string)
- gcode.py: Gcode / AddressableGcode values and their capability interfaces
- factory.py: construction surface used by the block parser
"""

from .address import (
    Address,
    Float32Address,
    Int32Address,
    StringAddress,
    UInt32Address,
    sniff_address,
)
from .factory import GcodeFactory, GcoderFactory
from .gcode import AddressableGcode, AddressableGcoder, Gcode, Gcoder
from .word import Word

__all__ = [
    "Address",
    "Int32Address",
    "UInt32Address",
    "Float32Address",
    "StringAddress",
    "sniff_address",
    "Word",
    "Gcoder",
    "AddressableGcoder",
    "Gcode",
    "AddressableGcode",
    "GcoderFactory",
    "GcodeFactory",
]
