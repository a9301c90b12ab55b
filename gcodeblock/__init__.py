"""
gcodeblock Python Package

Parse single G-code lines into structured, round-trippable blocks, export them
back to text and compute or verify their checksum.

Key components:
- Block / BlockBuilder: structured gcode line and its validating builder
- parse: text line -> Block
- Word, Int32Address, UInt32Address, Float32Address, StringAddress: typed values
- Gcode / AddressableGcode: word with an optional address
- GcoderFactory / GcodeFactory: construction surface used by the parser
- XorChecksum / SumChecksum: checksum engines
"""

from ._version import __version__
from .block import Block, BlockBuilder, parse
from .checksum import HashEngine, SumChecksum, XorChecksum, new_engine
from .gcode import (
    Address,
    AddressableGcode,
    AddressableGcoder,
    Float32Address,
    Gcode,
    GcodeFactory,
    Gcoder,
    GcoderFactory,
    Int32Address,
    StringAddress,
    UInt32Address,
    Word,
    sniff_address,
)
from .utils.errors import (
    AddressError,
    AddressStringContainInvalidChars,
    AddressStringQuoteError,
    AddressStringTooShort,
    AddressValueError,
    BlockConfigurationInvalid,
    BlockConfigurationNil,
    BlockError,
    BlockLineNumberInvalid,
    BlockMissingCommand,
    BlockParseAmbiguous,
    ChecksumComputationFailed,
    ChecksumError,
    ChecksumUnavailable,
    GcodeBlockError,
    WordInvalidValue,
)

__all__ = [
    "__version__",
    "Block",
    "BlockBuilder",
    "parse",
    "HashEngine",
    "XorChecksum",
    "SumChecksum",
    "new_engine",
    "Word",
    "Address",
    "Int32Address",
    "UInt32Address",
    "Float32Address",
    "StringAddress",
    "sniff_address",
    "Gcoder",
    "AddressableGcoder",
    "Gcode",
    "AddressableGcode",
    "GcoderFactory",
    "GcodeFactory",
    "GcodeBlockError",
    "WordInvalidValue",
    "AddressError",
    "AddressStringTooShort",
    "AddressStringContainInvalidChars",
    "AddressStringQuoteError",
    "AddressValueError",
    "BlockError",
    "BlockMissingCommand",
    "BlockConfigurationNil",
    "BlockConfigurationInvalid",
    "BlockParseAmbiguous",
    "BlockLineNumberInvalid",
    "ChecksumError",
    "ChecksumUnavailable",
    "ChecksumComputationFailed",
]
