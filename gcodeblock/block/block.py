"""
Gcode block: one line of a gcode file.

A block is made of sections, some optional:

- line number: 'N' word with an unsigned address. Optional.
- command: first expression and main meaning of the block. Required.
- parameters: the rest of the expressions, in source order. Can be empty.
- checksum: '*' word with an unsigned address, integrity check of the line.
- comment: trailing ';' text, kept verbatim; a missing leading ';' is added. Can be empty.

Blocks are built with BlockBuilder or parsed from text with Block.parse, and
can be exported back to text or have their checksum computed and verified.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence

from gcodeblock.checksum import HashEngine, new_engine
from gcodeblock.config import BLOCK_SEPARATOR, CHECKSUM_WORD, COMMENT_CHAR, LINE_NUMBER_WORD
from gcodeblock.gcode import (
    AddressableGcoder,
    GcodeFactory,
    GcoderFactory,
    Gcoder,
    UInt32Address,
)
from gcodeblock.utils.errors import (
    BlockConfigurationInvalid,
    BlockConfigurationNil,
    BlockMissingCommand,
    ChecksumComputationFailed,
    ChecksumUnavailable,
)

logger = logging.getLogger(__name__)

_FORMAT_PLACEHOLDER = re.compile(r"%([lcpkm%])")


def _check_keyed(gcode: Gcoder, word: str, field: str) -> None:
    if not isinstance(gcode, AddressableGcoder):
        raise BlockConfigurationInvalid(field, f"{gcode} has no address")
    if gcode.word().to_string() != word:
        raise BlockConfigurationInvalid(field, f"{gcode} must use word '{word}'")
    if not isinstance(gcode.typed_address(), UInt32Address):
        raise BlockConfigurationInvalid(field, f"{gcode} must have an unsigned address")


class Block:
    """Structured representation of a single gcode line."""

    def __init__(
        self,
        command: Gcoder,
        *,
        line_number: AddressableGcoder[UInt32Address] | None = None,
        parameters: Sequence[Gcoder] = (),
        checksum: AddressableGcoder[UInt32Address] | None = None,
        comment: str = "",
        hash_engine: HashEngine | None = None,
        factory: GcoderFactory | None = None,
    ):
        if command is None:
            raise BlockMissingCommand()
        if not isinstance(command, Gcoder):
            raise BlockConfigurationInvalid("command", f"{command!r} is not a gcode")
        self._command = command
        self._line_number: AddressableGcoder[UInt32Address] | None = None
        self._parameters: tuple[Gcoder, ...] = ()
        self._checksum: AddressableGcoder[UInt32Address] | None = None
        self._comment = ""
        self._hash: HashEngine = new_engine()
        self._factory: GcoderFactory = GcodeFactory()

        if hash_engine is not None:
            self._set_hash_engine(hash_engine)
        if factory is not None:
            self._set_factory(factory)
        if line_number is not None:
            self._set_line_number(line_number)
        self._set_parameters(parameters)
        if checksum is not None:
            self._set_checksum(checksum)
        self._set_comment(comment)

    # ----- setters used by the constructor and BlockBuilder -----

    def _set_line_number(self, line_number: AddressableGcoder[UInt32Address]) -> None:
        _check_keyed(line_number, LINE_NUMBER_WORD, "line_number")
        self._line_number = line_number

    def _set_parameters(self, parameters: Sequence[Gcoder]) -> None:
        params = tuple(parameters)
        for p in params:
            if not isinstance(p, Gcoder):
                raise BlockConfigurationInvalid("parameters", f"{p!r} is not a gcode")
        self._parameters = params

    def _set_checksum(self, checksum: AddressableGcoder[UInt32Address]) -> None:
        _check_keyed(checksum, CHECKSUM_WORD, "checksum")
        self._checksum = checksum

    def _set_comment(self, comment: str) -> None:
        if not isinstance(comment, str):
            raise BlockConfigurationInvalid("comment", f"{comment!r} is not a string")
        # Stored with its leading ";" so the exported line parses back
        if comment and not comment.startswith(COMMENT_CHAR):
            comment = COMMENT_CHAR + comment
        self._comment = comment

    def _set_hash_engine(self, hash_engine: HashEngine) -> None:
        if not isinstance(hash_engine, HashEngine):
            raise BlockConfigurationInvalid("hash_engine", f"{hash_engine!r} lacks reset/update/digest")
        self._hash = hash_engine

    def _set_factory(self, factory: GcoderFactory) -> None:
        if not isinstance(factory, GcoderFactory):
            raise BlockConfigurationInvalid("factory", f"{factory!r} is not a GcoderFactory")
        self._factory = factory

    # ----- accessors -----

    def line_number(self) -> AddressableGcoder[UInt32Address] | None:
        return self._line_number

    def command(self) -> Gcoder:
        return self._command

    def parameters(self) -> tuple[Gcoder, ...]:
        return self._parameters

    def checksum(self) -> AddressableGcoder[UInt32Address] | None:
        return self._checksum

    def comment(self) -> str:
        return self._comment

    def hash_engine(self) -> HashEngine:
        return self._hash

    def factory(self) -> GcoderFactory:
        return self._factory

    # ----- export -----

    def to_line(self) -> str:
        """Line number, command and parameters: the text covered by the checksum."""
        values = []
        if self._line_number is not None:
            values.append(self._line_number.to_string())
        values.append(self._command.to_string())
        values.extend(p.to_string() for p in self._parameters)
        return BLOCK_SEPARATOR.join(values)

    def to_line_with_check(self) -> str:
        line = self.to_line()
        if self._checksum is not None:
            line = BLOCK_SEPARATOR.join([line, self._checksum.to_string()])
        return line

    def to_line_with_check_and_comments(self) -> str:
        line = self.to_line_with_check()
        if self._comment:
            line = BLOCK_SEPARATOR.join([line, self._comment])
        return line

    def to_string(self) -> str:
        return self.to_line_with_check_and_comments()

    def format(self, template: str) -> str:
        """
        Render the block through a template.

        Placeholders:
            %l line number, %c command, %p parameters, %k checksum,
            %m comment, %% a literal '%'. Missing sections render empty.

        Example:
            block.format("%l %c %p%k %m") -> "N4 G92 E0*67 ;comentario"
        """

        def section(match: re.Match) -> str:
            key = match.group(1)
            if key == "l":
                return self._line_number.to_string() if self._line_number is not None else ""
            if key == "c":
                return self._command.to_string()
            if key == "p":
                return BLOCK_SEPARATOR.join(p.to_string() for p in self._parameters)
            if key == "k":
                return self._checksum.to_string() if self._checksum is not None else ""
            if key == "m":
                return self._comment
            return "%"

        return _FORMAT_PLACEHOLDER.sub(section, template)

    # ----- checksum -----

    def calculate_checksum(self) -> AddressableGcoder[UInt32Address]:
        """
        Compute the checksum of to_line() with the block's hash engine.

        Raises:
            ChecksumComputationFailed: The hash engine failed or returned an empty digest
        """
        line = self.to_line()
        try:
            self._hash.reset()
            self._hash.update(line.encode("utf-8"))
            value = self._hash.digest()[0]
        except Exception as e:
            logger.debug(f"Checksum engine {type(self._hash).__name__} failed on {line!r}: {e}")
            raise ChecksumComputationFailed(e) from e
        return self._factory.new_addressable_gcode_uint32(CHECKSUM_WORD, int(value))

    def update_checksum(self) -> None:
        """Replace the stored checksum with a fresh calculation."""
        self._checksum = self.calculate_checksum()

    def verify_checksum(self) -> bool:
        """
        Compare the stored checksum with a fresh calculation.

        Raises:
            ChecksumUnavailable: The block has no checksum section
        """
        if self._checksum is None:
            raise ChecksumUnavailable(self.to_line())
        return self._checksum.compare(self.calculate_checksum())

    # ----- parsing -----

    @classmethod
    def parse(
        cls,
        text: str,
        hash_engine: HashEngine | None = None,
        factory: GcoderFactory | None = None,
    ) -> Block:
        """Parse one gcode line, see gcodeblock.block.parser.parse."""
        from .parser import parse

        return parse(text, hash_engine, factory)

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f"Block({self.to_string()!r})"


class BlockBuilder:
    """
    Stage optional sections of a block and build it in one step.

    Each with_* call rejects None straight away; build() applies the staged
    actions in registration order to a fresh Block and returns it only when
    every action succeeded.

    Example:
        block = (
            BlockBuilder(command)
            .with_line_number(line_number)
            .with_parameters([x, y])
            .build()
        )
    """

    def __init__(self, command: Gcoder | None):
        self._command = command
        self._actions: list[Callable[[Block], None]] = []

    def _stage(self, field: str, value, action: Callable[[Block], None]) -> BlockBuilder:
        if value is None:
            raise BlockConfigurationNil(field)
        self._actions.append(action)
        return self

    def with_line_number(self, line_number: AddressableGcoder[UInt32Address]) -> BlockBuilder:
        return self._stage("line_number", line_number, lambda b: b._set_line_number(line_number))

    def with_parameters(self, parameters: Sequence[Gcoder]) -> BlockBuilder:
        return self._stage("parameters", parameters, lambda b: b._set_parameters(parameters))

    def with_checksum(self, checksum: AddressableGcoder[UInt32Address]) -> BlockBuilder:
        return self._stage("checksum", checksum, lambda b: b._set_checksum(checksum))

    def with_comment(self, comment: str) -> BlockBuilder:
        return self._stage("comment", comment, lambda b: b._set_comment(comment))

    def with_hash_engine(self, hash_engine: HashEngine) -> BlockBuilder:
        return self._stage("hash_engine", hash_engine, lambda b: b._set_hash_engine(hash_engine))

    def with_factory(self, factory: GcoderFactory) -> BlockBuilder:
        return self._stage("factory", factory, lambda b: b._set_factory(factory))

    def build(self) -> Block:
        """
        Raises:
            BlockMissingCommand: No command was given
            BlockConfigurationInvalid: A staged section broke a block invariant
        """
        block = Block(self._command)
        for action in self._actions:
            action(block)
        logger.debug(f"Built block {block.to_string()!r}")
        return block
