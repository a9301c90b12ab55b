"""
Gcode line parser.

Turns one line of text into a Block:

1. the comment (from the first ';' outside a quoted string) and a trailing
   '*<digits>' checksum are split off the raw text
2. the rest is trimmed, uppercased, control characters become spaces and
   whitespace runs collapse to one space
3. the line is split on spaces outside quoted strings
4. each token is a word (first character) plus an address sniffed as int32,
   then float32, then quoted string
5. a leading 'N' token is the line number, the next token is the command and
   the rest are parameters
"""

import logging
import re

from gcodeblock.checksum import HashEngine
from gcodeblock.config import (
    BLOCK_SEPARATOR,
    CHECKSUM_WORD,
    COMMENT_CHAR,
    LINE_NUMBER_WORD,
    QUOTE_CHAR,
)
from gcodeblock.gcode import (
    Address,
    AddressableGcoder,
    Float32Address,
    GcodeFactory,
    GcoderFactory,
    Gcoder,
    Int32Address,
    StringAddress,
    UInt32Address,
    sniff_address,
)
from gcodeblock.utils.errors import (
    AddressError,
    BlockLineNumberInvalid,
    BlockMissingCommand,
    BlockParseAmbiguous,
)

from .block import Block

logger = logging.getLogger(__name__)

# Compiled once, never mutated
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_WHITESPACE_RUN = re.compile(r"\s{2,}")
_TRAILING_CHECKSUM = re.compile(r"\s?" + re.escape(CHECKSUM_WORD) + r"([0-9]+)\s*$")


def _find_unquoted(text: str, char: str) -> int:
    in_quote = False
    for i, ch in enumerate(text):
        if ch == QUOTE_CHAR:
            in_quote = not in_quote
        elif ch == char and not in_quote:
            return i
    return -1


def split_sections(text: str) -> tuple[str, UInt32Address | None, str]:
    """
    Split the comment and the checksum off a raw line.

    Returns:
        (body, checksum address or None, comment). The comment keeps its
        leading ';' and original case.
    """
    comment = ""
    idx = _find_unquoted(text, COMMENT_CHAR)
    if idx >= 0:
        comment = text[idx:].rstrip()
        text = text[:idx]

    checksum = None
    body = text.rstrip()
    match = _TRAILING_CHECKSUM.search(body)
    if match:
        checksum = UInt32Address.parse(match.group(1))
        body = body[: match.start()]
    return body, checksum, comment


def normalize(text: str) -> str:
    """Trim, uppercase, blank out control characters and collapse whitespace."""
    text = text.strip().upper()
    text = _CONTROL_CHARS.sub(" ", text)
    text = _WHITESPACE_RUN.sub(" ", text)
    return text.strip()


def tokenize(text: str) -> list[str]:
    """Split a normalized line on spaces that are not inside a quoted string."""
    tokens: list[str] = []
    current: list[str] = []
    in_quote = False
    for ch in text:
        if ch == QUOTE_CHAR:
            in_quote = not in_quote
        if ch == BLOCK_SEPARATOR and not in_quote:
            if current:
                tokens.append("".join(current))
                current = []
            continue
        current.append(ch)
    if current:
        tokens.append("".join(current))
    return tokens


# Factory constructor for each sniffed address variant
ADDRESS_BUILDERS: dict[type[Address], str] = {
    Int32Address: "new_addressable_gcode_int32",
    Float32Address: "new_addressable_gcode_float32",
    StringAddress: "new_addressable_gcode_string",
}


def parse_token(token: str, factory: GcoderFactory) -> Gcoder:
    """
    Build the gcode of a single token through the factory.

    The address is sniffed with sniff_address (int32, then float32, then
    quoted string) and handed to the matching factory constructor.

    Raises:
        WordInvalidValue: First character is not a valid word
        BlockParseAmbiguous: The address is neither int32, float32 nor a quoted string
    """
    word, address = token[0], token[1:]
    if not address:
        return factory.new_gcode(word)

    try:
        sniffed = sniff_address(address)
    except AddressError as e:
        raise BlockParseAmbiguous(token) from e
    build = getattr(factory, ADDRESS_BUILDERS[type(sniffed)])
    return build(word, sniffed.value)


def _line_number(gcode: Gcoder, token: str, factory: GcoderFactory) -> AddressableGcoder[UInt32Address]:
    if not isinstance(gcode, AddressableGcoder) or not isinstance(gcode.typed_address(), Int32Address):
        raise BlockLineNumberInvalid(token)
    value = gcode.address()
    if value < 0:
        raise BlockLineNumberInvalid(token)
    return factory.new_addressable_gcode_uint32(LINE_NUMBER_WORD, value)


def parse(
    text: str,
    hash_engine: HashEngine | None = None,
    factory: GcoderFactory | None = None,
) -> Block:
    """
    Parse a single gcode line into a Block.

    Args:
        text: Raw line, for example "N4 G92 E0*67 ;comentario"
        hash_engine: Checksum engine owned by the block (default from config)
        factory: Gcode factory (default GcodeFactory)

    Returns:
        The parsed Block

    Raises:
        WordInvalidValue: A token starts with an invalid word
        BlockParseAmbiguous: A token address matches no address shape
        BlockLineNumberInvalid: The 'N' token is not a non-negative integer
        BlockMissingCommand: Nothing but a line number, checksum or comment
    """
    if factory is None:
        factory = GcodeFactory()

    body, checksum_address, comment = split_sections(text)
    tokens = tokenize(normalize(body))
    logger.trace(  # type: ignore[attr-defined]
        "parse line=%r tokens=%s checksum=%s comment=%r", text, tokens, checksum_address, comment
    )

    try:
        gcodes = [parse_token(token, factory) for token in tokens]
    except Exception as e:
        logger.debug(f"Failed to parse {text!r}: {e}")
        raise

    line_number = None
    if gcodes and gcodes[0].word().to_string() == LINE_NUMBER_WORD:
        line_number = _line_number(gcodes[0], tokens[0], factory)
        gcodes = gcodes[1:]

    if not gcodes:
        raise BlockMissingCommand(text)

    checksum = None
    if checksum_address is not None:
        checksum = factory.new_addressable_gcode_uint32(CHECKSUM_WORD, checksum_address.value)

    return Block(
        gcodes[0],
        line_number=line_number,
        parameters=gcodes[1:],
        checksum=checksum,
        comment=comment,
        hash_engine=hash_engine,
        factory=factory,
    )
