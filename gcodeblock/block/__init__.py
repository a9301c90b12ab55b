"""
Gcode block entity and line parser

Main components:
- block.py: Block entity, export and checksum handling, BlockBuilder
- parser.py: normalization, tokenization and parsing of a single line
"""

from .block import Block, BlockBuilder
from .parser import normalize, parse, parse_token, split_sections, tokenize

__all__ = [
    "Block",
    "BlockBuilder",
    "parse",
    "parse_token",
    "normalize",
    "tokenize",
    "split_sections",
]
