"""
Pytest configuration and shared fixtures for gcodeblock tests.
"""

import logging
import os
import sys

import pytest

# Add the parent directory to Python path so we can import the package modules
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from gcodeblock import GcodeFactory, SumChecksum, XorChecksum

logger = logging.getLogger(__name__)


class RecordingFactory(GcodeFactory):
    """GcodeFactory that remembers which constructor built each gcode."""

    def __init__(self):
        self.calls: list[tuple[str, str, object]] = []

    def new_gcode(self, word):
        self.calls.append(("gcode", word, None))
        return super().new_gcode(word)

    def new_addressable_gcode_int32(self, word, address):
        self.calls.append(("int32", word, address))
        return super().new_addressable_gcode_int32(word, address)

    def new_addressable_gcode_uint32(self, word, address):
        self.calls.append(("uint32", word, address))
        return super().new_addressable_gcode_uint32(word, address)

    def new_addressable_gcode_float32(self, word, address):
        self.calls.append(("float32", word, address))
        return super().new_addressable_gcode_float32(word, address)

    def new_addressable_gcode_string(self, word, address):
        self.calls.append(("string", word, address))
        return super().new_addressable_gcode_string(word, address)


@pytest.fixture
def factory() -> GcodeFactory:
    return GcodeFactory()


@pytest.fixture
def recording_factory() -> RecordingFactory:
    return RecordingFactory()


@pytest.fixture
def xor_engine() -> XorChecksum:
    return XorChecksum()


@pytest.fixture
def sum_engine() -> SumChecksum:
    return SumChecksum()


@pytest.fixture
def sample_gcodes(factory):
    """Sections of the line 'N4 G92 E0*67 ;comentario'."""
    return {
        "line_number": factory.new_addressable_gcode_uint32("N", 4),
        "command": factory.new_addressable_gcode_int32("G", 92),
        "parameters": [factory.new_addressable_gcode_int32("E", 0)],
        "checksum": factory.new_addressable_gcode_uint32("*", 67),
        "comment": ";comentario",
    }
