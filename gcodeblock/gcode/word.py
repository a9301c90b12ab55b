"""
Command letter of a gcode expression.
"""

from dataclasses import dataclass

from gcodeblock.utils.errors import WordInvalidValue

VALID_WORDS = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZ*")


@dataclass(frozen=True)
class Word:
    """A validated gcode word: one of A-Z or '*'."""

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or len(self.value) != 1 or self.value not in VALID_WORDS:
            raise WordInvalidValue(self.value)

    @classmethod
    def validate(cls, value: "str | int | Word") -> "Word":
        """
        Build a Word from a character or a byte value.

        Args:
            value: One-character string, byte value (0..255) or an existing Word

        Returns:
            The validated Word

        Raises:
            WordInvalidValue: If the value is outside A-Z and '*'
        """
        if isinstance(value, Word):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            if not 0 <= value <= 0xFF:
                raise WordInvalidValue(value)
            value = chr(value)
        if not isinstance(value, str):
            raise WordInvalidValue(value)
        return cls(value)

    @property
    def byte(self) -> int:
        return ord(self.value)

    def to_string(self) -> str:
        return self.value

    def __str__(self):
        return self.value
