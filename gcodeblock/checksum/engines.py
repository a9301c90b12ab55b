"""
Byte-accumulating hash engines used for block checksums.

An engine follows the small reset / update / digest protocol. Blocks own one
engine each and reset it before every computation, so engines are not
thread safe and must not be shared between blocks used concurrently.
"""

import logging
from typing import Protocol, runtime_checkable

import numpy as np

from gcodeblock.config import DEFAULT_CHECKSUM

logger = logging.getLogger(__name__)

__all__ = [
    "HashEngine",
    "XorChecksum",
    "SumChecksum",
    "ENGINES",
    "new_engine",
]


@runtime_checkable
class HashEngine(Protocol):
    """Accumulates bytes and yields a digest."""

    def reset(self) -> None: ...

    def update(self, data: bytes) -> None: ...

    def digest(self) -> bytes: ...


def _as_array(data: bytes | bytearray | memoryview) -> np.ndarray:
    return np.frombuffer(bytes(data), dtype=np.uint8)


class XorChecksum:
    """
    RepRap style checksum: XOR of every byte of the line.

    Example:
        "N7 G1 X2.0 Y2.0 F3000.0" -> 85
    """

    digest_size = 1

    def __init__(self):
        self._acc = 0

    def reset(self) -> None:
        self._acc = 0

    def update(self, data: bytes) -> None:
        arr = _as_array(data)
        if arr.size:
            self._acc ^= int(np.bitwise_xor.reduce(arr))

    def digest(self) -> bytes:
        return bytes([self._acc & 0xFF])


class SumChecksum:
    """Sum of every byte of the line, modulo 256."""

    digest_size = 1

    def __init__(self):
        self._acc = 0

    def reset(self) -> None:
        self._acc = 0

    def update(self, data: bytes) -> None:
        arr = _as_array(data)
        self._acc = (self._acc + int(arr.sum(dtype=np.uint64))) & 0xFF

    def digest(self) -> bytes:
        return bytes([self._acc])


ENGINES: dict[str, type] = {
    "xor": XorChecksum,
    "sum": SumChecksum,
}


def new_engine(name: str | None = None) -> HashEngine:
    """
    Instantiate a checksum engine by name.

    Args:
        name: "xor" or "sum"; defaults to DEFAULT_CHECKSUM

    Raises:
        ValueError: Unknown engine name
    """
    key = (name or DEFAULT_CHECKSUM).strip().lower()
    try:
        engine_cls = ENGINES[key]
    except KeyError:
        raise ValueError(f"Unknown checksum engine '{name}', expected one of {sorted(ENGINES)}") from None
    logger.debug(f"Using checksum engine '{key}'")
    return engine_cls()
