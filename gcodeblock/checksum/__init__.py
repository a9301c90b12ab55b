"""
Checksum engines for gcode blocks.
"""

from .engines import ENGINES, HashEngine, SumChecksum, XorChecksum, new_engine

__all__ = ["HashEngine", "XorChecksum", "SumChecksum", "ENGINES", "new_engine"]
