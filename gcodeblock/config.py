"""
Central configuration for gcodeblock tunables and shared constants.
"""

import logging
import os

TRACE: int = 5
logging.addLevelName(TRACE, "TRACE")
# Add Logger.trace if missing
if not hasattr(logging.Logger, "trace"):

    def _trace(self, msg, *args, **kwargs):
        if self.isEnabledFor(TRACE):
            self._log(TRACE, msg, args, **kwargs)

    logging.Logger.trace = _trace  # type: ignore[attr-defined]
    logging.TRACE = TRACE  # type: ignore[attr-defined]

TRACE_ENABLED = str(os.getenv("GCODEBLOCK_TRACE", "0")).lower() in ("1", "true", "yes", "on")

logger = logging.getLogger(__name__)

# Block line layout
BLOCK_SEPARATOR: str = " "
LINE_NUMBER_WORD: str = "N"
CHECKSUM_WORD: str = "*"
COMMENT_CHAR: str = ";"
QUOTE_CHAR: str = '"'

# Checksum engine used when a block is built or parsed without one ("xor" or "sum")
DEFAULT_CHECKSUM: str = os.getenv("GCODEBLOCK_CHECKSUM", "xor").strip().lower()

LOG_LEVEL_DEFAULT: str = os.getenv("GCODEBLOCK_LOG_LEVEL", "WARNING").strip().upper()


def setup_logging(level: str | int | None = None) -> None:
    """
    Configure root logging for command line callers.

    Args:
        level: Level name or number. Falls back to TRACE when GCODEBLOCK_TRACE
            is set, else to LOG_LEVEL_DEFAULT.
    """
    if level is None:
        level = TRACE if TRACE_ENABLED else LOG_LEVEL_DEFAULT
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            logger.warning(f"Unknown log level {level!r}, using WARNING")
            resolved = logging.WARNING
        level = resolved
    logging.basicConfig(
        level=level,
        format="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
