"""Package-wide logger."""
import logging
import os
import sys
from typing import Mapping, Optional, Union

LOG_LEVEL_ENV: str = "CALCULATOR_FIXTURE_LOG_LEVEL"
LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_LEVEL: int = logging.INFO

logger: logging.Logger = logging.getLogger("calculator_fixture")


def level_from_env(environ: Optional[Mapping[str, str]] = None) -> int:
    """
    Read the log level from CALCULATOR_FIXTURE_LOG_LEVEL.

    Unknown names fall back to INFO with a warning instead of failing the import.

    :param environ: Environment mapping; os.environ when None

    :return: Numeric logging level
    :rtype: int
    """
    environ = os.environ if environ is None else environ
    name: str = environ.get(LOG_LEVEL_ENV, "INFO").strip().upper()
    # getLevelName maps known names to their number and anything else to a string
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        logger.warning(f"⚙️ Unknown {LOG_LEVEL_ENV}={name!r}, using INFO")
        return DEFAULT_LEVEL
    return level


if not logger.handlers:
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(_handler)
    logger.propagate = False
    logger.setLevel(level_from_env())


def set_level(level: Union[str, int]) -> None:
    """
    Change the level of the package logger.

    :param level: Level name (e.g. "DEBUG") or numeric logging level
    :raises ValueError: If the level name is unknown
    """
    logger.setLevel(level.upper() if isinstance(level, str) else level)
