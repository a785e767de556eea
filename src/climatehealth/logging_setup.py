"""Simple logging configuration.

Use func:`setup_logging` at the start of the dashboard or CLI to configure a
consistent logging format across the project.  The level normally comes from
``project.log_level`` in the configuration and may be a name such as
``"DEBUG"`` or a numeric level.
"""

import logging
from typing import Union

FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# third-party loggers that are noisy at DEBUG
_QUIET_LOGGERS = ("urllib3", "fiona", "pyogrio", "watchdog")


def resolve_level(level: Union[int, str]) -> int:
    """Translate a level name to its numeric value."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """Configure the root logger."""
    numeric = resolve_level(level)
    logging.basicConfig(level=numeric, format=FORMAT)
    logging.getLogger("climatehealth").setLevel(numeric)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric, logging.WARNING))
