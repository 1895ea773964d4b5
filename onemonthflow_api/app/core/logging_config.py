"""
Logging setup shared by the web API and the command line programs.

``setup_logging`` attaches a console handler (and optionally a file
handler) to the root logger the first time it is called; later calls
only change the level.  Every other module simply does
``logging.getLogger(__name__)``.

Level names are case insensitive.  Besides the standard names, the
names used in ``appsettings.json`` files (``Information``, ``Trace``,
``None``) are understood.
"""

import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_LEVEL_ALIASES = {
    "trace": logging.DEBUG,
    "information": logging.INFO,
    "none": logging.CRITICAL + 10,
}


def resolve_level(level: Optional[str]) -> int:
    """Return the numeric level for ``level``, ``INFO`` when unknown."""
    name = (level or "").strip()
    if name.lower() in _LEVEL_ALIASES:
        return _LEVEL_ALIASES[name.lower()]
    value = logging.getLevelName(name.upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger.

    Parameters
    ----------
    level : str
        Level name such as ``"DEBUG"`` or ``"Information"``.
    logfile : Optional[str]
        Path of a file that receives a copy of every record.  Only
        honoured on the first call.
    """
    root = logging.getLogger()
    root.setLevel(resolve_level(level))
    if root.handlers:
        return

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    # urllib3 logs every connection at DEBUG.
    logging.getLogger("urllib3").setLevel(logging.WARNING)
