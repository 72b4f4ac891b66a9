"""
Logging setup for resume_analyzer.

Modules log through logging.getLogger(__name__); this only wires handlers and
levels for applications that have none of their own.
"""

import logging
from typing import List, Optional, Union

from resume_analyzer.core.config import get_settings

NOISY_LOGGERS = ("openai", "httpx", "httpcore", "pdfminer", "urllib3")


def _resolve_level(level: Union[int, str, None]) -> int:
    if level is None:
        level = get_settings().log_level
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: Union[int, str, None] = None, log_file: Optional[str] = None) -> None:
    """
    Configure console (and optional file) logging.

    Args:
        level: Level name or number; defaults to Settings.log_level
        log_file: Optional path for a DEBUG-level file log; defaults to Settings.log_file
    """
    lvl = _resolve_level(level)
    log_file = log_file or get_settings().log_file

    # Handlers already installed (e.g. by pytest): only adjust levels
    if logging.root.handlers:
        for handler in logging.root.handlers:
            if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
                handler.setLevel(lvl)
        logging.root.setLevel(lvl)
    else:
        console = logging.StreamHandler()
        console.setLevel(lvl)
        console.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        handlers: List[logging.Handler] = [console]
        logging.basicConfig(level=lvl, handlers=handlers, force=True)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logging.root.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
