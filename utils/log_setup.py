from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def default_log_dir() -> str:
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA", os.path.expanduser("~"))
        return os.path.join(appdata, "MultiSlider", "logs")
    return os.path.expanduser("~/.multislider/logs")


def configure_logging(
    level: Union[int, str] = logging.WARNING,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """Install handlers on the root logger.

    Frozen GUI builds on Windows have no stderr, so the stream handler is
    skipped there and a log file under ``default_log_dir()`` is used instead.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved

    root = logging.getLogger()
    root.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    if sys.stderr is not None:
        stream = logging.StreamHandler()
        stream.setFormatter(formatter)
        root.addHandler(stream)
    elif log_file is None:
        log_file = os.path.join(default_log_dir(), "multislider.log")

    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    return root
