from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

DEFAULT_LOG_PATH = "/var/log/hostinit.log"
LOG_ENV = "HOSTINIT_LOG"


def configure_logging(
    log_path: Optional[str] = None,
    level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Configure logging.

    Every command and decision goes to the log file; the console handler
    (stderr) mirrors it so fatal errors reach the operator.

    Notes:
    - The path comes from the argument, then $HOSTINIT_LOG, then /var/log/hostinit.log.
    - If that file cannot be opened we fall back to ./hostinit.log.

    Returns the actual file path being used.
    """

    logger = logging.getLogger()
    logger.setLevel(level)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_hostinit_configured", False):
        return getattr(logger, "_hostinit_log_path", log_path or DEFAULT_LOG_PATH)

    requested = log_path or os.environ.get(LOG_ENV) or DEFAULT_LOG_PATH
    chosen_path = requested
    handlers: list[logging.Handler] = []

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    file_handler: logging.Handler
    try:
        Path(os.path.dirname(requested) or ".").mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(requested)
    except OSError:
        chosen_path = str(Path.cwd() / "hostinit.log")
        file_handler = logging.FileHandler(chosen_path)
    file_handler.setFormatter(fmt)
    handlers.append(file_handler)

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(fmt)
        handlers.append(console)

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_hostinit_configured", True)
    setattr(logger, "_hostinit_log_path", chosen_path)

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", requested, chosen_path
    )
    return chosen_path
