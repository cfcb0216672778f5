from __future__ import annotations

import logging
import os
import shutil
import time
from pathlib import Path

logger = logging.getLogger(__name__)


def backup_file(path: str, *, now: float | None = None) -> str:
    """Copy a file next to itself as <name>.bak.<YYYY-MM-DD_HHMMSS>, keeping mode and times."""

    src = Path(path)
    stamp = time.strftime("%Y-%m-%d_%H%M%S", time.localtime(now))
    dst = src.with_name(f"{src.name}.bak.{stamp}")
    shutil.copy2(src, dst)
    logger.info("Backed up %s -> %s", str(src), str(dst))
    return str(dst)


def write_text_atomic(path: str, contents: str, *, mode: int | None = None) -> None:
    """Write via a sibling temp file and rename, so readers never see a partial file."""

    p = Path(path)
    tmp = p.with_name(f".{p.name}.tmp")
    tmp.write_text(contents, encoding="utf-8")
    if mode is not None:
        os.chmod(tmp, mode)
    elif p.exists():
        shutil.copymode(p, tmp)
    os.replace(tmp, p)
