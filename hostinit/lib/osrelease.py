from __future__ import annotations

import logging
import shlex
from pathlib import Path
from typing import Dict

logger = logging.getLogger(__name__)


def parse_os_release(text: str) -> Dict[str, str]:
    """Parse os-release(5) KEY=value lines (shell quoting allowed)."""

    out: Dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        try:
            parts = shlex.split(value)
        except ValueError:
            parts = [value.strip("\"'")]
        out[key.strip()] = parts[0] if parts else ""
    return out


def read_os_release(path: str) -> Dict[str, str]:
    p = Path(path)
    if not p.is_file():
        return {}
    return parse_os_release(p.read_text(encoding="utf-8", errors="ignore"))


def is_debian_like(info: Dict[str, str]) -> bool:
    if info.get("ID", "") == "debian":
        return True
    return "debian" in info.get("ID_LIKE", "").split()


def codename(info: Dict[str, str]) -> str:
    return info.get("VERSION_CODENAME", "").strip()


def docker_distro(info: Dict[str, str]) -> str:
    # download.docker.com publishes separate trees per distribution.
    return "ubuntu" if info.get("ID") == "ubuntu" else "debian"
