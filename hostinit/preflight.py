from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from .errors import BootstrapError
from .lib.accounts import Account
from .lib.osrelease import is_debian_like, read_os_release

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Preflight:
    operator: Account
    os_release: Dict[str, str]


def require_root(euid: Optional[int] = None) -> None:
    if (os.geteuid() if euid is None else euid) != 0:
        raise BootstrapError("This tool must be run as root (use sudo).")


def operator_name(environ: Mapping[str, str]) -> str:
    name = (environ.get("SUDO_USER") or "").strip()
    if not name or name == "root":
        raise BootstrapError(
            "This tool expects to be run via sudo from a non-root account (SUDO_USER missing or root)."
        )
    return name


def run_preflight(
    *,
    os_release_path: str,
    environ: Optional[Mapping[str, str]] = None,
    euid: Optional[int] = None,
) -> Preflight:
    require_root(euid)

    info = read_os_release(os_release_path)
    if not is_debian_like(info):
        raise BootstrapError("This tool currently supports Debian-like systems only.")

    name = operator_name(os.environ if environ is None else environ)
    operator = Account.lookup(name)
    logger.info(
        "Preflight ok: os=%s %s, operator=%s (home %s)",
        info.get("ID", "?"),
        info.get("VERSION_CODENAME", ""),
        operator.name,
        operator.home,
    )
    return Preflight(operator=operator, os_release=info)
