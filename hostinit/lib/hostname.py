from __future__ import annotations

import logging
import re
import socket
from pathlib import Path
from typing import Optional

from ..errors import BootstrapError
from .command import have_cmd, run_cmd
from .files import backup_file

logger = logging.getLogger(__name__)

MAX_HOSTNAME_LEN = 253
_LABEL = re.compile(r"^[A-Za-z0-9]([A-Za-z0-9-]{0,61}[A-Za-z0-9])?$")
_LOOPBACK = re.compile(r"^\s*127\.0\.1\.1(\s+|$)")


def valid_hostname(name: str) -> bool:
    if not name or len(name) > MAX_HOSTNAME_LEN:
        return False
    return all(_LABEL.match(label) for label in name.split("."))


def current_hostname() -> str:
    return socket.gethostname()


def rewrite_hosts(text: str, hostname: str) -> str:
    """Point the 127.0.1.1 entry at hostname; exactly one such line remains."""

    entry = f"127.0.1.1\t{hostname}"
    out: list[str] = []
    replaced = False
    for line in text.splitlines():
        if _LOOPBACK.match(line):
            if not replaced:
                out.append(entry)
                replaced = True
            continue
        out.append(line)

    if not replaced:
        if out and out[-1].strip():
            out.append("")
        out.append(entry)
    return "\n".join(out) + "\n"


def rename_host(
    new_name: str,
    *,
    hosts_path: str,
    hostname_path: str,
    old_name: Optional[str] = None,
) -> bool:
    """Rename the machine. Returns False when it already carries that name."""

    if not valid_hostname(new_name):
        raise BootstrapError(
            f"Invalid hostname: {new_name!r} (labels of 1-63 alphanumerics or inner hyphens, "
            f"at most {MAX_HOSTNAME_LEN} characters total)"
        )

    old = old_name if old_name is not None else current_hostname()
    if old == new_name:
        logger.info("Hostname already set to '%s'", new_name)
        return False

    logger.info("Renaming host: '%s' -> '%s'", old, new_name)
    hosts = Path(hosts_path)
    hosts_text = ""
    if hosts.exists():
        backup_file(hosts_path)
        hosts_text = hosts.read_text(encoding="utf-8")

    if have_cmd("hostnamectl"):
        run_cmd(["hostnamectl", "set-hostname", new_name])
    else:
        run_cmd(["hostname", new_name])
    Path(hostname_path).write_text(new_name + "\n", encoding="utf-8")

    # /etc/hosts may be a bind mount; rewrite in place.
    hosts.write_text(rewrite_hosts(hosts_text, new_name), encoding="utf-8")
    logger.info("Hostname renamed to '%s'", new_name)
    return True
