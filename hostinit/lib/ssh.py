from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

from ..errors import BootstrapError
from .command import have_cmd, run_cmd
from .directives import DirectiveFile
from .files import backup_file, write_text_atomic
from .pkg import apt_install

logger = logging.getLogger(__name__)


def apply_sshd_settings(text: str, directives: Mapping[str, str], allow_users: str) -> str:
    """Return sshd_config text with each directive set once and AllowUsers replaced."""

    doc = DirectiveFile.parse(text)
    for key, value in directives.items():
        doc.set(key, value)
    # Overwrite, not merge: only the listed account may log in.
    doc.set("AllowUsers", allow_users)
    return doc.render()


def harden_sshd(
    operator: str,
    *,
    config_path: str,
    directives: Mapping[str, str],
    package: str = "openssh-server",
    service: str = "ssh",
) -> str:
    """Harden sshd for a single operator login. Returns the backup path."""

    if not operator:
        raise BootstrapError("harden_sshd: missing operator account.")

    apt_install([package])

    cfg = Path(config_path)
    if not cfg.is_file():
        raise BootstrapError(f"sshd_config not found at {config_path}")

    logger.info("Backing up sshd_config")
    backup = backup_file(config_path)

    text = cfg.read_text(encoding="utf-8")
    write_text_atomic(config_path, apply_sshd_settings(text, directives, operator))
    logger.info("sshd_config updated (%s, AllowUsers %s)", ", ".join(f"{k} {v}" for k, v in directives.items()), operator)

    # sshd -t needs /run/sshd, which only the systemd unit creates.
    if have_cmd("systemctl") and have_cmd("sshd"):
        r = run_cmd(["sshd", "-t", "-f", config_path], check=False)
        if r.returncode != 0:
            raise BootstrapError(
                f"sshd rejected {config_path}: {r.stderr.strip()} (previous version saved as {backup})"
            )

    if have_cmd("systemctl"):
        logger.info("Enabling and restarting %s service", service)
        run_cmd(["systemctl", "enable", service])
        run_cmd(["systemctl", "restart", service])
    else:
        logger.warning("systemctl not available; skipping %s service enable/restart.", service)

    return backup
