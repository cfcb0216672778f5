from __future__ import annotations

import logging
import os
from pathlib import Path

from ..errors import BootstrapError
from .accounts import Account, group_exists, group_names
from .command import run_cmd
from .pkg import apt_install

logger = logging.getLogger(__name__)

SUDOERS_MODE = 0o440


def sudoers_fragment_path(sudoers_dir: str, name: str) -> str:
    # sudo's includedir skips names containing a dot.
    safe = name.replace(".", "_")
    return str(Path(sudoers_dir) / f"90-{safe}-nopasswd")


def nopasswd_rule(name: str) -> str:
    return f"{name} ALL=(ALL) NOPASSWD: ALL\n"


def grant_nopasswd_sudo(account: Account, *, sudoers_dir: str) -> bool:
    """Install a validated NOPASSWD fragment for account. Returns False for root."""

    if account.is_root:
        logger.info("Account is root; skipping sudoers grant.")
        return False

    apt_install(["sudo"])

    target = Path(sudoers_fragment_path(sudoers_dir, account.name))
    # The dot keeps the staged file out of sudo's includedir until it validates.
    staged = target.with_name(f".{target.name}.new")

    logger.info("Granting passwordless sudo to '%s' via %s", account.name, str(target))
    Path(sudoers_dir).mkdir(parents=True, exist_ok=True)
    staged.write_text(nopasswd_rule(account.name), encoding="utf-8")
    os.chmod(staged, SUDOERS_MODE)

    r = run_cmd(["visudo", "-cf", str(staged)], check=False)
    if r.returncode != 0:
        staged.unlink()
        raise BootstrapError(f"visudo validation failed for {target}: {r.stderr.strip()}")

    os.replace(staged, target)
    logger.info("sudoers entry validated.")
    return True


def ensure_group_membership(account: Account, group: str) -> bool:
    """Add account to group (creating the group if needed). Returns True if membership changed."""

    if account.is_root:
        logger.info("Account is root; skipping '%s' group membership.", group)
        return False

    if not group_exists(group):
        logger.info("Creating '%s' group", group)
        run_cmd(["groupadd", group])

    if group in group_names(account.name):
        logger.info("Account '%s' is already in group '%s'", account.name, group)
        return False

    logger.info("Adding account '%s' to group '%s'", account.name, group)
    run_cmd(["usermod", "-aG", group, account.name])
    logger.info(
        "Account '%s' added to group '%s' (new login session required to take effect)",
        account.name,
        group,
    )
    return True
