from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from ..errors import BootstrapError
from .accounts import Account, AccountRunner, login_shell
from .command import run_cmd
from .shellrc import merge_plugins, set_assignment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Checkout:
    url: str
    path: str  # relative to the framework's custom directory


@dataclass(frozen=True)
class ShellSetup:
    framework_url: str
    framework_dir: str = ".oh-my-zsh"
    profile: str = ".zshrc"
    template: str = "templates/zshrc.zsh-template"
    checkouts: Sequence[Checkout] = ()
    theme: str = "powerlevel10k/powerlevel10k"
    required_plugins: Sequence[str] = ("git", "sudo", "zsh-autosuggestions", "zsh-syntax-highlighting")
    default_plugins: Sequence[str] = ("git",)
    shell: str = "zsh"


def reconcile_profile(text: str, *, framework_root: str, setup: ShellSetup) -> str:
    text = set_assignment(text, "ZSH", framework_root)
    text = set_assignment(text, "ZSH_THEME", setup.theme)
    return merge_plugins(text, setup.required_plugins, setup.default_plugins)


def ensure_login_shell(account: Account, shell: str) -> None:
    shell_path = shutil.which(shell)
    if not shell_path:
        logger.warning("%s not found on PATH; login shell for '%s' unchanged.", shell, account.name)
        return
    if login_shell(account.name) == shell_path:
        return
    r = run_cmd(["chsh", "-s", shell_path, account.name], check=False)
    if r.returncode != 0:
        logger.warning("Could not change default shell for %s (maybe restricted).", account.name)
    else:
        logger.info("Login shell for '%s' set to %s", account.name, shell_path)


def configure_shell(account: Account, runner: AccountRunner, setup: ShellSetup) -> None:
    """Install the zsh framework, plugins and theme for account and reconcile its profile."""

    home = Path(account.home)
    if not home.is_dir():
        raise BootstrapError(f"Home directory not found: {account.home}")

    fw = home / setup.framework_dir
    custom = fw / "custom"
    profile = home / setup.profile

    logger.info("Configuring zsh for '%s' (home: %s)", account.name, account.home)

    # Clone before creating custom/: git refuses a non-empty destination.
    if fw.exists():
        logger.info("Shell framework already present for '%s'.", account.name)
    else:
        runner.git_clone(setup.framework_url, str(fw))

    runner.makedirs(str(custom / "plugins"))
    runner.makedirs(str(custom / "themes"))

    if not profile.is_file():
        runner.copy(str(fw / setup.template), str(profile))

    for co in setup.checkouts:
        dest = custom / co.path
        if dest.is_dir():
            logger.info("%s already present for '%s'.", co.path, account.name)
            continue
        runner.git_clone(co.url, str(dest))

    current = profile.read_text(encoding="utf-8")
    updated = reconcile_profile(current, framework_root=str(fw), setup=setup)
    if updated != current:
        runner.write_text(str(profile), updated)
        logger.info("Updated %s", str(profile))

    ensure_login_shell(account, setup.shell)
    logger.info("zsh configured for '%s'.", account.name)
