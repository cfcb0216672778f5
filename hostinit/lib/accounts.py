from __future__ import annotations

import logging
import pwd
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

from ..errors import BootstrapError
from .command import CmdResult, run_cmd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Account:
    name: str
    home: str
    shell: str = ""

    @property
    def is_root(self) -> bool:
        return self.name == "root"

    @classmethod
    def lookup(cls, name: str) -> "Account":
        try:
            pw = pwd.getpwnam(name)
        except KeyError as e:
            raise BootstrapError(f"Unknown account: {name}") from e
        if not pw.pw_dir:
            raise BootstrapError(f"Could not determine home for account: {name}")
        return cls(name=pw.pw_name, home=pw.pw_dir, shell=pw.pw_shell)


def login_shell(name: str) -> str:
    try:
        return pwd.getpwnam(name).pw_shell
    except KeyError:
        return ""


def group_names(name: str) -> List[str]:
    r = run_cmd(["id", "-nG", name])
    return r.stdout.split()


def group_exists(group: str) -> bool:
    return run_cmd(["getent", "group", group], check=False).returncode == 0


class AccountRunner:
    """Performs filesystem and command actions as a given account.

    Subclasses differ only in how an action is carried out; the set of
    actions and their arguments are identical for every account.
    """

    def __init__(self, account: Account) -> None:
        self.account = account

    def run(self, argv: Sequence[str], *, check: bool = True) -> CmdResult:
        raise NotImplementedError

    def makedirs(self, path: str) -> None:
        raise NotImplementedError

    def copy(self, src: str, dst: str) -> None:
        raise NotImplementedError

    def write_text(self, path: str, contents: str) -> None:
        raise NotImplementedError

    def git_clone(self, url: str, dest: str, *, depth: int = 1) -> None:
        self.run(["git", "clone", f"--depth={depth}", url, dest])


class DirectRunner(AccountRunner):
    """Acts with the privileges of the current process (used for root)."""

    def run(self, argv: Sequence[str], *, check: bool = True) -> CmdResult:
        return run_cmd(argv, check=check)

    def makedirs(self, path: str) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def copy(self, src: str, dst: str) -> None:
        shutil.copyfile(src, dst)

    def write_text(self, path: str, contents: str) -> None:
        Path(path).write_text(contents, encoding="utf-8")


class SwitchedRunner(AccountRunner):
    """Acts as another account through `sudo -u`, so created files belong to it."""

    def _as_account(self, argv: Sequence[str]) -> List[str]:
        return ["sudo", "-u", self.account.name, "-H", "--", *argv]

    def run(self, argv: Sequence[str], *, check: bool = True) -> CmdResult:
        return run_cmd(self._as_account(argv), check=check)

    def makedirs(self, path: str) -> None:
        self.run(["mkdir", "-p", path])

    def copy(self, src: str, dst: str) -> None:
        self.run(["cp", src, dst])

    def write_text(self, path: str, contents: str) -> None:
        run_cmd(self._as_account(["tee", path]), input_text=contents, log_stdout=False)


def runner_for(account: Account) -> AccountRunner:
    return DirectRunner(account) if account.is_root else SwitchedRunner(account)
