"""
Shared test fixtures: a temporary host tree and a fake command layer.
"""

import shutil
import textwrap
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple

import pytest

from hostinit.errors import CommandError
from hostinit.lib.command import CmdResult
from hostinit.lib.env import Paths

# Modules that import run_cmd / have_cmd by name.
CMD_MODULES = [
    "hostinit.lib.pkg",
    "hostinit.lib.accounts",
    "hostinit.lib.access",
    "hostinit.lib.docker_repo",
    "hostinit.lib.hostname",
    "hostinit.lib.ssh",
    "hostinit.lib.zsh",
]

SSHD_CONFIG = textwrap.dedent("""\
    Include /etc/ssh/sshd_config.d/*.conf

    #Port 22
    #PermitRootLogin prohibit-password
    #StrictModes yes

    # To disable tunneled clear text passwords, change to no here!
    #PasswordAuthentication yes
    #PermitEmptyPasswords no

    KbdInteractiveAuthentication no
    UsePAM yes
    X11Forwarding yes
    Subsystem sftp /usr/lib/openssh/sftp-server
""")

HOSTS = textwrap.dedent("""\
    127.0.0.1\tlocalhost
    127.0.1.1\tdebian

    # The following lines are desirable for IPv6 capable hosts
    ::1     localhost ip6-localhost ip6-loopback
""")

OS_RELEASE = textwrap.dedent("""\
    PRETTY_NAME="Debian GNU/Linux 12 (bookworm)"
    NAME="Debian GNU/Linux"
    VERSION_ID="12"
    VERSION_CODENAME=bookworm
    ID=debian
""")

ZSHRC_TEMPLATE = textwrap.dedent("""\
    # Path to your oh-my-zsh installation.
    export ZSH="$HOME/.oh-my-zsh"

    ZSH_THEME="robbyrussell"

    plugins=(git)

    source $ZSH/oh-my-zsh.sh
""")


class FakeHost:
    """Stands in for run_cmd/have_cmd; keeps just enough host state to answer queries."""

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.installed: Set[str] = set()
        self.tools: Set[str] = {"curl", "gpg", "systemctl", "hostnamectl", "git"}
        self.groups: Dict[str, List[str]] = {"alice": ["alice"]}
        self.existing_groups: Set[str] = {"alice"}
        self.failures: Dict[Tuple[str, ...], Tuple[int, str]] = {}

    # run_cmd replacement
    def run_cmd(self, argv, *, check=True, env=None, input_text=None, log_stdout=True):
        argv = list(argv)
        self.calls.append(argv)
        rc, out, err = self._respond(argv, input_text)
        if check and rc != 0:
            raise CommandError(argv, rc, err)
        return CmdResult(argv=argv, returncode=rc, stdout=out, stderr=err)

    def have_cmd(self, name: str) -> bool:
        return name in self.tools

    def fail(self, *prefix: str, rc: int = 1, stderr: str = "failed") -> None:
        self.failures[tuple(prefix)] = (rc, stderr)

    def commands(self, name: str) -> List[List[str]]:
        return [c for c in self.calls if c and c[0] == name]

    def apt_installs(self) -> List[List[str]]:
        return [c for c in self.calls if c[:2] == ["apt-get", "install"]]

    def _respond(self, argv: List[str], input_text: Optional[str]) -> Tuple[int, str, str]:
        for prefix, (rc, err) in self.failures.items():
            if tuple(argv[: len(prefix)]) == prefix:
                return rc, "", err

        if argv[:2] == ["sudo", "-u"]:
            return self._respond(argv[argv.index("--") + 1 :], input_text)

        if argv[:2] == ["dpkg-query", "-W"]:
            if argv[-1] in self.installed:
                return 0, "install ok installed", ""
            return 1, "", f"dpkg-query: no packages found matching {argv[-1]}"
        if argv[:2] == ["apt-get", "install"]:
            self.installed.update(a for a in argv[2:] if not a.startswith("-"))
            return 0, "", ""
        if argv[:2] == ["id", "-nG"]:
            return 0, " ".join(self.groups.get(argv[2], [])) + "\n", ""
        if argv[:2] == ["getent", "group"]:
            return (0, f"{argv[2]}:x:999:\n", "") if argv[2] in self.existing_groups else (2, "", "")
        if argv[0] == "groupadd":
            self.existing_groups.add(argv[1])
            return 0, "", ""
        if argv[:2] == ["usermod", "-aG"]:
            self.groups.setdefault(argv[3], []).append(argv[2])
            return 0, "", ""
        if argv[:3] == ["gpg", "--batch", "--yes"] and "--dearmor" in argv:
            Path(argv[argv.index("-o") + 1]).write_bytes(b"\x99\x01keyring")
            return 0, "", ""
        if argv[:2] == ["git", "clone"]:
            url, dest = argv[-2], Path(argv[-1])
            dest.mkdir(parents=True)
            if "ohmyzsh" in url:
                (dest / "oh-my-zsh.sh").write_text("# oh-my-zsh\n")
                (dest / "templates").mkdir()
                (dest / "templates" / "zshrc.zsh-template").write_text(ZSHRC_TEMPLATE)
            return 0, "", ""
        if argv[:2] == ["mkdir", "-p"]:
            Path(argv[2]).mkdir(parents=True, exist_ok=True)
            return 0, "", ""
        if argv[0] == "cp":
            shutil.copyfile(argv[1], argv[2])
            return 0, "", ""
        if argv[0] == "tee":
            Path(argv[1]).write_text(input_text or "")
            return 0, input_text or "", ""
        return 0, "", ""


@pytest.fixture
def fake_host(monkeypatch) -> FakeHost:
    """Replace every run_cmd/have_cmd import with a FakeHost."""
    host = FakeHost()
    for mod in CMD_MODULES:
        monkeypatch.setattr(f"{mod}.run_cmd", host.run_cmd, raising=False)
        monkeypatch.setattr(f"{mod}.have_cmd", host.have_cmd, raising=False)
    return host


@pytest.fixture
def host_paths(tmp_path: Path) -> Paths:
    """Return Paths pointing at a populated temporary /etc."""
    etc = tmp_path / "etc"
    (etc / "ssh").mkdir(parents=True)
    (etc / "sudoers.d").mkdir()
    (etc / "apt" / "sources.list.d").mkdir(parents=True)
    (etc / "hosts").write_text(HOSTS)
    (etc / "hostname").write_text("debian\n")
    (etc / "os-release").write_text(OS_RELEASE)
    (etc / "ssh" / "sshd_config").write_text(SSHD_CONFIG)
    return Paths(
        os_release=str(etc / "os-release"),
        hosts=str(etc / "hosts"),
        hostname=str(etc / "hostname"),
        sshd_config=str(etc / "ssh" / "sshd_config"),
        sudoers_dir=str(etc / "sudoers.d"),
        apt_keyrings=str(etc / "apt" / "keyrings"),
        apt_sources_dir=str(etc / "apt" / "sources.list.d"),
    )
