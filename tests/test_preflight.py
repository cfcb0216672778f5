"""
Tests for preflight checks and os-release parsing.
"""

import textwrap
from pathlib import Path

import pytest

from hostinit.errors import BootstrapError
from hostinit.lib.accounts import Account
from hostinit.lib.osrelease import codename, is_debian_like, parse_os_release
from hostinit.preflight import run_preflight


@pytest.fixture
def known_accounts(monkeypatch):
    def lookup(cls, name):
        if name not in {"alice", "root"}:
            raise BootstrapError(f"Unknown account: {name}")
        return cls(name=name, home="/root" if name == "root" else f"/home/{name}", shell="/bin/bash")

    monkeypatch.setattr(Account, "lookup", classmethod(lookup))


def _os_release(tmp_path: Path, body: str) -> str:
    p = tmp_path / "os-release"
    p.write_text(textwrap.dedent(body))
    return str(p)


class TestOsRelease:
    def test_parse_quoted_values(self):
        info = parse_os_release('PRETTY_NAME="Ubuntu 24.04 LTS"\nID=ubuntu\nID_LIKE=debian\n# c\nVERSION_CODENAME=noble\n')
        assert info["PRETTY_NAME"] == "Ubuntu 24.04 LTS"
        assert codename(info) == "noble"

    @pytest.mark.parametrize(
        "info,expected",
        [
            ({"ID": "debian"}, True),
            ({"ID": "ubuntu", "ID_LIKE": "debian"}, True),
            ({"ID": "pop", "ID_LIKE": "ubuntu debian"}, True),
            ({"ID": "fedora"}, False),
            ({"ID": "arch", "ID_LIKE": "debianish"}, False),
            ({}, False),
        ],
    )
    def test_is_debian_like(self, info, expected):
        assert is_debian_like(info) is expected


class TestPreflight:
    def test_ok(self, tmp_path, known_accounts):
        path = _os_release(tmp_path, "ID=debian\nVERSION_CODENAME=bookworm\n")
        pre = run_preflight(os_release_path=path, environ={"SUDO_USER": "alice"}, euid=0)
        assert pre.operator == Account("alice", "/home/alice", "/bin/bash")
        assert pre.os_release["VERSION_CODENAME"] == "bookworm"

    def test_requires_root(self, tmp_path, known_accounts):
        path = _os_release(tmp_path, "ID=debian\n")
        with pytest.raises(BootstrapError, match="must be run as root"):
            run_preflight(os_release_path=path, environ={"SUDO_USER": "alice"}, euid=1000)

    def test_rejects_non_debian(self, tmp_path, known_accounts):
        path = _os_release(tmp_path, "ID=fedora\n")
        with pytest.raises(BootstrapError, match="Debian-like"):
            run_preflight(os_release_path=path, environ={"SUDO_USER": "alice"}, euid=0)

    def test_missing_os_release(self, tmp_path, known_accounts):
        with pytest.raises(BootstrapError, match="Debian-like"):
            run_preflight(os_release_path=str(tmp_path / "none"), environ={"SUDO_USER": "alice"}, euid=0)

    @pytest.mark.parametrize("environ", [{}, {"SUDO_USER": ""}, {"SUDO_USER": "root"}])
    def test_refuses_direct_root(self, tmp_path, known_accounts, environ):
        path = _os_release(tmp_path, "ID=debian\n")
        with pytest.raises(BootstrapError, match="SUDO_USER"):
            run_preflight(os_release_path=path, environ=environ, euid=0)

    def test_unknown_operator(self, tmp_path, known_accounts):
        path = _os_release(tmp_path, "ID=debian\n")
        with pytest.raises(BootstrapError, match="Unknown account"):
            run_preflight(os_release_path=path, environ={"SUDO_USER": "mallory"}, euid=0)
