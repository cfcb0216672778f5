from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    os_release: str = "/etc/os-release"
    hosts: str = "/etc/hosts"
    hostname: str = "/etc/hostname"
    sshd_config: str = "/etc/ssh/sshd_config"
    sudoers_dir: str = "/etc/sudoers.d"
    apt_keyrings: str = "/etc/apt/keyrings"
    apt_sources_dir: str = "/etc/apt/sources.list.d"


PATHS = Paths()
