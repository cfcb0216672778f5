from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .lib.manifests import bundled_manifest_path, load_yaml
from .lib.zsh import Checkout, ShellSetup

MANIFEST_ENV = "HOSTINIT_MANIFEST"


def _sshd_value(v: Any) -> str:
    # YAML 1.1 reads bare yes/no as booleans.
    if isinstance(v, bool):
        return "yes" if v else "no"
    return str(v)


@dataclass(frozen=True)
class BootstrapConfig:
    raw: Dict[str, Any]

    def _section(self, name: str) -> Dict[str, Any]:
        return dict(self.raw.get(name) or {})

    @property
    def base_packages(self) -> List[str]:
        return [str(p) for p in (self._section("packages").get("base") or [])]

    # Docker

    @property
    def docker_base_url(self) -> str:
        return str(self._section("docker").get("base_url") or "https://download.docker.com/linux")

    @property
    def docker_components(self) -> str:
        return str(self._section("docker").get("components") or "stable")

    @property
    def docker_keyring_name(self) -> str:
        return str(self._section("docker").get("keyring") or "docker.gpg")

    @property
    def docker_source_name(self) -> str:
        return str(self._section("docker").get("source_file") or "docker.sources")

    @property
    def docker_primary_package(self) -> str:
        return str(self._section("docker").get("primary_package") or "docker-ce")

    @property
    def docker_packages(self) -> List[str]:
        return [str(p) for p in (self._section("docker").get("packages") or [self.docker_primary_package])]

    @property
    def docker_service(self) -> str:
        return str(self._section("docker").get("service") or "docker")

    @property
    def docker_group(self) -> str:
        return str(self._section("docker").get("group") or "docker")

    # SSH

    @property
    def ssh_package(self) -> str:
        return str(self._section("ssh").get("package") or "openssh-server")

    @property
    def ssh_service(self) -> str:
        return str(self._section("ssh").get("service") or "ssh")

    @property
    def ssh_directives(self) -> Dict[str, str]:
        d: Mapping[str, Any] = self._section("ssh").get("directives") or {}
        return {str(k): _sshd_value(v) for k, v in d.items()}

    # Shell

    @property
    def shell_setup(self) -> ShellSetup:
        z = self._section("zsh")
        fw = z.get("framework") or {}
        if not fw.get("url"):
            raise ValueError("manifest: zsh.framework.url is required")
        checkouts = []
        for item in z.get("checkouts") or []:
            if not isinstance(item, dict) or not item.get("url") or not item.get("path"):
                raise ValueError(f"manifest: zsh.checkouts entries need url and path, got {item!r}")
            checkouts.append(Checkout(url=str(item["url"]), path=str(item["path"])))
        return ShellSetup(
            framework_url=str(fw["url"]),
            framework_dir=str(fw.get("dir") or ".oh-my-zsh"),
            template=str(fw.get("template") or "templates/zshrc.zsh-template"),
            profile=str(z.get("profile") or ".zshrc"),
            checkouts=tuple(checkouts),
            theme=str(z.get("theme") or "powerlevel10k/powerlevel10k"),
            required_plugins=tuple(str(p) for p in (z.get("required_plugins") or [])),
            default_plugins=tuple(str(p) for p in (z.get("default_plugins") or ["git"])),
        )


def load_config(path: Optional[str] = None) -> BootstrapConfig:
    """Load the bootstrap manifest ($HOSTINIT_MANIFEST, else the bundled one)."""

    chosen = path or os.environ.get(MANIFEST_ENV) or str(bundled_manifest_path())
    p = Path(chosen)
    if not p.exists():
        raise FileNotFoundError(chosen)
    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("bootstrap manifest must be YAML")
    return BootstrapConfig(raw=load_yaml(p))
