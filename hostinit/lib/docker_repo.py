from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from ..errors import BootstrapError, MissingToolError
from .command import have_cmd, run_cmd
from .pkg import apt_install, apt_update, dpkg_installed

logger = logging.getLogger(__name__)

KEYRING_DIR_MODE = 0o755
KEYRING_MODE = 0o644


@dataclass(frozen=True)
class DockerRepo:
    base_url: str
    distro: str
    codename: str
    keyring: str
    source_file: str
    components: str = "stable"

    @property
    def uri(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.distro}"

    @property
    def key_url(self) -> str:
        return f"{self.uri}/gpg"


def render_sources(repo: DockerRepo) -> str:
    """deb822 source definition for the Docker repository."""

    return "\n".join(
        [
            "Types: deb",
            f"URIs: {repo.uri}",
            f"Suites: {repo.codename}",
            f"Components: {repo.components}",
            f"Signed-By: {repo.keyring}",
            "",
        ]
    )


def require_tools(*names: str) -> None:
    for name in names:
        if not have_cmd(name):
            raise MissingToolError(f"{name} is required for the Docker install step.")


def install_keyring(repo: DockerRepo) -> None:
    """Fetch the vendor key, check it really is a public key, store it dearmored."""

    Path(repo.keyring).parent.mkdir(parents=True, exist_ok=True)
    os.chmod(Path(repo.keyring).parent, KEYRING_DIR_MODE)

    with tempfile.TemporaryDirectory(prefix="hostinit-docker-") as tmpdir:
        key_tmp = str(Path(tmpdir) / "docker.asc")
        run_cmd(["curl", "-fsSL", repo.key_url, "-o", key_tmp])

        r = run_cmd(["gpg", "--batch", "--quiet", "--show-keys", key_tmp], check=False)
        if r.returncode != 0:
            raise BootstrapError(f"Downloaded Docker GPG key is not a valid public key ({repo.key_url}).")

        run_cmd(["gpg", "--batch", "--yes", "--dearmor", "-o", repo.keyring, key_tmp])
        os.chmod(repo.keyring, KEYRING_MODE)


def install_docker(
    repo: DockerRepo,
    *,
    packages: Sequence[str],
    primary_package: str = "docker-ce",
    service: str = "docker",
) -> bool:
    """Configure the Docker apt repository and install the engine.

    Returns False when the primary package is already installed (nothing done).
    """

    require_tools("curl", "gpg")
    if not repo.codename:
        raise BootstrapError("VERSION_CODENAME is empty; cannot configure Docker repo.")

    if dpkg_installed(primary_package):
        logger.info("Docker already installed (%s present). Skipping.", primary_package)
        return False

    logger.info("Configuring Docker apt repository (%s: %s)", repo.distro, repo.codename)
    install_keyring(repo)

    src = Path(repo.source_file)
    src.parent.mkdir(parents=True, exist_ok=True)
    src.write_text(render_sources(repo), encoding="utf-8")
    logger.info("Wrote %s", str(src))

    apt_update()
    apt_install(packages)

    if have_cmd("systemctl"):
        r = run_cmd(["systemctl", "enable", "--now", service], check=False)
        if r.returncode != 0:
            logger.warning("systemctl enable/start %s failed (maybe not a systemd environment).", service)
    else:
        logger.warning("systemctl not available; %s service not enabled.", service)

    logger.info("Docker installation complete.")
    return True
