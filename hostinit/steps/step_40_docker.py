from __future__ import annotations

import logging
from pathlib import Path

from ..lib.docker_repo import DockerRepo, install_docker
from ..lib.osrelease import codename, docker_distro
from ..pipeline import BootstrapCtx

logger = logging.getLogger(__name__)


class InstallDockerStep:
    step_id = "40_docker"

    def run(self, ctx: BootstrapCtx) -> None:
        cfg = ctx.cfg
        repo = DockerRepo(
            base_url=cfg.docker_base_url,
            distro=docker_distro(ctx.os_release),
            codename=codename(ctx.os_release),
            keyring=str(Path(ctx.paths.apt_keyrings) / cfg.docker_keyring_name),
            source_file=str(Path(ctx.paths.apt_sources_dir) / cfg.docker_source_name),
            components=cfg.docker_components,
        )
        install_docker(
            repo,
            packages=cfg.docker_packages,
            primary_package=cfg.docker_primary_package,
            service=cfg.docker_service,
        )
