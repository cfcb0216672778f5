from __future__ import annotations

import logging
from typing import List, Sequence

from .command import run_cmd

logger = logging.getLogger(__name__)

_APT_ENV = {"DEBIAN_FRONTEND": "noninteractive"}


def dpkg_installed(package: str) -> bool:
    """Return True if dpkg reports the package as fully installed.

    A removed-but-not-purged package ("deinstall ok config-files") counts as missing.
    """
    r = run_cmd(["dpkg-query", "-W", "-f=${Status}", package], check=False)
    return r.returncode == 0 and r.stdout.strip() == "install ok installed"


def missing_packages(packages: Sequence[str]) -> List[str]:
    missing: List[str] = []
    for p in packages:
        if p not in missing and not dpkg_installed(p):
            missing.append(p)
    return missing


def apt_update() -> None:
    run_cmd(["apt-get", "update", "-y"], env=_APT_ENV)


def apt_install(
    packages: Sequence[str],
    *,
    with_recommends: bool = False,
) -> List[str]:
    """Install only the packages that are not already present.

    Returns the list of packages handed to apt-get (empty when nothing was missing).
    """
    if not packages:
        return []

    missing = missing_packages(packages)
    if not missing:
        logger.info("Packages already installed: %s", " ".join(packages))
        return []

    argv = [
        "apt-get",
        "install",
        "-y",
    ]
    if not with_recommends:
        argv.append("--no-install-recommends")

    logger.info("Installing packages: %s", " ".join(missing))
    run_cmd([*argv, *missing], env=_APT_ENV)
    return missing
