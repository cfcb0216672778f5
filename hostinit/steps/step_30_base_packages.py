from __future__ import annotations

import logging

from ..lib.pkg import apt_install, apt_update
from ..pipeline import BootstrapCtx

logger = logging.getLogger(__name__)


class BasePackagesStep:
    step_id = "30_base_packages"

    def run(self, ctx: BootstrapCtx) -> None:
        logger.info("Updating apt index")
        apt_update()
        apt_install(ctx.cfg.base_packages)
