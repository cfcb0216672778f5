from __future__ import annotations

import logging

from ..lib.hostname import rename_host
from ..pipeline import BootstrapCtx

logger = logging.getLogger(__name__)


class RenameHostStep:
    step_id = "20_rename_host"

    def run(self, ctx: BootstrapCtx) -> None:
        if not ctx.rename:
            logger.info("Hostname rename not requested. (Use --rename <name>)")
            return
        rename_host(ctx.rename, hosts_path=ctx.paths.hosts, hostname_path=ctx.paths.hostname)
