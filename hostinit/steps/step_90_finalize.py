from __future__ import annotations

import logging

from ..pipeline import BootstrapCtx

logger = logging.getLogger(__name__)


class FinalizeStep:
    step_id = "90_finalize"

    def run(self, ctx: BootstrapCtx) -> None:
        logger.info("Initialisation complete.")
        logger.info(
            "Note: %s group change requires a new login/session for '%s'.",
            ctx.cfg.docker_group,
            ctx.operator.name,
        )
        logger.info("For each configured account, you can run: exec zsh ; p10k configure")
