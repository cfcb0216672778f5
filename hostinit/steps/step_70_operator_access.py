from __future__ import annotations

from ..lib.access import ensure_group_membership, grant_nopasswd_sudo
from ..pipeline import BootstrapCtx


class OperatorAccessStep:
    step_id = "70_operator_access"

    def run(self, ctx: BootstrapCtx) -> None:
        grant_nopasswd_sudo(ctx.operator, sudoers_dir=ctx.paths.sudoers_dir)
        ensure_group_membership(ctx.operator, ctx.cfg.docker_group)
