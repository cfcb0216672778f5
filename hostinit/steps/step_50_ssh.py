from __future__ import annotations

from ..lib.ssh import harden_sshd
from ..pipeline import BootstrapCtx


class HardenSSHStep:
    step_id = "50_ssh"

    def run(self, ctx: BootstrapCtx) -> None:
        harden_sshd(
            ctx.operator.name,
            config_path=ctx.paths.sshd_config,
            directives=ctx.cfg.ssh_directives,
            package=ctx.cfg.ssh_package,
            service=ctx.cfg.ssh_service,
        )
