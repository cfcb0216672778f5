from __future__ import annotations

from ..lib.accounts import runner_for
from ..lib.zsh import configure_shell
from ..pipeline import BootstrapCtx


class OperatorShellStep:
    step_id = "80_operator_shell"

    def run(self, ctx: BootstrapCtx) -> None:
        configure_shell(ctx.operator, runner_for(ctx.operator), ctx.cfg.shell_setup)
