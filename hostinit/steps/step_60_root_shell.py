from __future__ import annotations

from ..lib.accounts import Account, runner_for
from ..lib.zsh import configure_shell
from ..pipeline import BootstrapCtx


class RootShellStep:
    step_id = "60_root_shell"

    def run(self, ctx: BootstrapCtx) -> None:
        root = Account.lookup("root")
        configure_shell(root, runner_for(root), ctx.cfg.shell_setup)
