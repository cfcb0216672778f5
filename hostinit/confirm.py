from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt

from .errors import BootstrapError

logger = logging.getLogger(__name__)

_YES = {"y", "yes"}


def summary_text(operator: str, rename: Optional[str] = None) -> str:
    lines = ["You are about to initialise this machine. This will:"]
    if rename:
        lines.append(f"  - rename the host to '{rename}' (backup of /etc/hosts kept)")
    lines += [
        "  - install base packages (git, curl, net-tools, ca-certificates, zsh, gpg, sudo)",
        "  - configure the Docker apt repository and install Docker",
        f"  - configure SSH: PermitRootLogin no, AllowUsers {operator} (backup of sshd_config kept)",
        f"  - grant NOPASSWD sudo to '{operator}'",
        f"  - add '{operator}' to the docker group",
        f"  - configure zsh, oh-my-zsh, plugins and powerlevel10k for root and '{operator}'",
    ]
    return "\n".join(lines)


def is_affirmative(answer: Optional[str]) -> bool:
    return (answer or "").strip().lower() in _YES


def confirm_or_abort(operator: str, rename: Optional[str] = None, *, console: Optional[Console] = None) -> None:
    console = console or Console()
    console.print(Panel(escape(summary_text(operator, rename)), title="hostinit", expand=False))
    try:
        answer = Prompt.ask(escape("Continue? [y/N]"), default="", show_default=False, console=console)
    except EOFError:
        answer = ""
    if not is_affirmative(answer):
        raise BootstrapError("Aborted by user.")
    logger.info("Confirmed by operator")
