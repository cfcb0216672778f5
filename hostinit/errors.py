from __future__ import annotations

from typing import Sequence


class BootstrapError(RuntimeError):
    """Fatal condition: the run stops and exits non-zero."""


class MissingToolError(BootstrapError):
    pass


class CommandError(BootstrapError):
    def __init__(self, argv: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        msg = f"Command failed ({returncode}): {' '.join(self.argv)}"
        if stderr.strip():
            msg += f"\n{stderr.strip()}"
        super().__init__(msg)
