from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from .config import load_config
from .confirm import confirm_or_abort
from .errors import BootstrapError
from .lib.env import PATHS, Paths
from .lib.hostname import valid_hostname
from .logging_utils import configure_logging
from .pipeline import BootstrapCtx, PipelineResult, run_pipeline
from .preflight import run_preflight
from .steps import (
    BasePackagesStep,
    FinalizeStep,
    HardenSSHStep,
    InstallDockerStep,
    OperatorAccessStep,
    OperatorShellStep,
    RenameHostStep,
    RootShellStep,
)

logger = logging.getLogger(__name__)


def build_steps():
    return [
        RenameHostStep(),
        BasePackagesStep(),
        InstallDockerStep(),
        HardenSSHStep(),
        RootShellStep(),
        OperatorAccessStep(),
        OperatorShellStep(),
        FinalizeStep(),
    ]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="hostinit",
        description="Initialise a Debian-family host (run with sudo from the operator account).",
        allow_abbrev=False,
    )
    p.add_argument("--rename", metavar="HOSTNAME", default=None, help="Rename the machine")
    args, extra = p.parse_known_args(argv)
    if extra:
        p.error(f"Unknown option: {extra[0]}")
    return args


def run(*, rename: Optional[str] = None, paths: Paths = PATHS) -> PipelineResult:
    """Preflight, confirm, then apply every step."""

    if rename is not None and not valid_hostname(rename):
        raise BootstrapError(f"Invalid hostname: {rename!r}")

    pre = run_preflight(os_release_path=paths.os_release)
    cfg = load_config()

    confirm_or_abort(pre.operator.name, rename)

    ctx = BootstrapCtx(
        cfg=cfg,
        operator=pre.operator,
        os_release=pre.os_release,
        paths=paths,
        rename=rename,
    )
    result = run_pipeline(ctx=ctx, steps=build_steps())
    logger.info("Ran steps: %s", ", ".join(result.ran_steps))
    return result


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging()

    try:
        run(rename=args.rename)
    except BootstrapError as e:
        logger.error("ERROR: %s", e)
        return 1
    except Exception:
        logger.exception("hostinit failed")
        return 1
    return 0
