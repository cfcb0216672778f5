from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol, Sequence

from .config import BootstrapConfig
from .lib.accounts import Account
from .lib.env import PATHS, Paths

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BootstrapCtx:
    cfg: BootstrapConfig
    operator: Account
    os_release: Dict[str, str] = field(default_factory=dict)
    paths: Paths = PATHS
    rename: Optional[str] = None


class Step(Protocol):
    """A single idempotent step."""

    step_id: str

    def run(self, ctx: BootstrapCtx) -> None:
        ...


@dataclass(frozen=True)
class PipelineResult:
    ran_steps: List[str]


def run_pipeline(*, ctx: BootstrapCtx, steps: Sequence[Step]) -> PipelineResult:
    """Run every step in order; the first exception aborts the rest.

    Steps are never skipped on the basis of an earlier run: each one inspects
    the host and does only what is missing.
    """

    ran: List[str] = []
    for step in steps:
        logger.info("Running step %s", step.step_id)
        step.run(ctx)
        ran.append(step.step_id)
    return PipelineResult(ran_steps=ran)
