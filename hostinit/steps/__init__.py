from .step_20_rename_host import RenameHostStep
from .step_30_base_packages import BasePackagesStep
from .step_40_docker import InstallDockerStep
from .step_50_ssh import HardenSSHStep
from .step_60_root_shell import RootShellStep
from .step_70_operator_access import OperatorAccessStep
from .step_80_operator_shell import OperatorShellStep
from .step_90_finalize import FinalizeStep

__all__ = [
    "RenameHostStep",
    "BasePackagesStep",
    "InstallDockerStep",
    "HardenSSHStep",
    "RootShellStep",
    "OperatorAccessStep",
    "OperatorShellStep",
    "FinalizeStep",
]
