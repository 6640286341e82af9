from .step_10_update import UpdateSystemStep
from .step_20_core import InstallCoreToolsStep
from .step_30_rust import SetupRustStep
from .step_40_openvpn import SetupOpenVPNStep
from .step_50_snap import InstallSnapPackagesStep
from .step_60_neovim import InstallNeovimStep, InstallNvChadStep, PurgeOldEditorsStep
from .step_70_git_repos import CloneGitReposStep
from .step_80_zsh import SetupZshStep
from .step_85_dotfiles import CopyDotfilesStep
from .step_90_fonts import InstallNerdFontsStep
from .step_99_cleanup import CleanupStep

__all__ = [
    "UpdateSystemStep",
    "InstallCoreToolsStep",
    "SetupRustStep",
    "SetupOpenVPNStep",
    "InstallSnapPackagesStep",
    "PurgeOldEditorsStep",
    "InstallNeovimStep",
    "InstallNvChadStep",
    "CloneGitReposStep",
    "SetupZshStep",
    "CopyDotfilesStep",
    "InstallNerdFontsStep",
    "CleanupStep",
]
