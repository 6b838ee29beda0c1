from .step_10_update_repository import UpdateRepositoryStep
from .step_15_refresh_snaps import RefreshSnapsStep
from .step_20_install_programs import InstallProgramsStep
from .step_25_firefox_profiles import FirefoxProfilesStep
from .step_30_change_settings import ChangeSettingsStep
from .step_40_configure_bash import ConfigureBashStep
from .step_45_terminal_theme import TerminalThemeStep
from .step_50_configure_mpv import ConfigureMpvStep
from .step_55_install_yt_dlp import InstallYtDlpStep
from .step_60_install_binaries import InstallBinariesStep
from .step_65_configure_twitch import ConfigureTwitchStep
from .step_70_setup_virtualenv import SetupVirtualenvStep
from .step_90_cleanup import CleanupStep

__all__ = [
    "UpdateRepositoryStep",
    "RefreshSnapsStep",
    "InstallProgramsStep",
    "FirefoxProfilesStep",
    "ChangeSettingsStep",
    "ConfigureBashStep",
    "TerminalThemeStep",
    "ConfigureMpvStep",
    "InstallYtDlpStep",
    "InstallBinariesStep",
    "ConfigureTwitchStep",
    "SetupVirtualenvStep",
    "CleanupStep",
]
