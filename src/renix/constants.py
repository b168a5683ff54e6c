"""Default paths, commands and markers used by renix."""

DEFAULT_REPO_ROOT = "~/nixos-config"
DEFAULT_MAIN_CONFIG = "configuration.nix"
DEFAULT_LOCK_FILE = "npins/sources.json"
DEFAULT_PINS_FILE = "npins/default.nix"
DEFAULT_FORMATTER = "nixfmt"
DEFAULT_REMOTE = "origin"
DEFAULT_BRANCH = "main"
DEFAULT_LIMITED_CORES = 4
DEFAULT_SCREEN_HOLD_SECONDS = 3
DEFAULT_NOTIFY_APP_NAME = "NIXIT"

CONFIG_PATTERN = "*.nix"

REBUILD_LOG = "rebuild.log"
GC_LOG = "gc.log"
BOOT_REFRESH_LOG = "refresh-boot.log"

# Checked in this order; the first marker present decides the outcome.
ERROR_MARKER = "error:"
KILLED_MARKER = "SIGKILL"

ICON_FAILURE = "software-update-urgent"
ICON_SUCCESS = "software-update-available"
