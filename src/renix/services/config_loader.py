"""Configuration loader for renix."""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import click
import yaml

from renix.errors import RenixError

DEFAULT_CONFIG_NAME = ".renix.yml"


class ConfigLoader:
    """Loads YAML configuration files for CLI defaults."""

    SUPPORTED_KEYS = {
        "repo_root",
        "main_config",
        "lock_file",
        "pins_file",
        "editor",
        "formatter",
        "use_sudo",
        "limited_cores",
        "remote",
        "branch",
        "notify",
        "notify_app_name",
        "screen_hold_seconds",
        "verbose",
        "log_file",
    }

    def default_path(self, cwd: Optional[str] = None) -> Optional[str]:
        """First existing default config: ``./.renix.yml``, then the per-user app dir."""
        candidates = [
            os.path.join(cwd or os.getcwd(), DEFAULT_CONFIG_NAME),
            os.path.join(click.get_app_dir("renix"), "config.yml"),
        ]
        for candidate in candidates:
            if os.path.exists(candidate):
                return candidate
        return None

    def load(self, config_path: Optional[str]) -> Dict[str, Any]:
        if not config_path:
            return {}

        path = Path(config_path)
        if not path.exists():
            raise RenixError(f"Config file not found: {config_path}")

        try:
            parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (yaml.YAMLError, OSError) as exc:
            raise RenixError(f"Invalid config file '{config_path}': {exc}") from exc

        if parsed is None:
            return {}
        if not isinstance(parsed, dict):
            raise RenixError("Config file must contain a YAML mapping at the root.")

        unknown = sorted(set(parsed.keys()) - self.SUPPORTED_KEYS)
        if unknown:
            unknown_list = ", ".join(unknown)
            raise RenixError(f"Unknown configuration keys: {unknown_list}")

        return parsed
