"""nixos-rebuild and friends."""

import json
from typing import Callable, List

from renix.errors import RenixError
from renix.errors_catalog import actionable_error
from renix.models import GenerationInfo, RebuildSettings
from renix.services.generations import current_generation


class BuilderService:
    """Builds the command lines for the Nix tooling and runs them."""

    def __init__(self, logger, console, run_cmd: Callable, stream_cmd: Callable, settings: RebuildSettings):
        self.logger = logger
        self.console = console
        self.run_cmd = run_cmd
        self.stream_cmd = stream_cmd
        self.settings = settings

    def _privileged(self, cmd: List[str]) -> List[str]:
        return ["sudo", *cmd] if self.settings.use_sudo else cmd

    def update_pins(self):
        self.console.print("[blue]Updating npins...[/blue]")
        result = self.run_cmd(["npins", "update"], check=False)
        if result.returncode != 0:
            self.logger.warning("npins update exited with %s; continuing with current pins.", result.returncode)

    def resolve_nixpkgs_path(self) -> str:
        """Reads the pinned nixpkgs store path so the rebuild never uses the channel."""
        pins_file = self.settings.pins_file
        try:
            result = self.run_cmd(
                ["nix-instantiate", "--json", "--eval", pins_file, "-A", "nixpkgs.outPath"],
                capture_output=True,
            )
            path = json.loads(result.stdout)
        except (RenixError, json.JSONDecodeError) as exc:
            raise RenixError(actionable_error("pins_unresolved", pins_file=pins_file)) from exc

        if not isinstance(path, str) or not path:
            raise RenixError(actionable_error("pins_unresolved", pins_file=pins_file))
        self.logger.debug("Pinned nixpkgs: %s", path)
        return path

    def rebuild_command(self, action: str, nixpkgs_path: str, limited: bool = False) -> List[str]:
        cmd = [
            "nixos-rebuild",
            action,
            "-I",
            f"nixos-config={self.settings.main_config_path}",
            "-I",
            f"nixpkgs={nixpkgs_path}",
        ]
        if limited:
            cmd.append(f"--cores={self.settings.limited_cores}")
        return self._privileged(cmd)

    def rebuild(self, nixpkgs_path: str, log_path: str, boot: bool = False, limited: bool = False) -> int:
        action = "boot" if boot else "switch"
        if limited:
            self.console.print("[yellow]Resource limited rebuild enabled[/yellow]")
        return self.stream_cmd(self.rebuild_command(action, nixpkgs_path, limited=limited), log_path)

    def collect_garbage(self, log_path: str) -> int:
        return self.stream_cmd(self._privileged(["nix-collect-garbage", "-d"]), log_path)

    def refresh_boot_entries(self, nixpkgs_path: str, log_path: str) -> int:
        return self.stream_cmd(self.rebuild_command("boot", nixpkgs_path), log_path)

    def current_generation(self) -> GenerationInfo:
        result = self.run_cmd(["nixos-rebuild", "list-generations", "--json"], capture_output=True)
        return current_generation(result.stdout)
