import logging
import os
import time
from typing import List, Optional

from rich.console import Console

from .constants import BOOT_REFRESH_LOG, CONFIG_PATTERN, GC_LOG, REBUILD_LOG
from .errors import BuildFailure, FormatFailure, KilledBuild, RenixError
from .errors_catalog import actionable_error
from .models import BuildOutcome, ChangeState, OutcomeKind, RebuildSettings, RunOptions
from .services.builder import BuilderService
from .services.change_detector import DESCRIPTIONS, detect_changes
from .services.command_runner import CommandRunner
from .services.editor import EditorService
from .services.filesystem import FileSystemService
from .services.formatter import FormatterService
from .services.log_scanner import classify_file
from .services.notifier import NotifierService
from .services.screen import ScreenService
from .services.vcs import VcsService, push_to_remote

console = Console()
logger = logging.getLogger("renix")


class RebuildOrchestrator:
    """Detect, format, rebuild, classify, commit; in that order and nothing concurrent."""

    def __init__(
        self,
        options: RunOptions,
        settings: RebuildSettings,
        command_runner: Optional[CommandRunner] = None,
        console: Console = console,
        sleep=time.sleep,
    ):
        self.options = options
        self.settings = settings
        self.console = console
        self.change_state: Optional[ChangeState] = None
        self.outcome: Optional[BuildOutcome] = None

        self.command_runner = command_runner or CommandRunner(logger=logger, console=console)
        run_cmd = self.command_runner.run
        self.filesystem_service = FileSystemService(logger=logger)
        self.vcs_service = VcsService(logger=logger, console=console, run_cmd=run_cmd)
        self.formatter_service = FormatterService(
            logger=logger,
            console=console,
            run_cmd=run_cmd,
            formatter=settings.formatter,
        )
        self.builder_service = BuilderService(
            logger=logger,
            console=console,
            run_cmd=run_cmd,
            stream_cmd=self.command_runner.stream,
            settings=settings,
        )
        self.editor_service = EditorService(logger=logger, run_cmd=run_cmd, editor=settings.editor)
        self.notifier_service = NotifierService(
            logger=logger,
            run_cmd=run_cmd,
            app_name=settings.notify_app_name,
            enabled=settings.notify,
        )
        self.screen_service = ScreenService(
            console=console,
            hold_seconds=settings.screen_hold_seconds,
            sleep=sleep,
        )

    def detect_changes(self) -> ChangeState:
        config_changed = self.vcs_service.has_changes(CONFIG_PATTERN)
        pins_changed = False if config_changed else self.vcs_service.has_changes(self.settings.lock_file)
        return detect_changes(config_changed, pins_changed, self.options)

    def format_files(self, files: List[str]):
        try:
            self.formatter_service.format(files)
        except FormatFailure:
            self.outcome = BuildOutcome(kind=OutcomeKind.FORMAT_FAILURE)
            raise

    def rebuild(self, nixpkgs_path: str, log_path: str):
        self.console.print("[blue]Rebuilding NixOS configuration...[/blue]")
        with self.screen_service.alternate("Rebuilding NixOS configuration...", countdown=True):
            returncode = self.builder_service.rebuild(
                nixpkgs_path,
                log_path,
                boot=self.options.boot,
                limited=self.options.limited,
            )
            self.console.print("Rebuild completed")
        # The exit status is informational; the log markers decide.
        logger.debug("nixos-rebuild exited with %s", returncode)

    def classify(self, log_path: str) -> BuildOutcome:
        outcome = classify_file(log_path)
        self.outcome = outcome
        if outcome.succeeded:
            return outcome

        log_name = os.path.basename(log_path)

        if outcome.kind is OutcomeKind.BUILD_FAILURE:
            self.console.print("[red]Rebuild failed, exiting.[/red]")
            raise BuildFailure(
                actionable_error("build_failed", reason=outcome.reason or "", log_path=log_name),
                reason=outcome.reason,
                log_path=log_path,
            )
        if outcome.kind is OutcomeKind.KILLED:
            self.console.print("[red]Rebuild was killed (probably out of memory), exiting.[/red]")
            raise KilledBuild(
                actionable_error("build_killed", log_path=log_name),
                reason=outcome.reason,
                log_path=log_path,
            )
        raise RenixError(f"Unclassified build outcome: {outcome.kind.value}")

    def commit(self, config_files: List[str]) -> bool:
        self.console.print("[blue]Rebuild successful, committing changes...[/blue]")
        generation = self.builder_service.current_generation()

        paths = list(config_files)
        if os.path.exists(self.settings.lock_file):
            paths.insert(0, self.settings.lock_file)
        self.vcs_service.stage(paths)

        if not self.vcs_service.has_staged_changes():
            self.console.print("[yellow]Nothing to commit.[/yellow]")
            return False

        self.vcs_service.commit(generation.commit_message())
        self.console.print("[green]Changes committed successfully.[/green]")
        return True

    def clean(self, root: str, nixpkgs_path: str):
        """Garbage-collects and refreshes boot entries. Failures here are logged, not raised."""
        steps = (
            ("Collecting garbage...", lambda: self.builder_service.collect_garbage(os.path.join(root, GC_LOG))),
            (
                "Refreshing boot entries...",
                lambda: self.builder_service.refresh_boot_entries(
                    nixpkgs_path, os.path.join(root, BOOT_REFRESH_LOG)
                ),
            ),
        )
        for title, step in steps:
            try:
                with self.screen_service.alternate(title):
                    returncode = step()
            except RenixError as exc:
                logger.warning("%s %s", title, exc)
                continue
            logger.info("%s finished with exit status %s", title, returncode)

    def _run_pipeline(self, root: str) -> int:
        if self.options.update:
            self.builder_service.update_pins()

        if self.options.edit:
            self.editor_service.edit(root, self.options.edit_target or self.settings.main_config)

        self.change_state = self.detect_changes()
        self.console.print(DESCRIPTIONS[self.change_state])

        if self.change_state is ChangeState.PUSH_ONLY:
            push_to_remote(self.vcs_service, self.settings.remote, self.settings.branch)
            return 0
        if not self.change_state.proceeds:
            return 0

        config_files = self.filesystem_service.top_level_config_files(root)
        self.format_files(config_files)
        self.vcs_service.show_diff()

        nixpkgs_path = self.builder_service.resolve_nixpkgs_path()
        log_path = os.path.join(root, REBUILD_LOG)
        self.rebuild(nixpkgs_path, log_path)
        self.classify(log_path)
        self.commit(config_files)

        if self.options.push:
            push_to_remote(self.vcs_service, self.settings.remote, self.settings.branch)

        if self.options.clean:
            self.clean(root, nixpkgs_path)

        self.console.print("[bold green]NixOS configuration rebuild and commit completed successfully.[/bold green]")
        self.notifier_service.success()
        return 0

    def run(self) -> int:
        try:
            with self.filesystem_service.working_directory(self.settings.repo_root) as root:
                logger.debug("Working in %s", root)
                return self._run_pipeline(root)
        except RenixError as exc:
            self.console.print(f"[bold red]Error:[/bold red] {exc}")
            logger.error(str(exc))
            self.notifier_service.failure(str(exc))
            return 1
        except Exception as exc:
            self.console.print(f"[bold red]Unexpected error:[/bold red] {exc}")
            logger.exception("Unexpected error")
            self.notifier_service.failure(str(exc))
            return 1
