"""Git operations for renix."""

from typing import Callable, List

from renix.errors import PushFailure, RenixError
from renix.errors_catalog import actionable_error


class VcsService:
    """Thin wrapper over the git commands the rebuild needs."""

    def __init__(self, logger, console, run_cmd: Callable):
        self.logger = logger
        self.console = console
        self.run_cmd = run_cmd

    def has_changes(self, *pathspecs: str) -> bool:
        """True when the working tree differs from the index for ``pathspecs``."""
        result = self.run_cmd(
            ["git", "diff", "--quiet", "--", *pathspecs],
            check=False,
            capture_output=True,
        )
        if result.returncode == 0:
            return False
        if result.returncode == 1:
            return True
        raise RenixError(
            actionable_error("vcs_failed", action="diff")
            + f"\n{(result.stderr or '').strip()}"
        )

    def show_diff(self):
        self.run_cmd(["git", "diff", "-U0"], check=False)

    def stage(self, paths: List[str]):
        if not paths:
            return
        self.run_cmd(["git", "add", "--", *paths])

    def has_staged_changes(self) -> bool:
        result = self.run_cmd(["git", "diff", "--cached", "--quiet"], check=False, capture_output=True)
        if result.returncode > 1:
            raise RenixError(actionable_error("vcs_failed", action="diff --cached"))
        return result.returncode == 1

    def commit(self, message: str):
        self.run_cmd(["git", "commit", "-m", message])
        self.logger.info("Committed: %s", message)

    def push(self, remote: str, branch: str) -> bool:
        result = self.run_cmd(["git", "push", "-u", remote, branch], check=False)
        return result.returncode == 0


def push_to_remote(vcs: VcsService, remote: str, branch: str):
    """Pushes ``branch`` to ``remote``; shared by the no-change and post-commit paths."""
    vcs.console.print("[blue]Pushing changes to remote repository...[/blue]")
    if not vcs.push(remote, branch):
        raise PushFailure(actionable_error("push_failed", remote=remote, branch=branch))
    vcs.console.print("[green]Changes pushed successfully.[/green]")
