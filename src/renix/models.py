"""Shared domain models for renix."""

import enum
import os
from dataclasses import dataclass
from typing import Optional

from .errors import UsageError
from .errors_catalog import actionable_error


@dataclass(frozen=True)
class RunOptions:
    """Flags for a single invocation."""

    edit: bool = False
    edit_target: Optional[str] = None
    boot: bool = False
    update: bool = False
    push: bool = False
    force: bool = False
    limited: bool = False
    clean: bool = False

    def __post_init__(self):
        if self.boot and self.push:
            raise UsageError(actionable_error("boot_push_conflict"))


@dataclass(frozen=True)
class RebuildSettings:
    """Environment the orchestrator runs against, resolved once at the CLI."""

    repo_root: str
    main_config: str
    lock_file: str
    pins_file: str
    formatter: str
    editor: Optional[str]
    use_sudo: bool
    limited_cores: int
    remote: str
    branch: str
    notify: bool
    notify_app_name: str
    screen_hold_seconds: float

    @property
    def main_config_path(self) -> str:
        return os.path.join(self.repo_root, self.main_config)


class ChangeState(enum.Enum):
    CONFIG_CHANGED = "config_changed"
    PINS_CHANGED = "pins_changed"
    FORCED = "forced"
    PUSH_ONLY = "push_only"
    NO_CHANGES = "no_changes"

    @property
    def proceeds(self) -> bool:
        return self in (ChangeState.CONFIG_CHANGED, ChangeState.PINS_CHANGED, ChangeState.FORCED)


class OutcomeKind(enum.Enum):
    SUCCESS = "success"
    FORMAT_FAILURE = "format_failure"
    BUILD_FAILURE = "build_failure"
    KILLED = "killed"


@dataclass(frozen=True)
class BuildOutcome:
    kind: OutcomeKind
    reason: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS


@dataclass(frozen=True)
class GenerationInfo:
    """The active generation as reported by ``nixos-rebuild list-generations``."""

    generation_id: str
    nixos_version: str
    kernel_version: str

    @property
    def os_version_major(self) -> str:
        return ".".join(self.nixos_version.split(".")[:2])

    def commit_message(self) -> str:
        return (
            f"Gen: {self.generation_id} "
            f"NixOS: {self.os_version_major} "
            f"Kernel: {self.kernel_version}"
        )
