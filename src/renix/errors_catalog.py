"""Actionable error catalog for renix."""

from typing import Dict

_ERROR_MESSAGES: Dict[str, Dict[str, str]] = {
    "boot_push_conflict": {
        "what": "Options --boot and --push are mutually exclusive.",
        "next": "Rebuild with --boot, reboot, then run again with --push.",
    },
    "edit_target_missing": {
        "what": "File {path} does not exist.",
        "next": "Pass an existing file relative to the repository root to --edit.",
    },
    "no_editor": {
        "what": "No editor configured.",
        "next": "Set $EDITOR or the `editor` key in the renix config file.",
    },
    "format_failed": {
        "what": "Formatting with {formatter} failed.",
        "next": "Fix the syntax errors reported above and run again.",
    },
    "vcs_failed": {
        "what": "git {action} failed.",
        "next": "Check that the repository root is a git work tree.",
    },
    "pins_unresolved": {
        "what": "Could not resolve the pinned nixpkgs path from {pins_file}.",
        "next": "Run `npins show` and check that a `nixpkgs` pin exists.",
    },
    "build_failed": {
        "what": "Rebuild failed: {reason}",
        "next": "Check {log_path} for details.",
    },
    "build_killed": {
        "what": "Rebuild was killed (probably out of memory).",
        "next": "Check {log_path} for details, then retry with --limited.",
    },
    "no_current_generation": {
        "what": "No current generation reported by nixos-rebuild list-generations.",
        "next": "Inspect `nixos-rebuild list-generations` by hand before committing.",
    },
    "push_failed": {
        "what": "Failed to push changes to {remote}/{branch}.",
        "next": "The commit is kept locally. Resolve the remote state and run with --push.",
    },
}


def actionable_error(code: str, **kwargs: str) -> str:
    if code not in _ERROR_MESSAGES:
        raise KeyError(f"Unknown error catalog key: {code}")

    template = _ERROR_MESSAGES[code]
    what = template["what"].format(**kwargs)
    next_step = template["next"].format(**kwargs)
    return f"{what} Suggested action: {next_step}"
