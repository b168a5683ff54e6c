import subprocess

import pytest

from renix.errors import PushFailure, RenixError
from renix.services.vcs import VcsService, push_to_remote


class DummyLogger:
    def info(self, *_args, **_kwargs):
        return None


class DummyConsole:
    def print(self, *_args, **_kwargs):
        return None


def _service(returncodes, calls):
    def fake_run_cmd(cmd, check=True, capture_output=False):
        calls.append(cmd)
        return subprocess.CompletedProcess(cmd, returncodes.get(tuple(cmd[:3]), 0), stdout="", stderr="")

    return VcsService(logger=DummyLogger(), console=DummyConsole(), run_cmd=fake_run_cmd)


def test_has_changes_maps_git_diff_exit_status():
    calls = []

    assert _service({("git", "diff", "--quiet"): 1}, calls).has_changes("*.nix") is True
    assert _service({("git", "diff", "--quiet"): 0}, calls).has_changes("*.nix") is False
    assert calls[0] == ["git", "diff", "--quiet", "--", "*.nix"]


def test_has_changes_raises_on_git_error():
    with pytest.raises(RenixError, match="git diff failed"):
        _service({("git", "diff", "--quiet"): 128}, []).has_changes("*.nix")


def test_has_staged_changes_uses_cached_diff():
    calls = []
    service = _service({("git", "diff", "--cached"): 1}, calls)

    assert service.has_staged_changes() is True
    assert calls == [["git", "diff", "--cached", "--quiet"]]


def test_stage_skips_empty_path_list():
    calls = []
    service = _service({}, calls)

    service.stage([])
    service.stage(["npins/sources.json", "configuration.nix"])

    assert calls == [["git", "add", "--", "npins/sources.json", "configuration.nix"]]


def test_push_to_remote_pushes_configured_branch():
    calls = []

    push_to_remote(_service({}, calls), "origin", "main")

    assert calls == [["git", "push", "-u", "origin", "main"]]


def test_push_to_remote_raises_push_failure():
    with pytest.raises(PushFailure, match="origin/main"):
        push_to_remote(_service({("git", "push", "-u"): 1}, []), "origin", "main")
