import pytest

from renix.errors_catalog import actionable_error


def test_actionable_error_formats_message_with_suggested_action():
    message = actionable_error("build_killed", log_path="rebuild.log")

    assert "killed (probably out of memory)" in message
    assert "Suggested action:" in message
    assert "rebuild.log" in message


def test_actionable_error_rejects_unknown_code():
    with pytest.raises(KeyError):
        actionable_error("does_not_exist")
