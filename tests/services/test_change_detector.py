import pytest

from renix.models import ChangeState, RunOptions
from renix.services.change_detector import DESCRIPTIONS, detect_changes


@pytest.mark.parametrize(
    "config_changed, pins_changed, options, expected",
    [
        (True, True, RunOptions(push=True), ChangeState.CONFIG_CHANGED),
        (False, True, RunOptions(force=True), ChangeState.PINS_CHANGED),
        (False, False, RunOptions(force=True, push=True), ChangeState.FORCED),
        (False, False, RunOptions(push=True), ChangeState.PUSH_ONLY),
        (False, False, RunOptions(), ChangeState.NO_CHANGES),
    ],
)
def test_detect_changes_first_matching_rule_wins(config_changed, pins_changed, options, expected):
    assert detect_changes(config_changed, pins_changed, options) is expected


def test_only_real_changes_or_force_proceed_to_build():
    proceeding = {state for state in ChangeState if state.proceeds}

    assert proceeding == {ChangeState.CONFIG_CHANGED, ChangeState.PINS_CHANGED, ChangeState.FORCED}
    assert set(DESCRIPTIONS) == set(ChangeState)
