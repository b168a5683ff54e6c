"""Decides whether a rebuild is needed."""

from renix.models import ChangeState, RunOptions


def detect_changes(config_changed: bool, pins_changed: bool, options: RunOptions) -> ChangeState:
    """Applies the rebuild policy; the first matching rule wins.

    An unforced, unpushed run with a clean tree is a no-op, so the command is
    safe to run repeatedly (from a timer, for instance).
    """
    if config_changed:
        return ChangeState.CONFIG_CHANGED
    if pins_changed:
        return ChangeState.PINS_CHANGED
    if options.force:
        return ChangeState.FORCED
    if options.push:
        return ChangeState.PUSH_ONLY
    return ChangeState.NO_CHANGES


DESCRIPTIONS = {
    ChangeState.CONFIG_CHANGED: "Changes detected, proceeding with rebuild.",
    ChangeState.PINS_CHANGED: "No changes detected, but pins updated, proceeding with rebuild.",
    ChangeState.FORCED: "No changes detected, but force rebuild requested.",
    ChangeState.PUSH_ONLY: "No changes detected, no pins updated, but push requested.",
    ChangeState.NO_CHANGES: "No changes detected, exiting.",
}
