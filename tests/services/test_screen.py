import io

import pytest
from rich.console import Console

from renix.services.screen import ScreenService


class TerminalConsole:
    def __init__(self):
        self.events = []

    def set_alt_screen(self, enable=True):
        self.events.append(("alt", enable))
        return True

    def clear(self):
        self.events.append(("clear",))

    def print(self, text, **_kwargs):
        self.events.append(("print", text))


def test_alternate_screen_is_left_after_countdown():
    console = TerminalConsole()
    sleeps = []
    screen = ScreenService(console=console, hold_seconds=3, sleep=sleeps.append)

    with screen.alternate("Rebuilding...", countdown=True):
        console.print("build output")

    assert console.events[0] == ("alt", True)
    assert console.events[-1] == ("alt", False)
    assert ("print", "Exit in 1...") in console.events
    assert sleeps == [1, 1, 1]


def test_alternate_screen_is_left_when_body_raises():
    console = TerminalConsole()
    screen = ScreenService(console=console, hold_seconds=3, sleep=lambda _: None)

    with pytest.raises(RuntimeError):
        with screen.alternate("Rebuilding...", countdown=True):
            raise RuntimeError("interrupted")

    assert console.events[-1] == ("alt", False)
    assert not any(event[0] == "print" and "Exit in" in event[1] for event in console.events)


def test_non_terminal_console_only_prints_title():
    output = io.StringIO()
    screen = ScreenService(
        console=Console(file=output, width=80, force_terminal=False, color_system=None),
        hold_seconds=0,
    )

    with screen.alternate("Collecting garbage..."):
        pass

    assert output.getvalue().strip() == "Collecting garbage..."
