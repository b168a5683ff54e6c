"""Alternate-screen presentation around long-running commands."""

import time
from contextlib import contextmanager
from typing import Iterator


class ScreenService:
    """Runs noisy commands on the terminal's alternate screen.

    The operator's scrollback stays intact; the full output is kept in the
    step's log file instead. On a non-terminal console this is a no-op apart
    from the title line.
    """

    def __init__(self, console, hold_seconds: float = 0, sleep=time.sleep):
        self.console = console
        self.hold_seconds = hold_seconds
        self.sleep = sleep

    @contextmanager
    def alternate(self, title: str, countdown: bool = False) -> Iterator[None]:
        entered = self.console.set_alt_screen(True)
        try:
            if entered:
                self.console.clear()
            self.console.print(f"[bold blue]{title}[/bold blue]")
            yield
            if countdown:
                self._countdown()
        finally:
            if entered:
                self.console.set_alt_screen(False)

    def _countdown(self):
        remaining = int(self.hold_seconds)
        while remaining > 0:
            self.console.print(f"Exit in {remaining}...")
            self.sleep(1)
            remaining -= 1
