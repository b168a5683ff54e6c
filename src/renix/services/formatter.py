"""Formatter gate for the declarative configuration files."""

from typing import Callable, List

from renix.errors import FormatFailure, RenixError
from renix.errors_catalog import actionable_error


class FormatterService:
    def __init__(self, logger, console, run_cmd: Callable, formatter: str):
        self.logger = logger
        self.console = console
        self.run_cmd = run_cmd
        self.formatter = formatter

    def format(self, files: List[str]):
        if not files:
            self.logger.warning("No configuration files to format.")
            return

        self.console.print(f"[blue]Formatting {len(files)} file(s) with {self.formatter}...[/blue]")
        try:
            self.run_cmd([self.formatter, "-q", *files])
        except RenixError as exc:
            raise FormatFailure(actionable_error("format_failed", formatter=self.formatter)) from exc
