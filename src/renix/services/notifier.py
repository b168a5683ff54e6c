"""Best-effort desktop notifications."""

from typing import Callable

from renix.constants import ICON_FAILURE, ICON_SUCCESS
from renix.errors import RenixError


class NotifierService:
    """Sends ``notify-send`` messages; never fails the run."""

    def __init__(self, logger, run_cmd: Callable, app_name: str, enabled: bool = True):
        self.logger = logger
        self.run_cmd = run_cmd
        self.app_name = app_name
        self.enabled = enabled

    def _send(self, icon: str, summary: str):
        if not self.enabled:
            return
        cmd = [
            "notify-send",
            "--transient",
            f"--icon={icon}",
            f"--app-name={self.app_name}",
            summary,
        ]
        try:
            result = self.run_cmd(cmd, check=False, capture_output=True)
        except RenixError as exc:
            self.logger.warning("Could not send notification: %s", exc)
            return
        if result.returncode != 0:
            self.logger.warning("notify-send exited with %s", result.returncode)

    def failure(self, message: str):
        self._send(ICON_FAILURE, f"Rebuild Failed: {message}")

    def success(self):
        self._send(ICON_SUCCESS, "Rebuild Successful")
