"""Subprocess execution service for renix."""

import subprocess
from typing import List

from renix.errors import RenixError


class CommandRunner:
    """Runs external commands with consistent error handling."""

    def __init__(self, logger, console=None):
        self.logger = logger
        self.console = console

    def run(
        self,
        cmd: List[str],
        check: bool = True,
        capture_output: bool = False,
    ) -> subprocess.CompletedProcess:
        cmd_str = " ".join(cmd)
        self.logger.debug("Executing: %s", cmd_str)

        try:
            result = subprocess.run(
                cmd,
                text=True,
                encoding="utf-8",
                errors="replace",
                capture_output=capture_output,
            )
        except FileNotFoundError as exc:
            raise RenixError(
                f"Required command not found: {cmd[0]}. Please install it and try again."
            ) from exc
        except Exception as exc:
            raise RenixError(f"Failed to execute command: {cmd_str}. {exc}") from exc

        if capture_output and result.stdout:
            self.logger.debug("Command output: %s", result.stdout.strip())

        if result.returncode == 0:
            return result

        stderr = (result.stderr or "").strip() if capture_output else ""
        message = f"Command failed ({result.returncode}): {cmd_str}"
        if stderr:
            message = f"{message}\n{stderr}"

        if check:
            raise RenixError(message)

        self.logger.debug(message)
        return result

    def stream(self, cmd: List[str], log_path: str) -> int:
        """Runs ``cmd`` to completion, copying every output line to the console and ``log_path``.

        The log file is truncated first. Undecodable bytes are replaced, so the
        log always holds what the command printed. Returns the process exit
        status without judging it; callers decide what a failure looks like.
        """
        cmd_str = " ".join(cmd)
        self.logger.debug("Streaming: %s > %s", cmd_str, log_path)

        try:
            log_file = open(log_path, "w", encoding="utf-8")
        except OSError as exc:
            raise RenixError(f"Could not write log file '{log_path}': {exc}") from exc

        with log_file:
            try:
                process = subprocess.Popen(
                    cmd,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT,
                    text=True,
                    encoding="utf-8",
                    errors="replace",
                    bufsize=1,
                )
            except FileNotFoundError as exc:
                raise RenixError(
                    f"Required command not found: {cmd[0]}. Please install it and try again."
                ) from exc
            except Exception as exc:
                raise RenixError(f"Failed to start command: {cmd_str}. {exc}") from exc

            completed = False
            try:
                if process.stdout is None:
                    raise RenixError(f"Command did not expose its output: {cmd_str}")
                for line in process.stdout:
                    log_file.write(line)
                    log_file.flush()
                    if self.console is not None:
                        self.console.print(line.rstrip("\n"), markup=False, highlight=False)
                completed = True
            finally:
                # The child never outlives this call.
                if not completed and process.poll() is None:
                    process.terminate()
                returncode = self._finish(process)

        self.logger.debug("Command exited with %s: %s", returncode, cmd_str)
        return returncode

    def _finish(self, process: subprocess.Popen) -> int:
        if process.stdout is not None:
            process.stdout.close()
        return process.wait()
