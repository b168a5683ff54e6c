"""Domain errors for renix."""

from typing import Optional


class RenixError(RuntimeError):
    """Raised when the rebuild cannot continue safely."""


class UsageError(RenixError):
    """Raised when command-line options contradict each other."""


class FormatFailure(RenixError):
    """Raised when the formatter rejects the configuration files."""


class BuildFailure(RenixError):
    """Raised when the rebuild log carries an error marker."""

    def __init__(self, message: str, reason: Optional[str] = None, log_path: Optional[str] = None):
        super().__init__(message)
        self.reason = reason
        self.log_path = log_path


class KilledBuild(BuildFailure):
    """Raised when the builder was killed, usually by the OOM killer."""


class PushFailure(RenixError):
    """Raised when the remote push fails after a local commit."""
