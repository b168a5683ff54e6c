"""Filesystem helpers for renix."""

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List

from renix.constants import CONFIG_PATTERN
from renix.errors import RenixError


class FileSystemService:
    """Encapsulates working-directory and file lookup side effects."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    @contextmanager
    def working_directory(self, path: str) -> Iterator[str]:
        """Enters ``path`` and returns to the previous directory on every exit path."""
        target = os.path.abspath(os.path.expanduser(path))
        if not os.path.isdir(target):
            raise RenixError(f"Repository root not found: {target}")

        previous = os.getcwd()
        os.chdir(target)
        self.logger.debug("Entered %s", target)
        try:
            yield target
        finally:
            os.chdir(previous)
            self.logger.debug("Returned to %s", previous)

    def top_level_config_files(self, root: str) -> List[str]:
        # Nested directories may be submodules; only the root is ours to format.
        return sorted(path.name for path in Path(root).glob(CONFIG_PATTERN) if path.is_file())
