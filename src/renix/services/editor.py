"""Opens configuration files in the operator's editor."""

import os
import shlex
from typing import Callable, Optional

from renix.errors import RenixError
from renix.errors_catalog import actionable_error


class EditorService:
    def __init__(self, logger, run_cmd: Callable, editor: Optional[str]):
        self.logger = logger
        self.run_cmd = run_cmd
        self.editor = editor

    def edit(self, root: str, target: str):
        path = os.path.join(root, target)
        if not os.path.isfile(path):
            raise RenixError(actionable_error("edit_target_missing", path=target))
        if not self.editor:
            raise RenixError(actionable_error("no_editor"))

        result = self.run_cmd([*shlex.split(self.editor), target], check=False)
        if result.returncode != 0:
            self.logger.debug("Editor exited with %s", result.returncode)
