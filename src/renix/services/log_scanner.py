"""Heuristic classification of builder logs.

The builder's exit status is not trusted; the log is searched for literal
markers instead, in a fixed order. This can misfire both ways: a failure that
prints neither marker passes as success, and a package whose name contains
``error:`` or ``SIGKILL`` reads as a failure. That is a known limitation.
"""

from typing import Iterable, Optional, Tuple

from renix.constants import ERROR_MARKER, KILLED_MARKER
from renix.models import BuildOutcome, OutcomeKind

MARKERS: Tuple[Tuple[str, OutcomeKind], ...] = (
    (ERROR_MARKER, OutcomeKind.BUILD_FAILURE),
    (KILLED_MARKER, OutcomeKind.KILLED),
)


def _first_line_with(lines: Iterable[str], marker: str) -> Optional[str]:
    for line in lines:
        if marker in line:
            return line.strip()
    return None


def classify(text: str) -> BuildOutcome:
    lines = text.splitlines()
    for marker, kind in MARKERS:
        match = _first_line_with(lines, marker)
        if match is not None:
            return BuildOutcome(kind=kind, reason=match)
    return BuildOutcome(kind=OutcomeKind.SUCCESS)


def classify_file(log_path: str) -> BuildOutcome:
    with open(log_path, "r", encoding="utf-8", errors="replace") as file_obj:
        return classify(file_obj.read())
