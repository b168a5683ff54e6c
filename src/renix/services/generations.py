"""Parsing of ``nixos-rebuild list-generations --json`` output."""

import json
from typing import Any, Dict, List

from renix.errors import RenixError
from renix.errors_catalog import actionable_error
from renix.models import GenerationInfo


def parse_generations(payload: str) -> List[Dict[str, Any]]:
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise RenixError(f"Could not parse generation list: {exc}") from exc

    if not isinstance(data, list):
        raise RenixError("Generation list must be a JSON array.")
    return [entry for entry in data if isinstance(entry, dict)]


def current_generation(payload: str) -> GenerationInfo:
    for entry in parse_generations(payload):
        if entry.get("current") is True:
            return GenerationInfo(
                generation_id=str(entry.get("generation", "")),
                nixos_version=str(entry.get("nixosVersion", "")),
                kernel_version=str(entry.get("kernelVersion", "")),
            )
    raise RenixError(actionable_error("no_current_generation"))
