from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping, Union

from core.schema import SimulationInputs


def inputs_from_form(form: Mapping[str, Any]) -> SimulationInputs:
    """
    Build SimulationInputs from a raw form mapping (camelCase or snake_case keys).
    Unparseable numbers become 0; unknown keys are ignored.
    """
    return SimulationInputs.model_validate(dict(form))


def load_inputs_json(path: Union[str, Path]) -> SimulationInputs:
    """Load a saved form (JSON object) from disk."""
    with open(path, "r", encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {path}, got {type(data).__name__}.")
    return inputs_from_form(data)
