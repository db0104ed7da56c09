"""
Input preparation: form parsing, validation, and historical pre-fill.
"""

from .loader import inputs_from_form, load_inputs_json
from .history import derive_historical_costs
from .validators import ValidationResult, validate_inputs

__all__ = [
    "inputs_from_form",
    "load_inputs_json",
    "derive_historical_costs",
    "ValidationResult",
    "validate_inputs",
]
