"""
Cost projection engine: Monte Carlo runner plus deterministic projections.
"""

from .runner import run_simulation
from .projection import back_project_history, project_forward

__all__ = ["run_simulation", "back_project_history", "project_forward"]
