"""
Storage: persistence collaborator for simulation results.
"""

from .store import InMemoryScenarioStore, ScenarioStore, ScenarioStoreError, SQLiteScenarioStore

__all__ = [
    "InMemoryScenarioStore",
    "ScenarioStore",
    "ScenarioStoreError",
    "SQLiteScenarioStore",
]
