"""
Persistence collaborator for simulation results.

Contract: save(scenario_key, result) / load(scenario_key) -> result | None,
keyed by an opaque company/session identifier. The stored payload is exactly
SimulationResult.to_dict(). A failed save never touches the in-memory result.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Union

from core.schema import SimulationResult

logger = logging.getLogger(__name__)


class ScenarioStoreError(RuntimeError):
    """Raised when the storage backend fails to save or load."""


class ScenarioStore(Protocol):
    def save(self, scenario_key: str, result: SimulationResult) -> None:
        ...

    def load(self, scenario_key: str) -> Optional[SimulationResult]:
        ...


def _require_key(scenario_key: str) -> str:
    key = str(scenario_key or "").strip()
    if not key:
        raise ValueError("scenario_key must be a non-empty string.")
    return key


class InMemoryScenarioStore:
    """Dict-backed store; payloads are copied through JSON like a real backend."""

    def __init__(self):
        self._payloads: Dict[str, str] = {}

    def save(self, scenario_key: str, result: SimulationResult) -> None:
        self._payloads[_require_key(scenario_key)] = json.dumps(result.to_dict())

    def load(self, scenario_key: str) -> Optional[SimulationResult]:
        payload = self._payloads.get(_require_key(scenario_key))
        if payload is None:
            return None
        return SimulationResult.from_dict(json.loads(payload))

    def keys(self) -> List[str]:
        return sorted(self._payloads)


class SQLiteScenarioStore:
    """
    SQLite-backed store. One row per scenario key; saving again replaces the row.
    """

    def __init__(self, db_file: Union[str, Path]):
        self.db_file = str(db_file)
        self.setup()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_file)

    def setup(self) -> None:
        """Create the results table if it does not exist."""
        conn = None
        try:
            conn = self._connect()
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS simulation_results (
                    scenario_key TEXT PRIMARY KEY,
                    saved_at TEXT NOT NULL,
                    payload TEXT NOT NULL
                )
                """
            )
            conn.commit()
        except sqlite3.Error as e:
            raise ScenarioStoreError(f"Could not initialise {self.db_file}: {e}") from e
        finally:
            if conn is not None:
                conn.close()

    def save(self, scenario_key: str, result: SimulationResult) -> None:
        key = _require_key(scenario_key)
        payload = json.dumps(result.to_dict())
        saved_at = datetime.now(timezone.utc).isoformat()
        conn = None
        try:
            conn = self._connect()
            conn.execute(
                """
                INSERT INTO simulation_results (scenario_key, saved_at, payload)
                VALUES (?, ?, ?)
                ON CONFLICT(scenario_key) DO UPDATE SET
                    saved_at = excluded.saved_at,
                    payload = excluded.payload
                """,
                (key, saved_at, payload),
            )
            conn.commit()
        except sqlite3.Error as e:
            logger.warning("Save failed for scenario %r: %s", key, e)
            raise ScenarioStoreError(f"Save failed for scenario '{key}': {e}") from e
        finally:
            if conn is not None:
                conn.close()

    def load(self, scenario_key: str) -> Optional[SimulationResult]:
        key = _require_key(scenario_key)
        conn = None
        try:
            conn = self._connect()
            row = conn.execute(
                "SELECT payload FROM simulation_results WHERE scenario_key = ?", (key,)
            ).fetchone()
        except sqlite3.Error as e:
            logger.warning("Load failed for scenario %r: %s", key, e)
            raise ScenarioStoreError(f"Load failed for scenario '{key}': {e}") from e
        finally:
            if conn is not None:
                conn.close()
        if row is None:
            return None
        return SimulationResult.from_dict(json.loads(row[0]))
