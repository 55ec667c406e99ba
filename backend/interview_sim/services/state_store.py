from __future__ import annotations

import copy
import logging
from datetime import datetime
from typing import Any, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from interview_sim.db import SessionLocal
from interview_sim.db_models import StateRecordDB

LOGGER = logging.getLogger(__name__)


class StateStore(Protocol):
    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any) -> None: ...


class MemoryStateStore:
    """Process-local key-value store; values are copied in and out."""

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def get(self, key: str) -> Any | None:
        value = self._values.get(key)
        return copy.deepcopy(value)

    def set(self, key: str, value: Any) -> None:
        if value is None:
            self._values.pop(key, None)
            return
        self._values[key] = copy.deepcopy(_jsonify(value))


class SqlStateStore:
    """Key-value store over the state_records table. Failures are logged, never raised."""

    def __init__(self, session_factory: sessionmaker = SessionLocal) -> None:
        self._session_factory = session_factory

    def get(self, key: str) -> Any | None:
        try:
            with self._session_factory() as db:
                row = db.get(StateRecordDB, key)
                if row is None:
                    return None
                return row.value_json
        except SQLAlchemyError as exc:
            LOGGER.warning("Could not load state key '%s': %s", key, exc)
            return None

    def set(self, key: str, value: Any) -> None:
        try:
            with self._session_factory() as db:
                row = db.get(StateRecordDB, key)
                if value is None:
                    if row is not None:
                        db.delete(row)
                        db.commit()
                    return
                if row is None:
                    row = StateRecordDB(key=key)
                row.value_json = _jsonify(value)
                db.add(row)
                db.commit()
        except SQLAlchemyError as exc:
            LOGGER.warning("Could not save state key '%s': %s", key, exc)


def _jsonify(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(key): _jsonify(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonify(item) for item in value]
    return value
