"""
Repository for the persisted application state.

Each slice of AppState is stored as one JSON document under a fixed key.
Missing or corrupt documents degrade to empty defaults so that a damaged
store never prevents the app from starting; a single malformed entry in a
list is skipped rather than discarding the whole list.

All serialization is encapsulated here - no JSON in service or API layers.
"""
import json
import logging
import sqlite3
from typing import Any, Callable, List, Optional, TypeVar

from core.exceptions import StorageError
from models import (
    AppState,
    HealthRecord,
    Medication,
    NotificationPermission,
    PatientProfile,
)
from repositories.base import Database

logger = logging.getLogger(__name__)

RECORDS_KEY = "dialysis_records"
MEDICATIONS_KEY = "dialysis_meds"
PROFILE_KEY = "dialysis_profile"
PERMISSION_KEY = "notification_permission"

T = TypeVar("T")


class AppStateRepository:
    """
    Load/save contract for AppState on top of the key-value Database.

    It should be instantiated via core.dependencies.get_state_repository().
    """

    def __init__(self, db: Database):
        """
        Args:
            db: Database instance for data access.
        """
        self._db = db

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load(self) -> AppState:
        """Load the full state, substituting defaults for anything unreadable."""
        state = AppState(
            records=self._load_list(RECORDS_KEY, HealthRecord.from_dict),
            medications=self._load_list(MEDICATIONS_KEY, Medication.from_dict),
            profile=self._load_profile(),
            notification_permission=self._load_permission(),
        )
        logger.info(
            "Application state loaded",
            extra={
                "records": len(state.records),
                "medications": len(state.medications),
                "has_profile": state.profile is not None,
            }
        )
        return state

    def _read_json(self, key: str) -> Optional[Any]:
        try:
            raw = self._db.load(key)
        except sqlite3.Error as e:
            logger.error(f"Failed to read '{key}' from store: {e}", exc_info=True)
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Corrupt JSON under '{key}', using default", extra={"key": key})
            return None

    def _load_list(self, key: str, parse: Callable[[dict], T]) -> List[T]:
        data = self._read_json(key)
        if data is None:
            return []
        if not isinstance(data, list):
            logger.warning(f"Expected a list under '{key}', using empty default")
            return []

        items: List[T] = []
        for index, entry in enumerate(data):
            try:
                items.append(parse(entry))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.warning(
                    f"Skipping malformed entry {index} under '{key}': {e}",
                    extra={"key": key, "index": index}
                )
        return items

    def _load_profile(self) -> Optional[PatientProfile]:
        data = self._read_json(PROFILE_KEY)
        if not data:
            return None
        try:
            return PatientProfile.from_dict(data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Malformed profile in store, ignoring: {e}")
            return None

    def _load_permission(self) -> NotificationPermission:
        data = self._read_json(PERMISSION_KEY)
        if data is None:
            return NotificationPermission.DEFAULT
        try:
            return NotificationPermission(data)
        except ValueError:
            logger.warning(f"Unknown notification permission {data!r}, using default")
            return NotificationPermission.DEFAULT

    # -------------------------------------------------------------------------
    # Saving
    # -------------------------------------------------------------------------

    def save_records(self, records: List[HealthRecord]) -> None:
        self._write_json(RECORDS_KEY, [r.to_dict() for r in records])

    def save_medications(self, medications: List[Medication]) -> None:
        self._write_json(MEDICATIONS_KEY, [m.to_dict() for m in medications])

    def save_profile(self, profile: PatientProfile) -> None:
        self._write_json(PROFILE_KEY, profile.to_dict())

    def save_permission(self, permission: NotificationPermission) -> None:
        self._write_json(PERMISSION_KEY, permission.value)

    def _write_json(self, key: str, payload: Any) -> None:
        """
        Raises:
            StorageError: If the write fails. The caller's operation fails; no retry.
        """
        try:
            self._db.save(key, json.dumps(payload, ensure_ascii=False))
        except sqlite3.Error as e:
            logger.error(f"Failed to write '{key}' to store: {e}", exc_info=True)
            raise StorageError(operation=f"save {key}") from e
