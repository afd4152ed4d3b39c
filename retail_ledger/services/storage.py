"""
Durable key-value storage.

Two entries live here: the serialized snapshot and the
"is a session active" flag. Values are opaque strings.
"""

import logging

from sqlalchemy.orm import Session, sessionmaker

from retail_ledger.models.kv_entry import KeyValueEntry

logger = logging.getLogger(__name__)


class KeyValueStorage:
    """
    String key -> string value, backed by the kv_entries table.

    Each call opens its own session and commits before returning,
    so a value written here survives a restart.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def _session(self) -> Session:
        return self.session_factory()

    def get(self, key: str) -> str | None:
        db = self._session()
        try:
            entry = db.get(KeyValueEntry, key)
            return entry.value if entry else None
        finally:
            db.close()

    def set(self, key: str, value: str) -> None:
        db = self._session()
        try:
            entry = db.get(KeyValueEntry, key)
            if entry:
                entry.value = value
            else:
                db.add(KeyValueEntry(key=key, value=value))
            db.commit()
            logger.debug("Stored %s (%d chars)", key, len(value))
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def delete(self, key: str) -> None:
        db = self._session()
        try:
            entry = db.get(KeyValueEntry, key)
            if entry:
                db.delete(entry)
                db.commit()
        finally:
            db.close()
