import json
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from sqlalchemy.orm import Session

from jrl.storage.models import LocalItem

logger = logging.getLogger(__name__)


class LocalStorage:
    """
    Persistent key/value surface local to the client.

    Values are JSON text under well-known keys. Reading a key whose value
    cannot be parsed is never fatal: the corruption is logged and the
    caller's default comes back instead.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get_item(self, key: str) -> Optional[str]:
        with self.session_factory() as db:
            item = db.get(LocalItem, key)
            return item.value if item else None

    def set_item(self, key: str, value: str) -> None:
        with self.session_factory() as db:
            item = db.get(LocalItem, key)
            if item:
                item.value = value
                item.updated_at = datetime.now(timezone.utc)
            else:
                db.add(LocalItem(key=key, value=value))
            db.commit()

    def remove_item(self, key: str) -> None:
        with self.session_factory() as db:
            item = db.get(LocalItem, key)
            if item:
                db.delete(item)
                db.commit()

    def read_json(self, key: str, default: Any = None) -> Any:
        """
        Parse the JSON value under ``key``.

        Args:
            key (str): Storage key.
            default: Returned when the key is missing or its value is corrupt.

        Returns:
            The decoded value, or ``default``.
        """
        raw = self.get_item(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError as e:
            logger.error(f"Corrupt local value under '{key}', using default: {e}")
            return default

    def write_json(self, key: str, value: Any) -> None:
        self.set_item(key, json.dumps(value, default=str))
