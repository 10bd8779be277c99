import logging
import threading
from datetime import datetime, timezone
from typing import Dict, List, Optional, Set

from pydantic import ValidationError

from jrl.journals.schemas import Journal, Translation
from jrl.storage.service import LocalStorage

logger = logging.getLogger(__name__)

JOURNALS_KEY = "localJournals"
TRANSLATIONS_KEY = "journalTranslations"
TOMBSTONES_KEY = "journalTombstones"


class FallbackStore:
    """
    Journals that could not be committed remotely, kept on the client.

    The whole collection is one serialized list under ``localJournals``;
    every operation reads, modifies and writes the full list. A lock keeps
    those read-modify-write cycles from interleaving inside the process.
    """

    def __init__(self, storage: LocalStorage):
        self.storage = storage
        self._lock = threading.RLock()

    # Helpers
    def _load(self) -> List[Journal]:
        raw = self.storage.read_json(JOURNALS_KEY, [])
        if not isinstance(raw, list):
            logger.error("Fallback journal list is not a list, treating as empty")
            return []
        journals = []
        for item in raw:
            try:
                journals.append(Journal.model_validate(item))
            except ValidationError as e:
                logger.error(f"Skipping unreadable fallback journal: {e}")
        return journals

    def _save(self, journals: List[Journal]) -> None:
        self.storage.write_json(JOURNALS_KEY, [j.model_dump(mode="json") for j in journals])

    # Journal records
    def upsert(self, journal: Journal) -> Journal:
        """
        Insert ``journal`` when its id is unseen, otherwise replace it in place.

        Returns:
            Journal: The stored record, stamped with a fresh ``updated_at``.
        """
        stored = journal.model_copy(update={"updated_at": datetime.now(timezone.utc)})
        with self._lock:
            journals = self._load()
            for index, existing in enumerate(journals):
                if existing.id == journal.id:
                    journals[index] = stored
                    break
            else:
                journals.append(stored)
            self._save(journals)
        logger.info("Journal saved to fallback store: %s", journal.id)
        return stored

    def get(self, journal_id: str) -> Optional[Journal]:
        with self._lock:
            return next((j for j in self._load() if j.id == journal_id), None)

    def list_by_owner(self, owner_id: str) -> List[Journal]:
        with self._lock:
            return [j for j in self._load() if j.user_id == owner_id]

    def list_all(self) -> List[Journal]:
        with self._lock:
            return self._load()

    def remove(self, journal_id: str) -> bool:
        with self._lock:
            journals = self._load()
            remaining = [j for j in journals if j.id != journal_id]
            if len(remaining) == len(journals):
                return False
            self._save(remaining)
        logger.info("Journal removed from fallback store: %s", journal_id)
        return True

    # Translations
    def save_translation(self, journal_id: str, language: str, translation: Translation) -> None:
        """
        Persist one cached translation.

        Journals held in this store carry it inside their own record, without
        touching ``updated_at``. Any other journal gets an entry in the
        ``journalTranslations`` side table.
        """
        with self._lock:
            journals = self._load()
            for journal in journals:
                if journal.id == journal_id:
                    journal.translations[language] = translation
                    self._save(journals)
                    return
            table = self._translation_table()
            table.setdefault(journal_id, {})[language] = translation.model_dump()
            self.storage.write_json(TRANSLATIONS_KEY, table)

    def translations_for(self, journal_id: str) -> Dict[str, Translation]:
        with self._lock:
            entries = self._translation_table().get(journal_id, {})
        if not isinstance(entries, dict):
            logger.error(f"Translation entry for {journal_id} is not a mapping, ignoring")
            return {}
        translations = {}
        for language, fields in entries.items():
            try:
                translations[language] = Translation.model_validate(fields)
            except ValidationError as e:
                logger.error(f"Skipping unreadable translation {journal_id}/{language}: {e}")
        return translations

    def remove_translations(self, journal_id: str) -> None:
        with self._lock:
            table = self._translation_table()
            if table.pop(journal_id, None) is not None:
                self.storage.write_json(TRANSLATIONS_KEY, table)

    def _translation_table(self) -> dict:
        table = self.storage.read_json(TRANSLATIONS_KEY, {})
        if not isinstance(table, dict):
            logger.error("Translation table is not a mapping, treating as empty")
            return {}
        return table

    # Tombstones
    def add_tombstone(self, journal_id: str) -> None:
        with self._lock:
            tombstones = self.tombstones()
            if journal_id not in tombstones:
                self.storage.write_json(TOMBSTONES_KEY, sorted(tombstones | {journal_id}))

    def tombstones(self) -> Set[str]:
        raw = self.storage.read_json(TOMBSTONES_KEY, [])
        return set(raw) if isinstance(raw, list) else set()
