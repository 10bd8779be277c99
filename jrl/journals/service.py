"""
Multi-tier journal persistence and reconciliation.

Journals live in one of three tiers: the remote document store, the local
fallback store, or the static sample set. ``ReconciliationEngine`` decides
where each write lands, keeps the in-memory collections in step with the
last successful write, and merges the tiers into one ordered view.
"""
import asyncio
import logging
import random
import string
import time
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple, Union

from jrl.auth.schemas import User
from jrl.auth.service import IdentityProvider
from jrl.core.config import SOURCE_LANGUAGE
from jrl.core.errors import (
    DeleteFailed,
    JournalNotFound,
    NotAuthenticated,
    NotAuthorized,
    RemoteStoreError,
    ValidationFailed,
)
from jrl.drafts.service import DraftStore
from jrl.journals.display import ORDER_RECENT, filter_and_order, parse_tags, to_view
from jrl.journals.fallback import FallbackStore
from jrl.journals.samples import SAMPLE_JOURNALS
from jrl.journals.schemas import (
    Journal,
    JournalForm,
    JournalRef,
    JournalView,
    SaveResult,
    Tier,
    Translation,
)
from jrl.preferences.service import PreferencesStore
from jrl.remote.service import RemoteStore
from jrl.system.network import NetworkMonitor
from jrl.translation.cache import TranslationCache
from jrl.translation.translator import Translator

logger = logging.getLogger(__name__)

COLLECTION = "journals"
FALLBACK_PREFIX = "local-"

MSG_CREATED = "Journal created successfully!"
MSG_CREATED_LOCALLY = "Journal saved locally! Will sync when online."
MSG_UPDATED = "Journal updated successfully!"
MSG_UPDATED_LOCALLY = "Journal updated locally!"
MSG_DOWNGRADED = "Journal updated locally! Will sync when online."

_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


# Helpers
def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def new_fallback_id() -> str:
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=9))
    return f"{FALLBACK_PREFIX}{int(time.time() * 1000)}-{suffix}"


def newest_first(journals: Iterable[Journal]) -> List[Journal]:
    return sorted(journals, key=lambda j: j.created_at or _EARLIEST, reverse=True)


def journal_from_record(record: Dict[str, Any]) -> Journal:
    translations = record.get("translations") or {}
    return Journal(
        ref=JournalRef(tier=Tier.REMOTE, id=record["id"], origin=Tier.REMOTE),
        user_id=record.get("user_id"),
        title=record.get("title") or "",
        content=record.get("content") or "",
        tags=list(record.get("tags") or []),
        created_at=record.get("created_at"),
        updated_at=record.get("updated_at"),
        translations={lang: Translation.model_validate(t) for lang, t in translations.items()},
    )


def clean_fields(title: str, content: str, tags: Union[str, Iterable[str], None]) -> Tuple[str, str, List[str]]:
    title = (title or "").strip()
    content = (content or "").strip()
    if not title or not content:
        raise ValidationFailed("Please fill in both title and content")
    if isinstance(tags, str) or tags is None:
        tags = parse_tags(tags or "")
    else:
        tags = [tag.strip() for tag in tags if tag and tag.strip()]
    return title, content, tags


class ReconciliationEngine:
    """
    Owns the journal session: the signed-in user, the user's own journals
    and every remote journal.

    All state lives on the instance. Remote calls may settle out of
    order, so every method re-reads the current collections after an
    await instead of holding on to earlier snapshots. Deleted ids are
    tombstoned and each update bumps a per-id generation, so a slow write
    can neither resurrect a deleted journal nor overwrite a newer edit.
    """

    def __init__(
        self,
        identity: IdentityProvider,
        remote: RemoteStore,
        fallback: FallbackStore,
        translator: Translator,
        network: Optional[NetworkMonitor] = None,
        drafts: Optional[DraftStore] = None,
        preferences: Optional[PreferencesStore] = None,
        samples: Optional[Iterable[Journal]] = None,
        source_language: str = SOURCE_LANGUAGE,
    ):
        self.identity = identity
        self.remote = remote
        self.fallback = fallback
        self.network = network
        self.drafts = drafts
        self.preferences = preferences
        self.samples: List[Journal] = list(samples) if samples is not None else list(SAMPLE_JOURNALS)
        self.source_language = source_language
        self.translations = TranslationCache(
            translator, fallback, source_language, persist=self._persist_translation
        )

        self._user: Optional[User] = None
        self._owned: List[Journal] = []
        self._all: List[Journal] = []
        self._epoch = 0
        self._generations: Dict[str, int] = {}
        self._tombstones: Set[str] = set()
        self._unsubscribe = None
        self._background: Set[asyncio.Task] = set()

    # Session
    def start(self) -> None:
        """Subscribe to auth changes. The engine holds one subscription at a time."""
        if self._unsubscribe is None:
            self._unsubscribe = self.identity.subscribe(self._on_auth_change)

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    @property
    def current_user(self) -> Optional[User]:
        return self._user

    @property
    def owned_journals(self) -> List[Journal]:
        return list(self._owned)

    @property
    def all_journals(self) -> List[Journal]:
        return list(self._all)

    async def _on_auth_change(self, user: Optional[User]) -> None:
        if user is None:
            self.reset()
        else:
            await self.load_on_auth(user)

    async def load_on_auth(self, user: User) -> None:
        """
        Populate the owned and global collections for ``user``.

        Both remote queries run concurrently. Owned journals fall back to
        the fallback store when the remote query fails; the global list is
        left empty instead. Results for a session that has since changed
        are dropped.
        """
        if self._user is None or self._user.uid != user.uid:
            self._owned = []
            self._all = []
        self._user = user
        self._epoch += 1
        epoch = self._epoch

        owned, everything = await asyncio.gather(self._load_owned(user.uid), self._load_all())
        if epoch != self._epoch:
            logger.info("Discarding journals loaded for a previous session")
            return

        dead = self._tombstones | self.fallback.tombstones()
        held = {j.id for j in self.fallback.list_all()}
        owned = [j for j in owned if j.id not in dead]
        everything = [j for j in everything if j.id not in dead and j.id not in held]

        # Keep journals written while the queries were in flight
        owned_ids = {j.id for j in owned}
        all_ids = {j.id for j in everything}
        self._owned = [j for j in self._owned if j.id not in owned_ids] + owned
        self._all = [j for j in self._all if j.id not in all_ids and j.tier == Tier.REMOTE] + everything
        logger.info("Loaded %s owned and %s remote journals for %s", len(self._owned), len(self._all), user.uid)

    async def _load_owned(self, uid: str) -> List[Journal]:
        try:
            records = await self.remote.query_ordered(COLLECTION, "created_at", "desc", where={"user_id": uid})
        except RemoteStoreError as e:
            logger.warning(f"Error loading journals from remote store, using fallback store: {e}")
            return newest_first(self.fallback.list_by_owner(uid))

        local = self.fallback.list_by_owner(uid)
        local_ids = {j.id for j in local}
        remote = [journal_from_record(r) for r in records if r["id"] not in local_ids]
        return newest_first(remote + local)

    async def _load_all(self) -> List[Journal]:
        try:
            records = await self.remote.query_ordered(COLLECTION, "created_at", "desc")
        except RemoteStoreError as e:
            logger.warning(f"Error loading all journals: {e}")
            return []
        return [journal_from_record(r) for r in records]

    def reset(self) -> None:
        """Sign-out: drop the session's collections; only the samples remain visible."""
        self._epoch += 1
        self._user = None
        self._owned = []
        self._all = []

    # Writes
    async def submit(self, form: JournalForm) -> SaveResult:
        """Create-or-edit entry point: an empty id creates, anything else updates."""
        if form.id:
            result = await self.update(form.id, form.title, form.content, form.tags)
        else:
            result = await self.create(form.title, form.content, form.tags)
        if self.drafts is not None:
            self.drafts.clear()
        return result

    async def create(self, title: str, content: str, tags: Union[str, Iterable[str], None] = "") -> SaveResult:
        user = self._require_user("Please log in to create a journal")
        title, content, tags = clean_fields(title, content, tags)
        epoch = self._epoch

        if self._remote_reachable():
            record = {"user_id": user.uid, "title": title, "content": content, "tags": tags, "translations": {}}
            try:
                document = await self.remote.create(COLLECTION, record, on_late=self._discard_late_create)
            except RemoteStoreError as e:
                logger.warning(f"Remote save failed, saving to fallback store: {e}")
            else:
                journal = journal_from_record(document)
                logger.info("Journal created with id %s", journal.id)
                if epoch == self._epoch:
                    self._owned.insert(0, journal)
                    self._all.insert(0, journal)
                return SaveResult(journal=journal, stored_in=Tier.REMOTE, message=MSG_CREATED)

        now = utcnow()
        journal = self.fallback.upsert(
            Journal(
                ref=JournalRef(tier=Tier.FALLBACK, id=new_fallback_id(), origin=Tier.FALLBACK),
                user_id=user.uid,
                title=title,
                content=content,
                tags=tags,
                created_at=now,
                updated_at=now,
            )
        )
        if epoch == self._epoch:
            self._owned.insert(0, journal)
        return SaveResult(journal=journal, stored_in=Tier.FALLBACK, message=MSG_CREATED_LOCALLY)

    async def update(
        self, journal_id: str, title: str, content: str, tags: Union[str, Iterable[str], None] = ""
    ) -> SaveResult:
        user = self._require_user("Please log in to edit a journal")
        existing = self._find(journal_id)
        self._check_owner(existing, user, "You can only edit your own journals")
        title, content, tags = clean_fields(title, content, tags)

        fields: Dict[str, Any] = {"title": title, "content": content, "tags": tags}
        if (title, content, tags) != (existing.title, existing.content, existing.tags):
            # Cached translations describe the old text
            fields["translations"] = {}
        generation = self._bump(journal_id)

        if existing.tier == Tier.FALLBACK:
            stored = self.fallback.upsert(existing.model_copy(update=fields))
            self._replace(stored)
            return SaveResult(journal=stored, stored_in=Tier.FALLBACK, message=MSG_UPDATED_LOCALLY)

        if self._remote_reachable():
            try:
                document = await self.remote.update(journal_id, fields, user.uid)
            except RemoteStoreError as e:
                logger.warning(f"Remote update failed, saving to fallback store: {e}")
            else:
                self._ensure_alive(journal_id)
                current = self._find_in_memory(journal_id) or existing
                stamp = as_utc(document.get("updated_at")) or utcnow()
                updated = current.model_copy(update={**fields, "updated_at": stamp})
                if self._generations.get(journal_id) == generation:
                    self._replace(updated)
                return SaveResult(journal=updated, stored_in=Tier.REMOTE, message=MSG_UPDATED)

        return self._downgrade(journal_id, existing, fields, generation)

    def _downgrade(self, journal_id: str, existing: Journal, fields: Dict[str, Any], generation: int) -> SaveResult:
        """Move a remote journal to the fallback tier for good, keeping its id."""
        self._ensure_alive(journal_id)
        current = self._find_in_memory(journal_id) or existing
        moved = current.model_copy(
            update={**fields, "ref": JournalRef(tier=Tier.FALLBACK, id=journal_id, origin=Tier.REMOTE)}
        )
        stored = self.fallback.upsert(moved)
        self._all = [j for j in self._all if j.id != journal_id]
        if self._generations.get(journal_id) == generation:
            self._replace(stored)
        logger.info("Journal %s downgraded to the fallback store", journal_id)
        return SaveResult(journal=stored, stored_in=Tier.FALLBACK, message=MSG_DOWNGRADED)

    def open_for_edit(self, journal_id: str) -> JournalForm:
        """Prefilled form for one of the viewer's own journals."""
        user = self._require_user("Please log in to edit a journal")
        journal = self._find(journal_id)
        self._check_owner(journal, user, "You can only edit your own journals")
        return JournalForm(id=journal.id, title=journal.title, content=journal.content, tags=", ".join(journal.tags))

    async def delete(self, journal_id: str) -> None:
        """
        Delete one of the viewer's journals.

        Fallback journals are removed locally. Remote journals must be
        deleted remotely; when that fails ``DeleteFailed`` is raised and
        nothing changes locally.
        """
        user = self._require_user("Please log in to delete a journal")
        existing = self._find(journal_id)
        self._check_owner(existing, user, "You can only delete your own journals")

        if existing.tier == Tier.FALLBACK:
            self.fallback.remove(journal_id)
            self._forget(journal_id)
            if existing.ref.downgraded:
                # A stale copy is still in the remote store
                self.fallback.add_tombstone(journal_id)
                self._spawn(self._delete_remote_copy(journal_id, user.uid))
            return

        try:
            await self.remote.delete(journal_id, user.uid)
        except RemoteStoreError as e:
            logger.error(f"Error deleting journal {journal_id}: {e}")
            raise DeleteFailed(str(e)) from e
        self._forget(journal_id)
        logger.info("Journal %s deleted", journal_id)

    # Reads
    def merged_journals(self) -> List[Journal]:
        """
        All tiers in display order, undecorated.

        Signed in: remote journals (minus any id now held by the fallback
        store), then every fallback journal on this client, then the
        samples. Other owners' fallback journals are listed too, while their
        stale remote copies are dropped from the remote tier.
        Signed out: the remote journals, or exactly the samples when there
        are none.
        """
        user = self._user
        if user is None:
            return list(self._all) if self._all else list(self.samples)

        stored = self.fallback.list_all()
        held = {j.id for j in stored}
        seen: Set[str] = set()
        remote: List[Journal] = []
        candidates = self._all + [j for j in self._owned if j.tier == Tier.REMOTE]
        for journal in candidates:
            if journal.id in seen or journal.id in held or journal.id in self._tombstones:
                continue
            seen.add(journal.id)
            remote.append(journal)

        in_memory = {j.id: j for j in self._owned if j.tier == Tier.FALLBACK}
        local = [in_memory.get(j.id, j) for j in stored]
        return newest_first(remote) + newest_first(local) + list(self.samples)

    async def merged_view(self, language: Optional[str] = None) -> List[JournalView]:
        return [view for _, view in await self._decorate(self.merged_journals(), language)]

    async def search(
        self, term: str = "", order: str = ORDER_RECENT, language: Optional[str] = None
    ) -> List[JournalView]:
        return filter_and_order(await self._decorate(self.merged_journals(), language), term, order)

    async def owned_view(self, language: Optional[str] = None) -> List[JournalView]:
        return [view for _, view in await self._decorate(list(self._owned), language)]

    async def translate_all(self, language: str) -> int:
        journals = self._owned + [j for j in self._all if j.id not in {o.id for o in self._owned}]
        for journal in journals:
            await self.translations.get_or_build(journal, language)
        return len(journals)

    async def _decorate(
        self, journals: List[Journal], language: Optional[str]
    ) -> List[Tuple[Journal, JournalView]]:
        language = language or self.display_language()
        viewer = self._user.uid if self._user else None
        decorated = []
        for journal in journals:
            translation = await self.translations.get_or_build(journal, language)
            decorated.append((journal, to_view(journal, translation, viewer, language)))
        return decorated

    def display_language(self) -> str:
        if self.preferences is not None:
            return self.preferences.current_language()
        return self.source_language

    # Translation persistence
    async def _persist_translation(self, journal: Journal, language: str, translation: Translation) -> None:
        if journal.tier == Tier.FALLBACK:
            self.fallback.save_translation(journal.id, language, translation)
            return

        user = self._user
        owned = user is not None and journal.user_id == user.uid
        if journal.tier == Tier.REMOTE and owned and self._remote_reachable():
            patch = {"translations": {lang: t.model_dump() for lang, t in journal.translations.items()}}
            try:
                await self.remote.update(journal.id, patch, user.uid)
                return
            except RemoteStoreError as e:
                logger.warning(f"Failed to save translation remotely, keeping it locally: {e}")
        if journal.id not in self._tombstones:
            self.fallback.save_translation(journal.id, language, translation)

    # Guards and bookkeeping
    def _require_user(self, message: str) -> User:
        if self._user is None:
            raise NotAuthenticated(message)
        return self._user

    def _find_in_memory(self, journal_id: str) -> Optional[Journal]:
        for journal in self._owned:
            if journal.id == journal_id:
                return journal
        for journal in self._all:
            if journal.id == journal_id:
                return journal
        return None

    def _find(self, journal_id: str) -> Journal:
        journal = self._find_in_memory(journal_id) or self.fallback.get(journal_id)
        if journal is None:
            journal = next((j for j in self.samples if j.id == journal_id), None)
        if journal is None or journal_id in self._tombstones:
            raise JournalNotFound("Journal not found or has been deleted")
        return journal

    @staticmethod
    def _check_owner(journal: Journal, user: User, message: str) -> None:
        if journal.tier == Tier.SAMPLE or journal.user_id != user.uid:
            raise NotAuthorized(message)

    def _remote_reachable(self) -> bool:
        return self.network is None or self.network.is_online()

    def _bump(self, journal_id: str) -> int:
        self._generations[journal_id] = self._generations.get(journal_id, 0) + 1
        return self._generations[journal_id]

    def _ensure_alive(self, journal_id: str) -> None:
        if journal_id in self._tombstones:
            logger.info("Journal %s was deleted while saving, dropping the write", journal_id)
            raise JournalNotFound("Journal was deleted while saving")

    def _replace(self, journal: Journal) -> None:
        for collection in (self._owned, self._all):
            for index, existing in enumerate(collection):
                if existing.id == journal.id:
                    collection[index] = journal
                    break

    def _forget(self, journal_id: str) -> None:
        self._tombstones.add(journal_id)
        self._generations.pop(journal_id, None)
        self.fallback.remove_translations(journal_id)
        self._owned = [j for j in self._owned if j.id != journal_id]
        self._all = [j for j in self._all if j.id != journal_id]

    def _discard_late_create(self, record: Dict[str, Any]) -> None:
        # The journal already went to the fallback store under its own id.
        doc_id = record["id"]
        logger.warning("Remote create for %s landed after its deadline, removing duplicate", doc_id)
        self._tombstones.add(doc_id)
        self.fallback.add_tombstone(doc_id)
        self._spawn(self._delete_remote_copy(doc_id, record["user_id"]))

    async def _delete_remote_copy(self, doc_id: str, owner_id: str) -> None:
        try:
            await self.remote.delete(doc_id, owner_id)
        except RemoteStoreError as e:
            logger.error(f"Could not remove remote copy {doc_id}, it stays tombstoned: {e}")

    def _spawn(self, coro) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def drain(self) -> None:
        """Wait for background clean-up tasks to finish."""
        while self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)
