import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from pydantic import ValidationError

from jrl.core.config import DRAFT_MAX_AGE_DAYS
from jrl.drafts.schemas import Draft, DraftBase
from jrl.storage.service import LocalStorage

logger = logging.getLogger(__name__)

DRAFT_KEY = "journal_drafts"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DraftStore:
    """The single in-progress journal form, kept locally for recovery."""

    def __init__(
        self,
        storage: LocalStorage,
        max_age: timedelta = timedelta(days=DRAFT_MAX_AGE_DAYS),
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.storage = storage
        self.max_age = max_age
        self.clock = clock

    def save(self, form: DraftBase) -> Optional[Draft]:
        """
        Store the form as the active draft.

        Returns:
            Optional[Draft]: The saved draft, or None when the form has neither title nor content.
        """
        if not form.title and not form.content:
            return None
        draft = Draft(**form.model_dump(), saved_at=self.clock())
        self.storage.write_json(DRAFT_KEY, draft.model_dump(mode="json"))
        logger.debug("Draft saved at %s", draft.saved_at.isoformat())
        return draft

    def recover(self) -> Optional[Draft]:
        raw = self.storage.read_json(DRAFT_KEY)
        if raw is None:
            return None
        try:
            draft = Draft.model_validate(raw)
        except ValidationError as e:
            logger.error(f"Error recovering draft: {e}")
            self.clear()
            return None

        saved_at = draft.saved_at
        if saved_at.tzinfo is None:
            saved_at = saved_at.replace(tzinfo=timezone.utc)
        if self.clock() - saved_at > self.max_age:
            logger.info("Draft is too old, clearing")
            self.clear()
            return None
        return draft

    def clear(self) -> None:
        self.storage.remove_item(DRAFT_KEY)
        logger.debug("Draft cleared")

    def has_draft(self) -> bool:
        draft = self.recover()
        return bool(draft and (draft.title or draft.content))
