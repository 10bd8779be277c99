import math
from typing import Iterable, List, Optional, Tuple

from jrl.core.config import EXCERPT_LENGTH, WORDS_PER_MINUTE
from jrl.journals.schemas import Journal, JournalView, Translation

ORDER_RECENT = "recent"
ORDER_OLDEST = "oldest"


def parse_tags(text: str) -> List[str]:
    """Split comma-separated tag input, trimming pieces and dropping empty ones. Duplicates stay."""
    if not text:
        return []
    return [tag.strip() for tag in text.split(",") if tag.strip()]


def make_excerpt(content: str, length: int = EXCERPT_LENGTH) -> Tuple[str, bool]:
    if not content:
        return "", False
    if len(content) > length:
        return content[:length] + "...", True
    return content, False


def read_time(content: str, words_per_minute: int = WORDS_PER_MINUTE) -> str:
    word_count = len(content.split()) if content else 0
    minutes = math.ceil(word_count / words_per_minute)
    return "1 min read" if minutes < 1 else f"{minutes} min read"


def to_view(journal: Journal, translation: Translation, viewer_uid: Optional[str], language: str) -> JournalView:
    content = translation.content or journal.content
    excerpt, is_long = make_excerpt(content)
    return JournalView(
        id=journal.id,
        tier=journal.tier,
        user_id=journal.user_id,
        title=translation.title or journal.title or "Untitled",
        content=content,
        excerpt=excerpt,
        is_long=is_long,
        read_time=read_time(content),
        tags=translation.tags or journal.tags,
        created_at=journal.created_at,
        updated_at=journal.updated_at,
        is_owner=viewer_uid is not None and journal.user_id == viewer_uid,
        language=language,
    )


def matches(journal: Journal, view: JournalView, term: str) -> bool:
    """Case-insensitive substring match on title, content or any tag, original or displayed."""
    needle = term.lower()
    texts = [journal.title, journal.content, view.title, view.content, *journal.tags, *view.tags]
    return any(needle in (text or "").lower() for text in texts)


def filter_and_order(
    entries: Iterable[Tuple[Journal, JournalView]],
    term: str = "",
    order: str = ORDER_RECENT,
) -> List[JournalView]:
    term = (term or "").strip()
    views = [view for journal, view in entries if not term or matches(journal, view, term)]
    if order == ORDER_OLDEST:
        views.reverse()
    return views
