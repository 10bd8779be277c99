import asyncio
import logging
from typing import Awaitable, Callable, Optional

from jrl.core.config import SOURCE_LANGUAGE
from jrl.journals.fallback import FallbackStore
from jrl.journals.schemas import Journal, Tier, Translation
from jrl.translation.translator import Translator

logger = logging.getLogger(__name__)

PersistHook = Callable[[Journal, str, Translation], Awaitable[None]]


def original_fields(journal: Journal) -> Translation:
    return Translation(title=journal.title, content=journal.content, tags=list(journal.tags))


class TranslationCache:
    """
    Per-journal, per-language memo of translated title, content and tags.

    A language is built at most once per journal. Sample journals only
    ever read their bundled table. Built translations are handed to the
    ``persist`` hook, which writes them to whichever tier owns the journal.
    """

    def __init__(
        self,
        translator: Translator,
        fallback: FallbackStore,
        source_language: str = SOURCE_LANGUAGE,
        persist: Optional[PersistHook] = None,
    ):
        self.translator = translator
        self.fallback = fallback
        self.source_language = source_language
        self.persist = persist

    async def get_or_build(self, journal: Journal, language: str) -> Translation:
        cached = journal.translations.get(language)
        if cached is not None:
            return cached

        if journal.tier == Tier.SAMPLE or language == self.source_language:
            return original_fields(journal)

        stored = self.fallback.translations_for(journal.id).get(language)
        if stored is not None:
            journal.translations[language] = stored
            return stored

        try:
            translation = await asyncio.to_thread(
                self.translator.translate_fields,
                journal.title,
                journal.content,
                journal.tags,
                self.source_language,
                language,
            )
        except Exception as e:
            logger.error(f"Translating journal {journal.id} to {language} failed: {e}")
            return original_fields(journal)

        journal.translations[language] = translation
        if self.persist is not None:
            await self.persist(journal, language, translation)
        return translation
