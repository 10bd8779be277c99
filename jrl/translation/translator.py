from abc import ABC, abstractmethod
from typing import List

from jrl.journals.schemas import Translation


class Translator(ABC):
    model_tag: str

    @abstractmethod
    def translate(self, text: str, source: str, target: str) -> str:
        """Translate one piece of text from ``source`` to ``target``."""

    def translate_fields(self, title: str, content: str, tags: List[str], source: str, target: str) -> Translation:
        return Translation(
            title=self.translate(title, source, target),
            content=self.translate(content, source, target),
            tags=[self.translate(tag, source, target) for tag in tags],
        )


class PlaceholderTranslator(Translator):
    """Deterministic stand-in: prefixes each field with a ``[XX] `` language marker."""

    model_tag = "placeholder"

    def translate(self, text: str, source: str, target: str) -> str:
        if not text or source == target:
            return text
        return f"[{target.upper()}] {text}"
