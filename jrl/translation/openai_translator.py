from __future__ import annotations

import json
import logging
from typing import Any, List, Optional

from openai import OpenAI

from jrl.core.config import OPENAI_API_KEY, OPENAI_CHAT_MODEL
from jrl.journals.schemas import Translation
from jrl.translation.translator import Translator

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You translate journal entries. Reply with a JSON object with the keys "
    '"title", "content" and "tags" (a list of strings, same length and order as the input). '
    "Keep the meaning and tone; do not add commentary."
)


class OpenAITranslator(Translator):
    """Facade around the OpenAI chat endpoint that speaks Translation schemas."""

    model_tag = "chatgpt"

    def __init__(self, api_key: Optional[str] = OPENAI_API_KEY, model: str = OPENAI_CHAT_MODEL, client: Any = None):
        if client is None and not api_key:
            raise RuntimeError("Missing OPENAI_API_KEY in environment")
        self.client = client or OpenAI(api_key=api_key)
        self.model = model

    def _chat_json(self, messages: List[dict[str, Any]], *, max_tokens: int = 1024) -> dict[str, Any]:
        """Run a chat completion and parse the JSON from the first choice."""
        resp = self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            max_tokens=max_tokens,
            temperature=0.2,
            response_format={"type": "json_object"},
        )
        return json.loads(resp.choices[0].message.content)

    def translate(self, text: str, source: str, target: str) -> str:
        if not text or source == target:
            return text
        data = self._chat_json(
            [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": json.dumps(
                    {"from": source, "to": target, "title": text, "content": "", "tags": []}
                )},
            ],
            max_tokens=512,
        )
        return data.get("title") or text

    def translate_fields(self, title: str, content: str, tags: List[str], source: str, target: str) -> Translation:
        # One round trip for the whole journal instead of one per field.
        if source == target:
            return Translation(title=title, content=content, tags=list(tags))
        data = self._chat_json(
            [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": json.dumps(
                    {"from": source, "to": target, "title": title, "content": content, "tags": tags},
                    ensure_ascii=False,
                )},
            ]
        )
        translated_tags = data.get("tags")
        if not isinstance(translated_tags, list) or len(translated_tags) != len(tags):
            logger.warning("Translator returned %s tags for %s, keeping originals",
                           len(translated_tags or []), len(tags))
            translated_tags = list(tags)
        return Translation(
            title=data.get("title") or title,
            content=data.get("content") or content,
            tags=[str(tag) for tag in translated_tags],
        )
