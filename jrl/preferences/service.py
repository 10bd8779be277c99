import logging

from pydantic import ValidationError

from jrl.preferences.schemas import AccessibilityPreferences
from jrl.storage.service import LocalStorage

logger = logging.getLogger(__name__)

PREFERENCES_KEY = "accessibility_preferences"


class PreferencesStore:
    def __init__(self, storage: LocalStorage):
        self.storage = storage

    def load(self) -> AccessibilityPreferences:
        """
        Load saved preferences.

        Accessibility toggles start switched off on every load; only the
        saved display language carries over. Missing or corrupt values fall
        back to defaults.
        """
        saved = self.storage.read_json(PREFERENCES_KEY, {})
        language = saved.get("current_language") if isinstance(saved, dict) else None
        if not language:
            return AccessibilityPreferences()
        try:
            return AccessibilityPreferences(current_language=language)
        except ValidationError as e:
            logger.error(f"Ignoring saved language '{language}': {e}")
            return AccessibilityPreferences()

    def save(self, preferences: AccessibilityPreferences) -> AccessibilityPreferences:
        self.storage.write_json(PREFERENCES_KEY, preferences.model_dump())
        return preferences

    def current_language(self) -> str:
        return self.load().current_language
