from pydantic import BaseModel, field_validator

from jrl.core.config import SOURCE_LANGUAGE, SUPPORTED_LANGUAGES


class AccessibilityPreferences(BaseModel):
    tts_enabled: bool = False
    color_blind_mode: bool = False
    dyslexia_mode: bool = False
    current_language: str = SOURCE_LANGUAGE
    is_rtl: bool = False

    @field_validator("current_language")
    @classmethod
    def supported(cls, value: str) -> str:
        if value not in SUPPORTED_LANGUAGES:
            raise ValueError(f"Unsupported language: {value}")
        return value
