import logging

from fastapi import APIRouter, Depends, HTTPException

from jrl.core.dependency import get_preferences
from jrl.preferences.schemas import AccessibilityPreferences
from jrl.preferences.service import PreferencesStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/preferences", tags=["Preferences"])


@router.get("", response_model=AccessibilityPreferences, summary="Get accessibility preferences")
def get_preferences_route(store: PreferencesStore = Depends(get_preferences)) -> AccessibilityPreferences:
    return store.load()


@router.put(
    "",
    response_model=AccessibilityPreferences,
    summary="Save accessibility preferences",
    responses={
        200: {"description": "Preferences saved"},
        422: {"description": "Unsupported language"},
        500: {"description": "Failed to save preferences"},
    },
)
def save_preferences_route(
    preferences: AccessibilityPreferences,
    store: PreferencesStore = Depends(get_preferences),
) -> AccessibilityPreferences:
    try:
        return store.save(preferences)
    except Exception as e:
        logger.error(f"Error saving preferences: {e}")
        raise HTTPException(status_code=500, detail="Failed to save preferences")
