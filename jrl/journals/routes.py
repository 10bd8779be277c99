"""
Journal routes.

The engine holds one client session at a time. Routes that edit, save,
delete or translate journals also take the caller's bearer token and
refuse it when its subject is not the user signed in to that session.
"""
import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Security

from jrl.auth.service import get_current_user_id
from jrl.core.config import SUPPORTED_LANGUAGES
from jrl.core.dependency import get_engine
from jrl.core.errors import (
    DeleteFailed,
    JournalNotFound,
    NotAuthenticated,
    NotAuthorized,
    ValidationFailed,
)
from jrl.journals.display import ORDER_OLDEST, ORDER_RECENT
from jrl.journals.schemas import JournalForm, JournalView, SaveResult
from jrl.journals.service import ReconciliationEngine

router = APIRouter(prefix="/journals", tags=["Journals"])
logger = logging.getLogger(__name__)


def _check_language(lang: Optional[str]) -> None:
    if lang is not None and lang not in SUPPORTED_LANGUAGES:
        raise HTTPException(status_code=400, detail=f"Unsupported language: {lang}")


def _check_session(engine: ReconciliationEngine, user_id: str) -> None:
    user = engine.current_user
    if user is not None and user.uid != user_id:
        raise HTTPException(status_code=403, detail="Token does not belong to the signed-in user")


@router.get(
    "",
    response_model=List[JournalView],
    summary="Get the merged journal list",
    description="Remote, fallback and sample journals in display order, filtered and translated.",
    responses={
        200: {"description": "Journals retrieved successfully."},
        400: {"description": "Unsupported language or order."},
        500: {"description": "Failed to retrieve journals."},
    },
)
async def list_journals_route(
    q: str = "",
    order: str = ORDER_RECENT,
    lang: Optional[str] = None,
    engine: ReconciliationEngine = Depends(get_engine),
) -> List[JournalView]:
    _check_language(lang)
    if order not in (ORDER_RECENT, ORDER_OLDEST):
        raise HTTPException(status_code=400, detail=f"Unknown order: {order}")
    try:
        return await engine.search(q, order, lang)
    except Exception as e:
        logger.error(f"Error fetching journals: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch journal entries")


@router.get(
    "/mine",
    response_model=List[JournalView],
    summary="Get the signed-in user's journals",
    responses={
        200: {"description": "Journals retrieved successfully."},
        401: {"description": "Not signed in."},
        500: {"description": "Failed to retrieve journals."},
    },
)
async def my_journals_route(
    lang: Optional[str] = None,
    engine: ReconciliationEngine = Depends(get_engine),
) -> List[JournalView]:
    _check_language(lang)
    if engine.current_user is None:
        raise HTTPException(status_code=401, detail="Please log in to view your journals")
    try:
        return await engine.owned_view(lang)
    except Exception as e:
        logger.error(f"Error fetching journals for user {engine.current_user.uid}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch journal entries")


@router.get(
    "/{journal_id}/edit",
    response_model=JournalForm,
    summary="Open a journal for editing",
    responses={
        200: {"description": "Prefilled form."},
        401: {"description": "Not signed in."},
        403: {"description": "Not the owner."},
        404: {"description": "Journal not found."},
    },
)
def edit_journal_route(
    journal_id: str,
    user_id: str = Security(get_current_user_id),
    engine: ReconciliationEngine = Depends(get_engine),
) -> JournalForm:
    _check_session(engine, user_id)
    try:
        return engine.open_for_edit(journal_id)
    except NotAuthenticated as e:
        raise HTTPException(status_code=401, detail=str(e))
    except NotAuthorized as e:
        raise HTTPException(status_code=403, detail=str(e))
    except JournalNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post(
    "",
    response_model=SaveResult,
    summary="Create or update a journal",
    description="An empty id creates a journal; any other id updates it. Remote failures fall back to local storage.",
    responses={
        200: {"description": "Journal saved."},
        400: {"description": "Missing title or content."},
        401: {"description": "Not signed in."},
        403: {"description": "Not the owner."},
        404: {"description": "Journal not found."},
        500: {"description": "Failed to save journal."},
    },
)
async def save_journal_route(
    form: JournalForm,
    user_id: str = Security(get_current_user_id),
    engine: ReconciliationEngine = Depends(get_engine),
) -> SaveResult:
    _check_session(engine, user_id)
    try:
        return await engine.submit(form)
    except ValidationFailed as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotAuthenticated as e:
        raise HTTPException(status_code=401, detail=str(e))
    except NotAuthorized as e:
        raise HTTPException(status_code=403, detail=str(e))
    except JournalNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error saving journal {form.id or '(new)'}: {e}")
        raise HTTPException(status_code=500, detail="Failed to save journal")


@router.delete(
    "/{journal_id}",
    response_model=Dict[str, str],
    summary="Delete a journal by ID",
    responses={
        200: {"description": "Journal deleted successfully."},
        401: {"description": "Not signed in."},
        403: {"description": "Not the owner."},
        404: {"description": "Journal not found."},
        502: {"description": "Remote store rejected the delete."},
    },
)
async def delete_journal_route(
    journal_id: str,
    user_id: str = Security(get_current_user_id),
    engine: ReconciliationEngine = Depends(get_engine),
) -> Dict[str, str]:
    _check_session(engine, user_id)
    try:
        await engine.delete(journal_id)
        return {"detail": "Journal deleted successfully."}
    except NotAuthenticated as e:
        raise HTTPException(status_code=401, detail=str(e))
    except NotAuthorized as e:
        raise HTTPException(status_code=403, detail=str(e))
    except JournalNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DeleteFailed as e:
        raise HTTPException(status_code=502, detail=f"Error deleting journal: {e}")


@router.post(
    "/translate",
    response_model=Dict[str, int],
    summary="Translate loaded journals",
    description="Build and cache translations for every loaded journal in the given language.",
    responses={
        200: {"description": "Journals translated."},
        400: {"description": "Unsupported language."},
        401: {"description": "Missing or invalid token."},
        403: {"description": "Token belongs to another user."},
        500: {"description": "Translation failed."},
    },
)
async def translate_journals_route(
    lang: str = Query(...),
    user_id: str = Security(get_current_user_id),
    engine: ReconciliationEngine = Depends(get_engine),
) -> Dict[str, int]:
    _check_session(engine, user_id)
    _check_language(lang)
    try:
        return {"translated": await engine.translate_all(lang)}
    except Exception as e:
        logger.error(f"Error translating journals to {lang}: {e}")
        raise HTTPException(status_code=500, detail="Failed to translate journals")
