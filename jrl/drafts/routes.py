import logging
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException

from jrl.core.dependency import get_drafts
from jrl.drafts.schemas import DraftBase, DraftResponse
from jrl.drafts.service import DraftStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/drafts", tags=["Drafts"])


@router.get("", response_model=DraftResponse, summary="Recover the saved draft")
def get_draft_route(drafts: DraftStore = Depends(get_drafts)) -> DraftResponse:
    draft = drafts.recover()
    return DraftResponse(draft=draft, saved=draft is not None)


@router.put(
    "",
    response_model=DraftResponse,
    summary="Save the in-progress journal form",
    responses={
        200: {"description": "Draft saved, or ignored when empty"},
        500: {"description": "Failed to save draft"},
    },
)
def save_draft_route(form: DraftBase, drafts: DraftStore = Depends(get_drafts)) -> DraftResponse:
    try:
        draft = drafts.save(form)
        return DraftResponse(draft=draft, saved=draft is not None)
    except Exception as e:
        logger.error(f"Error saving draft: {e}")
        raise HTTPException(status_code=500, detail="Failed to save draft")


@router.delete("", response_model=Dict[str, str], summary="Discard the saved draft")
def clear_draft_route(drafts: DraftStore = Depends(get_drafts)) -> Dict[str, str]:
    drafts.clear()
    return {"detail": "Draft cleared"}
