import logging
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException

from jrl.auth.schemas import SessionRequest, SessionResponse, User
from jrl.auth.service import IdentityProvider, user_from_token
from jrl.core.dependency import get_engine, get_identity, get_tracker
from jrl.journals.service import ReconciliationEngine
from jrl.system.tracker import TimeTracker

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/session",
    response_model=SessionResponse,
    summary="Sign in with a provider token",
    responses={
        200: {"description": "Signed in; journals loaded"},
        401: {"description": "Invalid or expired token"},
        500: {"description": "Server error"},
    },
)
async def sign_in_route(
    body: SessionRequest,
    identity: IdentityProvider = Depends(get_identity),
    engine: ReconciliationEngine = Depends(get_engine),
    tracker: TimeTracker = Depends(get_tracker),
) -> SessionResponse:
    try:
        user = user_from_token(body.token)
        await identity.sign_in(user)
        return SessionResponse(user=user, owned_count=len(engine.owned_journals))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Sign-in error: {e}")
        raise HTTPException(status_code=500, detail="Sign-in failed")


@router.delete(
    "/session",
    response_model=Dict[str, str],
    summary="Sign out",
    responses={
        200: {"description": "Signed out"},
        500: {"description": "Server error"},
    },
)
async def sign_out_route(
    identity: IdentityProvider = Depends(get_identity),
    engine: ReconciliationEngine = Depends(get_engine),
    tracker: TimeTracker = Depends(get_tracker),
) -> Dict[str, str]:
    try:
        await identity.sign_out()
        return {"detail": "Signed out"}
    except Exception as e:
        logger.error(f"Sign-out error: {e}")
        raise HTTPException(status_code=500, detail="Sign-out failed")


@router.get(
    "/me",
    response_model=User,
    summary="Get the signed-in user",
    responses={
        200: {"description": "Current user"},
        401: {"description": "Not signed in"},
    },
)
def me_route(identity: IdentityProvider = Depends(get_identity)) -> User:
    user = identity.current_user
    if user is None:
        raise HTTPException(status_code=401, detail="Not signed in")
    return user
