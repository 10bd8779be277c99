import logging
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException

from jrl.auth.schemas import User
from jrl.auth.service import IdentityProvider, create_token
from jrl.core.config import NETWORK_PROBE_URL
from jrl.core.dependency import get_engine, get_identity, get_network_monitor, get_tracker
from jrl.journals.service import ReconciliationEngine
from jrl.system.network import NetworkMonitor
from jrl.system.schemas import DevLoginResponse, NetworkStatus, TimeStats
from jrl.system.tracker import TimeTracker

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/system", tags=["System"])

TEST_USER = User(uid="test-user", display_name="Test User")


@router.get("/network", response_model=NetworkStatus)
def network_status_route(monitor: NetworkMonitor = Depends(get_network_monitor)):
    return monitor.status()


@router.post("/network/probe", response_model=NetworkStatus)
def network_probe_route(monitor: NetworkMonitor = Depends(get_network_monitor)):
    return monitor.probe(NETWORK_PROBE_URL)


@router.get("/time-stats", response_model=TimeStats)
async def time_stats_route(tracker: TimeTracker = Depends(get_tracker)):
    if tracker.uid is None:
        raise HTTPException(status_code=401, detail="Not signed in")
    return await tracker.load_stats()


@router.post("/time/flush", response_model=Dict[str, int])
async def time_flush_route(tracker: TimeTracker = Depends(get_tracker)):
    return {"seconds": await tracker.flush()}


@router.post("/test-login", response_model=DevLoginResponse)
async def dev_login_route(
    identity: IdentityProvider = Depends(get_identity),
    engine: ReconciliationEngine = Depends(get_engine),
    tracker: TimeTracker = Depends(get_tracker),
):
    token = create_token(TEST_USER.uid, TEST_USER.display_name)
    await identity.sign_in(TEST_USER)
    return DevLoginResponse(token=token, user=TEST_USER)
