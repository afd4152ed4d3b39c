"""
Session API endpoints: sign-in, sign-out and the login log.
"""

from fastapi import APIRouter, Depends, HTTPException

from retail_ledger.api.dependencies import get_auth_service, get_store
from retail_ledger.schemas.session import LoginEvent, LoginRequest, SessionResponse
from retail_ledger.services.auth_service import AuthService
from retail_ledger.services.store import SnapshotStore

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=SessionResponse)
def login(
    request: LoginRequest,
    service: AuthService = Depends(get_auth_service),
):
    """Sign in. The attempt is recorded in the login log either way."""
    try:
        user = service.login(request)
    except ValueError as e:
        raise HTTPException(status_code=401, detail=str(e))
    return SessionResponse(active=True, user=user)


@router.post("/logout", response_model=SessionResponse)
def logout(
    service: AuthService = Depends(get_auth_service),
):
    service.logout()
    return SessionResponse(active=False, user=service.store.snapshot.current_user)


@router.get("/session", response_model=SessionResponse)
def get_session(store: SnapshotStore = Depends(get_store)):
    return SessionResponse(
        active=store.is_session_active,
        user=store.snapshot.current_user,
    )


@router.get("/logs", response_model=list[LoginEvent])
def get_login_logs(store: SnapshotStore = Depends(get_store)):
    """Most recent sign-in attempts, newest first."""
    return store.snapshot.login_logs
