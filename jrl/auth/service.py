import inspect
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Awaitable, Callable, List, Optional, Union

from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError

from jrl.auth.schemas import User
from jrl.core.config import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES

logger = logging.getLogger(__name__)
bearer = HTTPBearer()

AuthListener = Callable[[Optional[User]], Union[None, Awaitable[None]]]


class IdentityProvider:
    """
    Event channel over the external authentication provider.

    Listeners receive the new user (or ``None`` on sign-out). Async
    listeners are awaited in subscription order, so by the time
    ``sign_in`` returns every subscriber has settled.
    """

    def __init__(self):
        self._current_user: Optional[User] = None
        self._listeners: List[AuthListener] = []

    @property
    def current_user(self) -> Optional[User]:
        return self._current_user

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        """
        Register an auth-state listener.

        Returns:
            Callable: Unsubscribe handle; calling it more than once is harmless.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def notify(self, listener: AuthListener) -> None:
        """Replay the current state to a single listener, e.g. right after subscribing."""
        await self._call(listener, self._current_user)

    async def sign_in(self, user: User) -> User:
        self._current_user = user
        logger.info("User signed in: %s", user.uid)
        await self._broadcast(user)
        return user

    async def sign_out(self) -> None:
        if self._current_user is not None:
            logger.info("User signed out: %s", self._current_user.uid)
        self._current_user = None
        await self._broadcast(None)

    async def _broadcast(self, user: Optional[User]) -> None:
        for listener in list(self._listeners):
            await self._call(listener, user)

    async def _call(self, listener: AuthListener, user: Optional[User]) -> None:
        try:
            result = listener(user)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.error(f"Auth listener error: {e}")


def create_token(uid: str, display_name: Optional[str] = None, expires_delta: Optional[timedelta] = None) -> str:
    now = datetime.now(timezone.utc)
    if not expires_delta:
        expires_delta = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": uid,
        "iat": now.timestamp(),
        "exp": now + expires_delta,
    }
    if display_name:
        payload["name"] = display_name
    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


def decode_token(token: str) -> dict:
    """
    Decodes and validates a JWT token.

    Args:
        token (str): JWT string.

    Returns:
        dict: Decoded payload.

    Raises:
        HTTPException: If token is invalid or expired.
    """
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM], options={"verify_aud": False})
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired authentication token")


def user_from_token(token: str) -> User:
    """
    Builds the signed-in user from a bearer token.

    Raises:
        HTTPException: If the token is invalid or has no subject.
    """
    payload = decode_token(token)
    uid = payload.get("sub")
    if not uid:
        raise HTTPException(status_code=401, detail="Token missing subject field")
    return User(uid=str(uid), display_name=payload.get("name"))


def get_current_user_id(
    creds: HTTPAuthorizationCredentials = Depends(bearer),
) -> str:
    """
    Extracts the user ID from the request's bearer token.

    Args:
        creds (HTTPAuthorizationCredentials): Bearer token.

    Returns:
        str: The token subject.

    Raises:
        HTTPException: If token is invalid or missing required claims.
    """
    return user_from_token(creds.credentials).uid
