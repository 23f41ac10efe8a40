# coursefinder/auth/dependencies.py

from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt.exceptions import InvalidTokenError
import jwt

from coursefinder.common.config import settings
from coursefinder.common.utils.global_messages import GlobalMessages

bearer_scheme = HTTPBearer()
optional_bearer_scheme = HTTPBearer(auto_error=False)

def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=GlobalMessages.INVALID_CREDENTIALS,
        headers={"WWW-Authenticate": "Bearer"}
    )

def decode_user_id(token: str) -> int:
    """
    Return the integer user id carried in the token's `sub` claim.
    Tokens are issued by the identity provider; this service only verifies them.
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except InvalidTokenError:
        raise _credentials_exception()
    subject = payload.get("sub")
    if subject is None:
        raise _credentials_exception()
    try:
        return int(subject)
    except (TypeError, ValueError):
        raise _credentials_exception()

async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> int:
    """
    Dependency to retrieve the current user id from the JWT in the Authorization header.
    """
    return decode_user_id(credentials.credentials)

async def get_optional_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_bearer_scheme),
) -> Optional[int]:
    """Like `get_current_user_id`, but anonymous requests yield None."""
    if credentials is None:
        return None
    return decode_user_id(credentials.credentials)
