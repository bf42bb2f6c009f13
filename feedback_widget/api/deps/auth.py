"""Authentication for the widget endpoints.

The host application issues an HS256 session JWT; the widget forwards it as
a bearer token. The ``sub`` claim identifies the submitting user.
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt

from feedback_widget.config import settings
from feedback_widget.core.exceptions import NotAuthenticatedError, SessionExpiredError

security = HTTPBearer(auto_error=False)


def decode_session_token(token: str) -> str:
    """
    Validate a session JWT and return its subject.

    Raises:
        SessionExpiredError: The token is well-formed but expired (419)
        NotAuthenticatedError: Anything else wrong with it (401)
    """
    if not settings.auth_jwt_secret:
        raise NotAuthenticatedError("Authentication is not configured")

    try:
        payload = jwt.decode(
            token,
            settings.auth_jwt_secret,
            algorithms=["HS256"],
            audience=settings.auth_jwt_audience,
        )
    except ExpiredSignatureError as e:
        raise SessionExpiredError() from e
    except JWTError as e:
        raise NotAuthenticatedError("Invalid token") from e

    subject = payload.get("sub")
    if not subject:
        raise NotAuthenticatedError("Invalid token: missing user ID")
    return str(subject)


async def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str:
    """Identity of the authenticated user making the request."""
    if not credentials:
        raise NotAuthenticatedError()
    return decode_session_token(credentials.credentials)


CurrentIdentity = Annotated[str, Depends(get_current_identity)]
