from fastapi import HTTPException, status

# Non-standard status the widget treats as "session expired, reload the page"
HTTP_419_SESSION_EXPIRED = 419


class NotAuthenticatedError(HTTPException):
    """Raised when the request carries no valid session token."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=message,
            headers={"WWW-Authenticate": "Bearer"},
        )


class SessionExpiredError(HTTPException):
    """Raised when the session token has expired."""

    def __init__(self) -> None:
        super().__init__(
            status_code=HTTP_419_SESSION_EXPIRED,
            detail="Session expired. Please refresh the page.",
        )


class RateLimitedError(HTTPException):
    """Raised when a user exceeds an endpoint's request budget."""

    def __init__(self, retry_after: int):
        self.retry_after = retry_after
        super().__init__(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Too many requests. Please wait {retry_after} seconds and try again.",
            headers={"Retry-After": str(retry_after)},
        )


class ValidationError(HTTPException):
    """Raised when request validation fails."""

    def __init__(self, message: str):
        super().__init__(
            status_code=422,
            detail=message,
        )


class UpstreamError(HTTPException):
    """Raised when a collaborator (language model, GitHub) fails."""

    def __init__(self, message: str, status_code: int = status.HTTP_502_BAD_GATEWAY):
        super().__init__(status_code=status_code, detail=message)
