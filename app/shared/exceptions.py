from typing import Any, List, Optional
from fastapi import HTTPException, status


class CredentialsException(HTTPException):
    """Exception for a missing or invalid identity (Unauthenticated)."""

    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class NotFoundException(HTTPException):
    """Exception for resource not found."""

    def __init__(self, detail: str = "Resource not found"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
        )


class ConflictException(HTTPException):
    """Exception for a request that conflicts with the resource state."""

    def __init__(self, detail: str = "Resource already exists"):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
        )


class ForbiddenException(HTTPException):
    """Exception for forbidden access."""

    def __init__(self, detail: str = "Forbidden"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
        )


class ValidationException(HTTPException):
    """Exception for malformed input.

    ``errors`` is a list of ``{"loc": [...], "msg": str}`` entries so the
    caller can fix the offending fields.
    """

    def __init__(self, errors: Optional[List[Any]] = None, detail: str = "Validation failed"):
        self.errors = errors or []
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=self.errors or detail,
        )

    @classmethod
    def from_pydantic(cls, error) -> "ValidationException":
        """Build from a pydantic ValidationError, keeping only JSON-safe parts."""
        return cls([
            {"loc": list(item["loc"]), "msg": item["msg"], "type": item["type"]}
            for item in error.errors()
        ])


class StoreUnavailableException(HTTPException):
    """Exception for a failing record or role store. Safe to retry."""

    def __init__(self, detail: str = "Storage temporarily unavailable", retry_after: int = 5):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=detail,
            headers={"Retry-After": str(retry_after)},
        )
