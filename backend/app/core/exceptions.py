"""HTTP-aware error taxonomy shared by services and routers.

Every error is an ``HTTPException`` so FastAPI renders it as
``{"detail": message}`` with a fixed status code.
"""
import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class ValidationError(HTTPException):
    def __init__(self, detail: str = "Invalid request"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class DuplicateError(HTTPException):
    def __init__(self, detail: str = "Already exists"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class ReferentialIntegrityError(HTTPException):
    def __init__(self, detail: str = "Record is still referenced"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class InfrastructureError(HTTPException):
    def __init__(self, detail: str = "Internal server error"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


class UnauthorizedError(HTTPException):
    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


@contextmanager
def infrastructure_guard(message: str) -> Iterator[None]:
    """Turn unexpected database failures into a generic 500.

    The full error is logged server-side; the client only sees ``message``.
    """
    try:
        yield
    except SQLAlchemyError as e:
        logger.error("%s: %s", message, e, exc_info=True)
        raise InfrastructureError(message) from e
