from datetime import date
from typing import Annotated
from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session
from ..config import Settings, get_settings
from ..core.errors import (
    AvailabilityError,
    ConflictError,
    NotFoundError,
    TransportError,
    ValidationError,
)
from ..db.session import get_db
from ..repositories.availability import SqlAvailabilityRepository


def get_repository(db: Annotated[Session, Depends(get_db)]) -> SqlAvailabilityRepository:
    return SqlAvailabilityRepository(db)


def get_today() -> date:
    return date.today()


def get_app_settings() -> Settings:
    return get_settings()


_STATUS_BY_ERROR = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_409_CONFLICT),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (TransportError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def http_error(exc: AvailabilityError) -> HTTPException:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
