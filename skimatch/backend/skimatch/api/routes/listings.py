from datetime import date
from fastapi import APIRouter, Depends
from ...api import deps
from ...config import Settings
from ...core.errors import AvailabilityError
from ...db import schemas
from ...repositories.availability import SqlAvailabilityRepository
from ...services import availability_service

router = APIRouter(prefix="/listings", tags=["listings"])


@router.get("", response_model=list[schemas.SingleListing])
def list_listings(
    teacher_id: str | None = None,
    repo: SqlAvailabilityRepository = Depends(deps.get_repository),
):
    try:
        return repo.list_single_listings(teacher_id)
    except AvailabilityError as exc:
        raise deps.http_error(exc) from exc


@router.post("", response_model=schemas.SingleListing)
def create_listing(
    payload: schemas.SingleListingCreate,
    repo: SqlAvailabilityRepository = Depends(deps.get_repository),
    today: date = Depends(deps.get_today),
    settings: Settings = Depends(deps.get_app_settings),
):
    try:
        listing_id = availability_service.create_single_listing(
            repo,
            payload,
            today=today,
            same_skill_only=settings.conflict_same_skill_only,
        )
        return repo.get_single_listing(listing_id)
    except AvailabilityError as exc:
        raise deps.http_error(exc) from exc


@router.delete("/{listing_id}")
def delete_listing(
    listing_id: int,
    repo: SqlAvailabilityRepository = Depends(deps.get_repository),
):
    try:
        availability_service.delete_single_listing(repo, listing_id)
    except AvailabilityError as exc:
        raise deps.http_error(exc) from exc
    return {"status": "deleted"}
