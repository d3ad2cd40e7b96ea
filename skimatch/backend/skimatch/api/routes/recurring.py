from datetime import date
from fastapi import APIRouter, Depends
from ...api import deps
from ...config import Settings
from ...core.errors import AvailabilityError
from ...db import schemas
from ...repositories.availability import SqlAvailabilityRepository
from ...services import availability_service

router = APIRouter(prefix="/recurring", tags=["recurring"])


@router.get("", response_model=list[schemas.RecurrenceRule])
def list_rules(
    teacher_id: str | None = None,
    repo: SqlAvailabilityRepository = Depends(deps.get_repository),
):
    try:
        return repo.list_recurrence_rules(teacher_id)
    except AvailabilityError as exc:
        raise deps.http_error(exc) from exc


@router.post("", response_model=list[schemas.RecurrenceRule])
def create_rules(
    payload: schemas.RecurringAvailabilityCreate,
    repo: SqlAvailabilityRepository = Depends(deps.get_repository),
    today: date = Depends(deps.get_today),
    settings: Settings = Depends(deps.get_app_settings),
):
    try:
        rule_ids = availability_service.create_recurring_availability(
            repo,
            payload,
            today=today,
            same_skill_only=settings.conflict_same_skill_only,
            check_single_listings=settings.check_singles_for_rules,
            default_months=settings.default_recurrence_months,
            max_months=settings.max_recurrence_months,
        )
        return [repo.get_recurrence_rule(rule_id) for rule_id in rule_ids]
    except AvailabilityError as exc:
        raise deps.http_error(exc) from exc


@router.delete("/{rule_id}")
def delete_rule(
    rule_id: int,
    repo: SqlAvailabilityRepository = Depends(deps.get_repository),
):
    try:
        availability_service.delete_recurrence_rule(repo, rule_id)
    except AvailabilityError as exc:
        raise deps.http_error(exc) from exc
    return {"status": "deleted"}


@router.get("/{rule_id}/exclusions", response_model=list[date])
def list_exclusions(
    rule_id: int,
    repo: SqlAvailabilityRepository = Depends(deps.get_repository),
):
    try:
        repo.get_recurrence_rule(rule_id)
        return repo.list_exclusions(rule_id)
    except AvailabilityError as exc:
        raise deps.http_error(exc) from exc


@router.post("/{rule_id}/exclusions", response_model=schemas.Exclusion)
def exclude_date(
    rule_id: int,
    payload: schemas.ExclusionCreate,
    repo: SqlAvailabilityRepository = Depends(deps.get_repository),
):
    try:
        return availability_service.exclude_date(repo, rule_id, payload.date)
    except AvailabilityError as exc:
        raise deps.http_error(exc) from exc


@router.delete("/{rule_id}/exclusions/{day}")
def restore_date(
    rule_id: int,
    day: date,
    repo: SqlAvailabilityRepository = Depends(deps.get_repository),
):
    try:
        availability_service.restore_date(repo, rule_id, day)
    except AvailabilityError as exc:
        raise deps.http_error(exc) from exc
    return {"status": "restored"}
