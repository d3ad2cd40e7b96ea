from datetime import date
from decimal import Decimal
from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError as SchemaValidationError
from ...api import deps
from ...config import Settings
from ...core.errors import AvailabilityError
from ...core.filters import SlotFilter
from ...core.timeutils import time_options
from ...db import schemas
from ...db.models.skill import SportSkill
from ...repositories.availability import SqlAvailabilityRepository
from ...services import availability_service

router = APIRouter(tags=["availability"])


def _build_filter(
    date_from: date | None,
    date_to: date | None,
    skill: SportSkill | None,
    min_price: Decimal | None,
    max_price: Decimal | None,
    time_from: str | None,
    time_to: str | None,
) -> SlotFilter:
    try:
        return SlotFilter(
            date_range=(date_from, date_to) if date_from and date_to else None,
            skill=skill,
            min_price=min_price,
            max_price=max_price,
            time_range=(time_from, time_to) if time_from and time_to else None,
        )
    except SchemaValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail=exc.errors(include_url=False, include_context=False),
        ) from exc


@router.get("/availability", response_model=list[schemas.AvailabilitySlot])
def browse_availability(
    date_from: date | None = None,
    date_to: date | None = None,
    skill: SportSkill | None = None,
    min_price: Decimal | None = None,
    max_price: Decimal | None = None,
    time_from: str | None = None,
    time_to: str | None = None,
    repo: SqlAvailabilityRepository = Depends(deps.get_repository),
    today: date = Depends(deps.get_today),
):
    criteria = _build_filter(date_from, date_to, skill, min_price, max_price, time_from, time_to)
    try:
        slots = availability_service.browse_availability(repo, criteria, today)
    except AvailabilityError as exc:
        raise deps.http_error(exc) from exc
    return [schemas.AvailabilitySlot.from_slot(slot) for slot in slots]


@router.get("/teachers/{teacher_id}/availability", response_model=schemas.TeacherAvailability)
def teacher_availability(
    teacher_id: str,
    repo: SqlAvailabilityRepository = Depends(deps.get_repository),
    today: date = Depends(deps.get_today),
):
    try:
        availability = availability_service.teacher_availability(repo, teacher_id, today)
    except AvailabilityError as exc:
        raise deps.http_error(exc) from exc
    return schemas.TeacherAvailability(
        teacher_id=teacher_id,
        single_listings=[
            schemas.SingleListing.model_validate(listing) for listing in availability.single_listings
        ],
        recurrence_rules=[
            schemas.RecurrenceRule.model_validate(rule) for rule in availability.recurrence_rules
        ],
        slots=[schemas.AvailabilitySlot.from_slot(slot) for slot in availability.slots],
        exclusions=[schemas.Exclusion.model_validate(exclusion) for exclusion in availability.exclusions],
    )


@router.get("/teachers/{teacher_id}/calendar", response_model=list[schemas.CalendarDay])
def teacher_calendar(
    teacher_id: str,
    repo: SqlAvailabilityRepository = Depends(deps.get_repository),
    today: date = Depends(deps.get_today),
):
    try:
        return availability_service.teacher_calendar(repo, teacher_id, today)
    except AvailabilityError as exc:
        raise deps.http_error(exc) from exc


@router.get("/teachers/{teacher_id}/days/{day}", response_model=schemas.TeacherDay)
def teacher_day(
    teacher_id: str,
    day: date,
    repo: SqlAvailabilityRepository = Depends(deps.get_repository),
    today: date = Depends(deps.get_today),
):
    try:
        slots, exclusions = availability_service.teacher_day(repo, teacher_id, day, today)
    except AvailabilityError as exc:
        raise deps.http_error(exc) from exc
    return schemas.TeacherDay(
        date=day,
        slots=[schemas.AvailabilitySlot.from_slot(slot) for slot in slots],
        exclusions=[schemas.Exclusion.model_validate(exclusion) for exclusion in exclusions],
    )


@router.get("/time-options", response_model=list[str])
def list_time_options(settings: Settings = Depends(deps.get_app_settings)):
    try:
        return time_options(
            settings.time_options_start_hour,
            settings.time_options_end_hour,
            settings.time_options_step_minutes,
        )
    except AvailabilityError as exc:
        raise deps.http_error(exc) from exc
