import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum as PyEnum

from ..core.conflicts import Candidate, ensure_no_conflicts, find_batch_conflicts
from ..core.errors import ConflictError, ValidationError
from ..core.filters import SlotFilter, filter_slots, sort_slots
from ..core.recurrence import expand, group_exclusions
from ..core.slots import AvailabilitySlot, RecurringOrigin, SingleOrigin
from ..core.timeutils import add_months, js_weekday
from ..db import models, schemas
from ..repositories.availability import AvailabilityRepository

logger = logging.getLogger(__name__)


class DeleteScope(str, PyEnum):
    this_date = "this_date"
    all_future = "all_future"


@dataclass(slots=True)
class TeacherAvailability:
    teacher_id: str
    single_listings: list[models.SingleListing] = field(default_factory=list)
    recurrence_rules: list[models.RecurrenceRule] = field(default_factory=list)
    exclusions: list[models.RecurrenceExclusion] = field(default_factory=list)
    slots: list[AvailabilitySlot] = field(default_factory=list)


def create_single_listing(
    repo: AvailabilityRepository,
    payload: schemas.SingleListingCreate,
    *,
    today: date,
    same_skill_only: bool = False,
) -> int:
    if payload.date < today:
        raise ValidationError("Listing date must not be in the past")

    singles = repo.list_single_listings(payload.teacher_id)
    rules = repo.list_recurrence_rules(payload.teacher_id)
    exclusions = repo.list_all_exclusions_for_teacher(payload.teacher_id)
    candidate = Candidate.single(
        payload.teacher_id, payload.date, payload.start_time, payload.end_time, payload.skill
    )
    ensure_no_conflicts(
        candidate,
        singles,
        rules,
        same_skill_only=same_skill_only,
        exclusions_by_rule=group_exclusions(exclusions),
    )

    listing_id = repo.create_single_listing(payload)
    logger.info(
        "Created single listing",
        extra={"listing_id": listing_id, "teacher_id": payload.teacher_id, "date": payload.date.isoformat()},
    )
    return listing_id


def resolve_rule_window(
    payload: schemas.RecurringAvailabilityCreate,
    *,
    today: date,
    default_months: int = 3,
    max_months: int = 12,
) -> tuple[date, date]:
    start_date = payload.start_date or today
    if payload.end_date is not None:
        end_date = payload.end_date
    else:
        end_date = add_months(start_date, payload.duration_months or default_months)
    if start_date > end_date:
        raise ValidationError("Start date must not be after end date")
    if end_date < today:
        raise ValidationError("Recurring availability must end in the future")
    if end_date > add_months(start_date, max_months):
        raise ValidationError(f"Recurring availability cannot span more than {max_months} months")
    return start_date, end_date


def create_recurring_availability(
    repo: AvailabilityRepository,
    payload: schemas.RecurringAvailabilityCreate,
    *,
    today: date,
    same_skill_only: bool = False,
    check_single_listings: bool = False,
    default_months: int = 3,
    max_months: int = 12,
) -> list[int]:
    """Create one rule per entry. Nothing is written if any entry conflicts or fails."""
    start_date, end_date = resolve_rule_window(
        payload, today=today, default_months=default_months, max_months=max_months
    )
    candidates = [
        Candidate.recurring(
            payload.teacher_id,
            entry.day_of_week,
            entry.start_time,
            entry.end_time,
            entry.skill,
            start_date=start_date,
            end_date=end_date,
        )
        for entry in payload.entries
    ]

    batch_conflicts = find_batch_conflicts(candidates, same_skill_only=same_skill_only)
    if batch_conflicts:
        raise ConflictError(batch_conflicts[0][1])

    singles = repo.list_single_listings(payload.teacher_id) if check_single_listings else []
    rules = repo.list_recurrence_rules(payload.teacher_id)
    for candidate in candidates:
        ensure_no_conflicts(
            candidate,
            singles,
            rules,
            same_skill_only=same_skill_only,
            check_single_listings_for_rules=check_single_listings,
        )

    rule_ids: list[int] = []
    with repo.atomic():
        for entry in payload.entries:
            rule_ids.append(
                repo.create_recurrence_rule(
                    schemas.RecurrenceRuleCreate(
                        teacher_id=payload.teacher_id,
                        day_of_week=entry.day_of_week,
                        start_time=entry.start_time,
                        end_time=entry.end_time,
                        start_date=start_date,
                        end_date=end_date,
                        location=payload.location,
                        price=payload.price,
                        skill=entry.skill,
                    )
                )
            )
    logger.info(
        "Created recurring availability",
        extra={"teacher_id": payload.teacher_id, "rule_ids": rule_ids},
    )
    return rule_ids


def delete_single_listing(repo: AvailabilityRepository, listing_id: int) -> None:
    repo.delete_single_listing(listing_id)
    logger.info("Deleted single listing", extra={"listing_id": listing_id})


def delete_recurrence_rule(repo: AvailabilityRepository, rule_id: int) -> None:
    repo.delete_recurrence_rule(rule_id)
    logger.info("Deleted recurrence rule", extra={"rule_id": rule_id})


def exclude_date(repo: AvailabilityRepository, rule_id: int, day: date) -> models.RecurrenceExclusion:
    rule = repo.get_recurrence_rule(rule_id)
    if not rule.start_date <= day <= rule.end_date:
        raise ValidationError(f"{day.isoformat()} is outside the recurring availability")
    if js_weekday(day) != rule.day_of_week:
        raise ValidationError(f"{day.isoformat()} does not fall on the recurring weekday")
    exclusion = repo.add_exclusion(rule_id, day)
    logger.info("Excluded date", extra={"rule_id": rule_id, "date": day.isoformat()})
    return exclusion


def restore_date(repo: AvailabilityRepository, rule_id: int, day: date) -> None:
    repo.remove_exclusion(rule_id, day)
    logger.info("Restored date", extra={"rule_id": rule_id, "date": day.isoformat()})


def delete_slot(
    repo: AvailabilityRepository,
    slot: AvailabilitySlot,
    scope: DeleteScope = DeleteScope.this_date,
) -> None:
    """Remove a slot: a single listing is deleted, a recurring one per ``scope``."""
    origin = slot.origin
    if isinstance(origin, SingleOrigin):
        delete_single_listing(repo, origin.listing_id)
    elif isinstance(origin, RecurringOrigin):
        if scope == DeleteScope.all_future:
            delete_recurrence_rule(repo, origin.rule_id)
        else:
            exclude_date(repo, origin.rule_id, origin.date)
    else:
        raise TypeError(f"Unknown slot origin: {origin!r}")


def teacher_availability(repo: AvailabilityRepository, teacher_id: str, today: date) -> TeacherAvailability:
    singles = repo.list_single_listings(teacher_id)
    rules = repo.list_recurrence_rules(teacher_id)
    exclusions = repo.list_all_exclusions_for_teacher(teacher_id)
    slots = [AvailabilitySlot.from_listing(listing) for listing in singles]
    slots.extend(expand(rules, group_exclusions(exclusions), today))
    return TeacherAvailability(
        teacher_id=teacher_id,
        single_listings=singles,
        recurrence_rules=rules,
        exclusions=exclusions,
        slots=sort_slots(slots),
    )


def teacher_calendar(repo: AvailabilityRepository, teacher_id: str, today: date) -> list[schemas.CalendarDay]:
    availability = teacher_availability(repo, teacher_id, today)
    marks: dict[date, schemas.CalendarDay] = {}
    for slot in availability.slots:
        marks.setdefault(slot.date, schemas.CalendarDay(date=slot.date)).has_availability = True
    for exclusion in availability.exclusions:
        marks.setdefault(exclusion.date, schemas.CalendarDay(date=exclusion.date)).has_exclusion = True
    return [marks[day] for day in sorted(marks)]


def teacher_day(
    repo: AvailabilityRepository, teacher_id: str, day: date, today: date
) -> tuple[list[AvailabilitySlot], list[models.RecurrenceExclusion]]:
    availability = teacher_availability(repo, teacher_id, today)
    slots = [slot for slot in availability.slots if slot.date == day]
    exclusions = [exclusion for exclusion in availability.exclusions if exclusion.date == day]
    return slots, exclusions


def browse_availability(
    repo: AvailabilityRepository,
    criteria: SlotFilter | None,
    today: date,
) -> list[AvailabilitySlot]:
    """Every teacher's upcoming slots matching ``criteria``, earliest first."""
    singles = repo.list_single_listings(from_date=today)
    rules = repo.list_recurrence_rules()
    exclusions_by_rule = group_exclusions(repo.list_all_exclusions())

    slots = [AvailabilitySlot.from_listing(listing) for listing in singles]
    slots.extend(expand(rules, exclusions_by_rule, today))
    return sort_slots(filter_slots(slots, criteria))
