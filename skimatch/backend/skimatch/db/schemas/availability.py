import datetime as dt
from decimal import Decimal
from typing import Literal
from pydantic import BaseModel

from ...core.slots import AvailabilitySlot as SlotValue
from ...core.timeutils import format_display
from ..models.skill import SportSkill
from .exclusion import Exclusion
from .listing import SingleListing
from .recurring import RecurrenceRule


class AvailabilitySlot(BaseModel):
    id: str
    kind: Literal["single", "recurring"]
    listing_id: int | None = None
    rule_id: int | None = None
    teacher_id: str
    date: dt.date
    start_time: str
    end_time: str
    display_time: str
    location: str
    price: Decimal
    skill: SportSkill

    @classmethod
    def from_slot(cls, slot: SlotValue) -> "AvailabilitySlot":
        return cls(
            id=slot.id,
            kind="recurring" if slot.is_recurring else "single",
            listing_id=None if slot.is_recurring else slot.origin.listing_id,
            rule_id=slot.rule_id,
            teacher_id=slot.teacher_id,
            date=slot.date,
            start_time=slot.start_time,
            end_time=slot.end_time,
            display_time=f"{format_display(slot.start_time)} - {format_display(slot.end_time)}",
            location=slot.location,
            price=slot.price,
            skill=slot.skill,
        )


class TeacherAvailability(BaseModel):
    teacher_id: str
    single_listings: list[SingleListing]
    recurrence_rules: list[RecurrenceRule]
    slots: list[AvailabilitySlot]
    exclusions: list[Exclusion]


class CalendarDay(BaseModel):
    date: dt.date
    has_availability: bool = False
    has_exclusion: bool = False


class TeacherDay(BaseModel):
    date: dt.date
    slots: list[AvailabilitySlot]
    exclusions: list[Exclusion]
