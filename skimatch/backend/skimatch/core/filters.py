from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Iterable

from pydantic import BaseModel, field_validator

from ..db.models.skill import SportSkill
from .slots import AvailabilitySlot
from .timeutils import normalize_time


class SlotFilter(BaseModel):
    """Learner browse criteria. Every field is optional; present ones are ANDed."""

    date_range: tuple[date, date] | None = None
    skill: SportSkill | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    time_range: tuple[str, str] | None = None

    @field_validator("time_range")
    @classmethod
    def normalize_time_range(cls, value: tuple[str, str] | None) -> tuple[str, str] | None:
        if value is None:
            return None
        start, end = value
        return normalize_time(start), normalize_time(end)

    def matches(self, slot: AvailabilitySlot) -> bool:
        if self.date_range is not None:
            start, end = self.date_range
            if not start <= slot.date <= end:
                return False
        if self.skill is not None and slot.skill != self.skill:
            return False
        if self.min_price is not None and slot.price < self.min_price:
            return False
        if self.max_price is not None and slot.price > self.max_price:
            return False
        if self.time_range is not None:
            start, end = self.time_range
            if not (slot.start_time >= start and slot.end_time <= end):
                return False
        return True


def filter_slots(slots: Iterable[AvailabilitySlot], criteria: SlotFilter | None) -> list[AvailabilitySlot]:
    if criteria is None:
        return list(slots)
    return [slot for slot in slots if criteria.matches(slot)]


def sort_slots(slots: Iterable[AvailabilitySlot]) -> list[AvailabilitySlot]:
    return sorted(slots, key=lambda slot: (slot.date, slot.start_time, slot.teacher_id))
