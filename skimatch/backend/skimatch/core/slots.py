from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Union

from ..db.models.skill import SportSkill
from .constants import DERIVED_ID_SEPARATOR


@dataclass(frozen=True, slots=True)
class SingleOrigin:
    listing_id: int


@dataclass(frozen=True, slots=True)
class RecurringOrigin:
    rule_id: int
    date: date


SlotOrigin = Union[SingleOrigin, RecurringOrigin]


@dataclass(frozen=True, slots=True)
class AvailabilitySlot:
    """A bookable window on one date, either listed directly or derived from a rule."""

    origin: SlotOrigin
    teacher_id: str
    date: date
    start_time: str
    end_time: str
    location: str
    price: Decimal
    skill: SportSkill

    @property
    def id(self) -> str:
        if isinstance(self.origin, RecurringOrigin):
            return f"{self.origin.rule_id}{DERIVED_ID_SEPARATOR}{self.origin.date.isoformat()}"
        return str(self.origin.listing_id)

    @property
    def is_recurring(self) -> bool:
        return isinstance(self.origin, RecurringOrigin)

    @property
    def rule_id(self) -> int | None:
        if isinstance(self.origin, RecurringOrigin):
            return self.origin.rule_id
        return None

    @classmethod
    def from_listing(cls, listing) -> "AvailabilitySlot":
        return cls(
            origin=SingleOrigin(listing.id),
            teacher_id=listing.teacher_id,
            date=listing.date,
            start_time=listing.start_time,
            end_time=listing.end_time,
            location=listing.location,
            price=Decimal(str(listing.price)),
            skill=SportSkill(listing.skill),
        )

    @classmethod
    def from_rule(cls, rule, day: date) -> "AvailabilitySlot":
        return cls(
            origin=RecurringOrigin(rule.id, day),
            teacher_id=rule.teacher_id,
            date=day,
            start_time=rule.start_time,
            end_time=rule.end_time,
            location=rule.location,
            price=Decimal(str(rule.price)),
            skill=SportSkill(rule.skill),
        )
