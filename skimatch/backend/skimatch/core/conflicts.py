"""Time-overlap conflicts between a new availability and a teacher's commitments.

A candidate listed on a date is checked against the teacher's single listings
on that date and against every rule that would produce an instance on it. A
candidate rule is checked against the teacher's rules on the same weekday;
single listings are only cross-checked when the caller asks for it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum as PyEnum
from typing import Iterable, Mapping, Sequence

from ..db import models
from ..db.models.skill import SportSkill
from .constants import WEEKDAY_NAMES
from .errors import ConflictError
from .timeutils import format_display, intervals_overlap, js_weekday


class ConflictKind(str, PyEnum):
    single = "single"
    recurring = "recurring"
    pending = "pending"


@dataclass(frozen=True, slots=True)
class Candidate:
    teacher_id: str
    start_time: str
    end_time: str
    skill: SportSkill
    date: date | None = None
    day_of_week: int | None = None
    start_date: date | None = None
    end_date: date | None = None

    @classmethod
    def single(
        cls, teacher_id: str, day: date, start_time: str, end_time: str, skill: SportSkill
    ) -> "Candidate":
        return cls(teacher_id, start_time, end_time, SportSkill(skill), date=day)

    @classmethod
    def recurring(
        cls,
        teacher_id: str,
        day_of_week: int,
        start_time: str,
        end_time: str,
        skill: SportSkill,
        *,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> "Candidate":
        return cls(
            teacher_id,
            start_time,
            end_time,
            SportSkill(skill),
            day_of_week=day_of_week,
            start_date=start_date,
            end_date=end_date,
        )

    @property
    def is_recurring(self) -> bool:
        return self.date is None


@dataclass(frozen=True, slots=True)
class Conflict:
    kind: ConflictKind
    start_time: str
    end_time: str
    skill: SportSkill
    source_id: int | None = None
    date: date | None = None
    day_of_week: int | None = None

    def describe(self) -> str:
        if self.date is not None:
            when = self.date.isoformat()
        else:
            when = f"{WEEKDAY_NAMES[self.day_of_week]}s"
        return (
            f"an existing {self.skill.value} availability "
            f"{format_display(self.start_time)} - {format_display(self.end_time)} on {when}"
        )

    @classmethod
    def from_listing(cls, listing: models.SingleListing) -> "Conflict":
        return cls(
            ConflictKind.single,
            listing.start_time,
            listing.end_time,
            SportSkill(listing.skill),
            source_id=listing.id,
            date=listing.date,
        )

    @classmethod
    def from_rule(cls, rule: models.RecurrenceRule) -> "Conflict":
        return cls(
            ConflictKind.recurring,
            rule.start_time,
            rule.end_time,
            SportSkill(rule.skill),
            source_id=rule.id,
            day_of_week=rule.day_of_week,
        )


def _clashes(candidate: Candidate, start_time: str, end_time: str, skill, same_skill_only: bool) -> bool:
    if same_skill_only and SportSkill(skill) != candidate.skill:
        return False
    return intervals_overlap(candidate.start_time, candidate.end_time, start_time, end_time)


def _within(day: date, start: date | None, end: date | None) -> bool:
    if start is not None and day < start:
        return False
    if end is not None and day > end:
        return False
    return True


def find_conflicts(
    candidate: Candidate,
    existing_singles: Iterable[models.SingleListing],
    existing_rules: Iterable[models.RecurrenceRule],
    *,
    same_skill_only: bool = False,
    exclusions_by_rule: Mapping[int, Iterable[date]] | None = None,
    check_single_listings_for_rules: bool = False,
) -> list[Conflict]:
    """Every existing commitment the candidate overlaps, singles before rules.

    ``exclusions_by_rule`` frees the excluded dates of a rule for a dated
    candidate. With ``same_skill_only`` two different sports never conflict.
    """
    exclusions_by_rule = exclusions_by_rule or {}
    conflicts: list[Conflict] = []

    if not candidate.is_recurring:
        weekday = js_weekday(candidate.date)
        for listing in existing_singles:
            if listing.teacher_id != candidate.teacher_id or listing.date != candidate.date:
                continue
            if _clashes(candidate, listing.start_time, listing.end_time, listing.skill, same_skill_only):
                conflicts.append(Conflict.from_listing(listing))
        for rule in existing_rules:
            if rule.teacher_id != candidate.teacher_id or rule.day_of_week != weekday:
                continue
            if not rule.start_date <= candidate.date <= rule.end_date:
                continue
            if candidate.date in exclusions_by_rule.get(rule.id, ()):
                continue
            if _clashes(candidate, rule.start_time, rule.end_time, rule.skill, same_skill_only):
                conflicts.append(Conflict.from_rule(rule))
        return conflicts

    if check_single_listings_for_rules:
        for listing in existing_singles:
            if listing.teacher_id != candidate.teacher_id:
                continue
            if js_weekday(listing.date) != candidate.day_of_week:
                continue
            if not _within(listing.date, candidate.start_date, candidate.end_date):
                continue
            if _clashes(candidate, listing.start_time, listing.end_time, listing.skill, same_skill_only):
                conflicts.append(Conflict.from_listing(listing))
    for rule in existing_rules:
        if rule.teacher_id != candidate.teacher_id or rule.day_of_week != candidate.day_of_week:
            continue
        if _clashes(candidate, rule.start_time, rule.end_time, rule.skill, same_skill_only):
            conflicts.append(Conflict.from_rule(rule))
    return conflicts


def ensure_no_conflicts(
    candidate: Candidate,
    existing_singles: Iterable[models.SingleListing],
    existing_rules: Iterable[models.RecurrenceRule],
    **options,
) -> None:
    conflicts = find_conflicts(candidate, existing_singles, existing_rules, **options)
    if conflicts:
        raise ConflictError(conflicts[0])


def find_batch_conflicts(
    candidates: Sequence[Candidate], *, same_skill_only: bool = False
) -> list[tuple[int, Conflict]]:
    """Overlaps between unsaved recurring candidates, as ``(index, conflict)`` pairs.

    Each candidate is compared with the ones before it in the batch.
    """
    found: list[tuple[int, Conflict]] = []
    for index, candidate in enumerate(candidates):
        for earlier in candidates[:index]:
            if earlier.teacher_id != candidate.teacher_id:
                continue
            if earlier.day_of_week != candidate.day_of_week:
                continue
            if _clashes(candidate, earlier.start_time, earlier.end_time, earlier.skill, same_skill_only):
                found.append(
                    (
                        index,
                        Conflict(
                            ConflictKind.pending,
                            earlier.start_time,
                            earlier.end_time,
                            earlier.skill,
                            day_of_week=earlier.day_of_week,
                        ),
                    )
                )
                break
    return found
