"""Expansion of weekly recurrence rules into dated availability slots.

``today`` is always passed in by the caller; nothing here reads the clock, so
the same inputs always produce the same slots.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date, timedelta
from typing import Iterable, Iterator, Mapping

from ..db import models
from .slots import AvailabilitySlot
from .timeutils import js_weekday

_WEEK = timedelta(days=7)


def occurrence_dates(rule: models.RecurrenceRule, today: date) -> Iterator[date]:
    """Dates in ``[max(start_date, today), end_date]`` falling on the rule's weekday."""
    current = max(rule.start_date, today)
    offset = (rule.day_of_week - js_weekday(current)) % 7
    current += timedelta(days=offset)
    while current <= rule.end_date:
        yield current
        current += _WEEK


def expand_rule(
    rule: models.RecurrenceRule,
    excluded: Iterable[date] | None,
    today: date,
) -> Iterator[AvailabilitySlot]:
    skipped = frozenset(excluded or ())
    for day in occurrence_dates(rule, today):
        if day in skipped:
            continue
        yield AvailabilitySlot.from_rule(rule, day)


def expand(
    rules: Iterable[models.RecurrenceRule],
    exclusions_by_rule: Mapping[int, Iterable[date]] | None,
    today: date,
) -> Iterator[AvailabilitySlot]:
    exclusions_by_rule = exclusions_by_rule or {}
    for rule in rules:
        yield from expand_rule(rule, exclusions_by_rule.get(rule.id), today)


def group_exclusions(rows: Iterable) -> dict[int, set[date]]:
    """Group ``(rule_id, date)`` rows into a per-rule set of excluded dates."""
    grouped: dict[int, set[date]] = defaultdict(set)
    for row in rows:
        grouped[row.rule_id].add(row.date)
    return dict(grouped)
