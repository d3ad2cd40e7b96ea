"""Storage of single listings, recurrence rules and their exclusions."""

from __future__ import annotations

from contextlib import contextmanager
from datetime import date
from typing import Iterator, Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.errors import NotFoundError, TransportError
from ..db import models, schemas


class AvailabilityRepository(Protocol):
    def list_single_listings(
        self, teacher_id: str | None = None, *, from_date: date | None = None
    ) -> list[models.SingleListing]: ...

    def get_single_listing(self, listing_id: int) -> models.SingleListing: ...

    def create_single_listing(self, data: schemas.SingleListingCreate) -> int: ...

    def delete_single_listing(self, listing_id: int) -> None: ...

    def get_recurrence_rule(self, rule_id: int) -> models.RecurrenceRule: ...

    def list_recurrence_rules(self, teacher_id: str | None = None) -> list[models.RecurrenceRule]: ...

    def create_recurrence_rule(self, data: schemas.RecurrenceRuleCreate) -> int: ...

    def delete_recurrence_rule(self, rule_id: int) -> None: ...

    def list_exclusions(self, rule_id: int) -> list[date]: ...

    def list_all_exclusions_for_teacher(self, teacher_id: str) -> list[models.RecurrenceExclusion]: ...

    def list_all_exclusions(self) -> list[models.RecurrenceExclusion]: ...

    def add_exclusion(self, rule_id: int, day: date) -> models.RecurrenceExclusion: ...

    def remove_exclusion(self, rule_id: int, day: date) -> None: ...

    def atomic(self): ...


class SqlAvailabilityRepository:
    """SQLAlchemy-backed repository. Each write commits unless inside :meth:`atomic`."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self._in_atomic = False

    @contextmanager
    def atomic(self) -> Iterator["SqlAvailabilityRepository"]:
        outer = not self._in_atomic
        self._in_atomic = True
        try:
            yield self
            if outer:
                self._commit()
        except Exception:
            if outer:
                self.db.rollback()
            raise
        finally:
            if outer:
                self._in_atomic = False

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise TransportError("Failed to save availability") from exc

    def _save(self) -> None:
        if not self._in_atomic:
            self._commit()
            return
        try:
            self.db.flush()
        except SQLAlchemyError as exc:
            raise TransportError("Failed to save availability") from exc

    def _all(self, stmt) -> list:
        try:
            return list(self.db.execute(stmt).scalars().all())
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise TransportError("Failed to load availability") from exc

    def _get(self, model, ident: int):
        try:
            obj = self.db.get(model, ident)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise TransportError("Failed to load availability") from exc
        if obj is None:
            raise NotFoundError(f"{model.__name__} {ident} not found")
        return obj

    # single listings

    def list_single_listings(
        self, teacher_id: str | None = None, *, from_date: date | None = None
    ) -> list[models.SingleListing]:
        stmt = select(models.SingleListing)
        if teacher_id is not None:
            stmt = stmt.where(models.SingleListing.teacher_id == teacher_id)
        if from_date is not None:
            stmt = stmt.where(models.SingleListing.date >= from_date)
        stmt = stmt.order_by(
            models.SingleListing.date.desc(),
            models.SingleListing.start_time.asc(),
            models.SingleListing.id,
        )
        return self._all(stmt)

    def get_single_listing(self, listing_id: int) -> models.SingleListing:
        return self._get(models.SingleListing, listing_id)

    def create_single_listing(self, data: schemas.SingleListingCreate) -> int:
        listing = models.SingleListing(**data.model_dump())
        self.db.add(listing)
        self._save()
        return listing.id

    def delete_single_listing(self, listing_id: int) -> None:
        listing = self._get(models.SingleListing, listing_id)
        self.db.delete(listing)
        self._save()

    # recurrence rules

    def get_recurrence_rule(self, rule_id: int) -> models.RecurrenceRule:
        return self._get(models.RecurrenceRule, rule_id)

    def list_recurrence_rules(self, teacher_id: str | None = None) -> list[models.RecurrenceRule]:
        stmt = select(models.RecurrenceRule)
        if teacher_id is not None:
            stmt = stmt.where(models.RecurrenceRule.teacher_id == teacher_id)
        stmt = stmt.order_by(
            models.RecurrenceRule.day_of_week,
            models.RecurrenceRule.start_time,
            models.RecurrenceRule.id,
        )
        return self._all(stmt)

    def create_recurrence_rule(self, data: schemas.RecurrenceRuleCreate) -> int:
        rule = models.RecurrenceRule(**data.model_dump())
        self.db.add(rule)
        self._save()
        return rule.id

    def delete_recurrence_rule(self, rule_id: int) -> None:
        rule = self._get(models.RecurrenceRule, rule_id)
        self.db.delete(rule)
        self._save()

    # exclusions

    def list_exclusions(self, rule_id: int) -> list[date]:
        stmt = (
            select(models.RecurrenceExclusion)
            .where(models.RecurrenceExclusion.rule_id == rule_id)
            .order_by(models.RecurrenceExclusion.date)
        )
        return [exclusion.date for exclusion in self._all(stmt)]

    def list_all_exclusions_for_teacher(self, teacher_id: str) -> list[models.RecurrenceExclusion]:
        stmt = (
            select(models.RecurrenceExclusion)
            .join(models.RecurrenceRule, models.RecurrenceExclusion.rule_id == models.RecurrenceRule.id)
            .where(models.RecurrenceRule.teacher_id == teacher_id)
            .order_by(models.RecurrenceExclusion.date, models.RecurrenceExclusion.rule_id)
        )
        return self._all(stmt)

    def list_all_exclusions(self) -> list[models.RecurrenceExclusion]:
        stmt = select(models.RecurrenceExclusion).order_by(
            models.RecurrenceExclusion.date, models.RecurrenceExclusion.rule_id
        )
        return self._all(stmt)

    def _find_exclusion(self, rule_id: int, day: date) -> models.RecurrenceExclusion | None:
        stmt = select(models.RecurrenceExclusion).where(
            models.RecurrenceExclusion.rule_id == rule_id,
            models.RecurrenceExclusion.date == day,
        )
        found = self._all(stmt)
        return found[0] if found else None

    def add_exclusion(self, rule_id: int, day: date) -> models.RecurrenceExclusion:
        self._get(models.RecurrenceRule, rule_id)
        existing = self._find_exclusion(rule_id, day)
        if existing is not None:
            return existing
        exclusion = models.RecurrenceExclusion(rule_id=rule_id, date=day)
        self.db.add(exclusion)
        self._save()
        return exclusion

    def remove_exclusion(self, rule_id: int, day: date) -> None:
        exclusion = self._find_exclusion(rule_id, day)
        if exclusion is None:
            raise NotFoundError(f"No exclusion for rule {rule_id} on {day.isoformat()}")
        self.db.delete(exclusion)
        self._save()
