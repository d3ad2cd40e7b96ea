import datetime as dt
from decimal import Decimal
from pydantic import BaseModel, Field, field_validator, model_validator

from ..models.skill import SportSkill
from ._times import coerce_time


class _TimeWindow(BaseModel):
    start_time: str
    end_time: str

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def normalize_time(cls, value: object) -> object:
        return coerce_time(value)

    @model_validator(mode="after")
    def check_time_order(self):
        if self.start_time >= self.end_time:
            raise ValueError("End time must be after start time")
        return self


class RecurringAvailabilityEntry(_TimeWindow):
    day_of_week: int = Field(ge=0, le=6)
    skill: SportSkill = SportSkill.snowboarding


class RecurringAvailabilityCreate(BaseModel):
    """Several weekly windows saved together with a shared location and price."""

    teacher_id: str = Field(min_length=1)
    location: str = Field(min_length=1)
    price: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    entries: list[RecurringAvailabilityEntry] = Field(min_length=1)
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    duration_months: int | None = Field(default=None, ge=1)

    @field_validator("location")
    @classmethod
    def strip_location(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Location is required")
        return value


class RecurrenceRuleCreate(_TimeWindow):
    teacher_id: str = Field(min_length=1)
    day_of_week: int = Field(ge=0, le=6)
    start_date: dt.date
    end_date: dt.date
    location: str = Field(min_length=1)
    price: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    skill: SportSkill

    @model_validator(mode="after")
    def check_date_window(self):
        if self.start_date > self.end_date:
            raise ValueError("Start date must not be after end date")
        return self


class RecurrenceRule(RecurrenceRuleCreate):
    id: int
    created_at: dt.datetime | None = None

    class Config:
        from_attributes = True
