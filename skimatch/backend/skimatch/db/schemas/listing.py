import datetime as dt
from decimal import Decimal
from pydantic import BaseModel, Field, field_validator, model_validator

from ..models.skill import SportSkill
from ._times import coerce_time


class SingleListingBase(BaseModel):
    teacher_id: str = Field(min_length=1)
    date: dt.date
    start_time: str
    end_time: str
    location: str = Field(min_length=1)
    price: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    skill: SportSkill = SportSkill.snowboarding

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def normalize_time(cls, value: object) -> object:
        return coerce_time(value)

    @field_validator("location")
    @classmethod
    def strip_location(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Location is required")
        return value

    @model_validator(mode="after")
    def check_time_order(self):
        if self.start_time >= self.end_time:
            raise ValueError("End time must be after start time")
        return self


class SingleListingCreate(SingleListingBase):
    pass


class SingleListing(SingleListingBase):
    id: int
    created_at: dt.datetime | None = None

    class Config:
        from_attributes = True
