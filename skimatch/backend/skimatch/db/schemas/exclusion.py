import datetime as dt
from pydantic import BaseModel


class ExclusionCreate(BaseModel):
    date: dt.date


class Exclusion(BaseModel):
    rule_id: int
    date: dt.date

    class Config:
        from_attributes = True
