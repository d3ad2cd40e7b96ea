import datetime as dt
from sqlalchemy import CheckConstraint, Date, DateTime, Enum, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column
from ..session import Base
from .skill import SportSkill


class SingleListing(Base):
    __tablename__ = "single_listings"
    __table_args__ = (
        CheckConstraint("price > 0", name="ck_single_listing_price_positive"),
        CheckConstraint("start_time < end_time", name="ck_single_listing_time_order"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    teacher_id: Mapped[str] = mapped_column(String(128), index=True, nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, index=True, nullable=False)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[float] = mapped_column(Numeric(10, 2), nullable=False)
    skill: Mapped[SportSkill] = mapped_column(Enum(SportSkill), nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
