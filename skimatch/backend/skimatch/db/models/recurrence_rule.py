from datetime import date, datetime
from sqlalchemy import CheckConstraint, Date, DateTime, Enum, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..session import Base
from .skill import SportSkill


class RecurrenceRule(Base):
    __tablename__ = "recurrence_rules"
    __table_args__ = (
        CheckConstraint("start_date <= end_date", name="ck_recurrence_rule_date_window"),
        CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_recurrence_rule_day_of_week"),
        CheckConstraint("price > 0", name="ck_recurrence_rule_price_positive"),
        CheckConstraint("start_time < end_time", name="ck_recurrence_rule_time_order"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    teacher_id: Mapped[str] = mapped_column(String(128), index=True, nullable=False)
    # 0 = Sunday .. 6 = Saturday
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[float] = mapped_column(Numeric(10, 2), nullable=False)
    skill: Mapped[SportSkill] = mapped_column(Enum(SportSkill), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    exclusions = relationship(
        "RecurrenceExclusion",
        back_populates="rule",
        cascade="all, delete-orphan",
    )
