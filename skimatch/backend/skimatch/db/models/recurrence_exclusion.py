import datetime as dt
from sqlalchemy import Date, DateTime, ForeignKey, Integer, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..session import Base


class RecurrenceExclusion(Base):
    __tablename__ = "recurrence_exclusions"
    __table_args__ = (
        UniqueConstraint("rule_id", "date", name="uq_recurrence_exclusion_rule_date"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    rule_id: Mapped[int] = mapped_column(
        ForeignKey("recurrence_rules.id", ondelete="CASCADE"), index=True
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    rule = relationship("RecurrenceRule", back_populates="exclusions")
