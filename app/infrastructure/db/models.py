"""
SQLAlchemy ORM models
"""
import uuid
from datetime import date as date_type, datetime, timezone

from sqlalchemy import String, Integer, Date, TIMESTAMP, Uuid, CheckConstraint, Index, func
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.db.session import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SubscriptionModel(Base):
    """Subscription record: user's paid service over a range of months"""
    __tablename__ = "subscriptions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)

    service_name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False)

    # Всегда 1-е число месяца
    start_date: Mapped[date_type] = mapped_column(Date, nullable=False)
    end_date: Mapped[date_type | None] = mapped_column(Date, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_subscriptions_price_non_negative"),
        Index("ix_subscriptions_user_id", "user_id"),
        Index("ix_subscriptions_service_name", "service_name"),
        Index("ix_subscriptions_dates", "start_date", "end_date"),
        Index("ix_subscriptions_agg", "user_id", "service_name", "start_date", "end_date"),
    )
