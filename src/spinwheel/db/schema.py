"""Database schema for spinwheel.

spin_history is append-only: rows are inserted and bulk-deleted, never
updated. portfolio_entries belongs to the entry pool service and is only
read here.
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class SpinHistory(Base):
    """One recorded spin.

    Invariant: PRIMARY KEY(id, timestamp)
    The natural key used by bulk deletion.
    """

    __tablename__ = "spin_history"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    timestamp: Mapped[datetime] = mapped_column(DateTime, primary_key=True)
    entry_id: Mapped[str] = mapped_column(String(64), nullable=False)
    entry_name: Mapped[str] = mapped_column(String(256), nullable=False)
    entry_type: Mapped[str] = mapped_column(String(64), nullable=False, default="Unknown")
    entry_who: Mapped[str] = mapped_column(String(256), nullable=False, default="Unknown")
    filter: Mapped[str] = mapped_column(String(64), nullable=False, default="all")
    weighted_mode: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    session_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=lambda: datetime.now(timezone.utc)
    )


class PortfolioEntry(Base):
    """Pool entry written by the entries service."""

    __tablename__ = "portfolio_entries"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    type: Mapped[str] = mapped_column(String(64), nullable=False)
    who: Mapped[str] = mapped_column(String(256), nullable=False)
    why: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=lambda: datetime.now(timezone.utc)
    )
