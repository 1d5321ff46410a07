"""Show model for performances ingested from KOPIS."""

import enum
from datetime import date

from sqlalchemy import Date, Enum, Float, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from playscout.models.base import Base, TimestampMixin


class LifecycleState(str, enum.Enum):
    """Where a show is in its run, relative to today."""

    UPCOMING = "UPCOMING"
    RUNNING = "RUNNING"
    FINISHED = "FINISHED"


class Show(Base, TimestampMixin):
    """
    Performance model.

    One row per KOPIS performance id. Rows are created once by the ingestion
    job; afterwards only ``lifecycle_state`` and ``rank`` are touched by the
    sync job, and ``avg_rating`` by the review service.
    """

    __tablename__ = "shows"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    show_id: Mapped[str] = mapped_column(String(20), nullable=False, unique=True, index=True)

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    end_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    region: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    # Venue
    venue_name: Mapped[str | None] = mapped_column(String(300), nullable=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    seat_count: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Production details, stored as the source formats them
    cast: Mapped[str | None] = mapped_column(Text, nullable=True)
    creator: Mapped[str | None] = mapped_column(Text, nullable=True)
    runtime: Mapped[str | None] = mapped_column(String(100), nullable=True)
    age_rating: Mapped[str | None] = mapped_column(String(100), nullable=True)
    company: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[str | None] = mapped_column(Text, nullable=True)
    min_price: Mapped[int | None] = mapped_column(Integer, nullable=True)
    max_price: Mapped[int | None] = mapped_column(Integer, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    schedule: Mapped[str | None] = mapped_column(Text, nullable=True)

    lifecycle_state: Mapped[LifecycleState] = mapped_column(
        Enum(LifecycleState, native_enum=False, length=20),
        nullable=False,
        default=LifecycleState.UPCOMING,
        index=True,
    )

    # Images
    poster_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    detail_image_urls: Mapped[list[str]] = mapped_column(JSONB, nullable=False, default=list)

    # Weekly box-office rank, null when not in the latest feed
    rank: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Owned by the review service
    avg_rating: Mapped[float | None] = mapped_column(Float, nullable=True)

    def __repr__(self) -> str:
        return f"<Show(show_id={self.show_id!r}, title={self.title!r}, state={self.lifecycle_state})>"
