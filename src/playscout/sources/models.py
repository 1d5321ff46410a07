"""Data models for records read from KOPIS."""

from dataclasses import dataclass, field
from datetime import date

from playscout.models.show import LifecycleState


@dataclass(frozen=True)
class ShowListingEntry:
    """One show stub from a region's listing page. Never persisted."""

    show_id: str
    venue_name: str
    region_label: str


@dataclass(frozen=True)
class VenueCoordinates:
    """Geocoded venue. Any field may be NaN when the source text is malformed."""

    latitude: float
    longitude: float
    seat_count: float


@dataclass(frozen=True)
class RankEntry:
    """One row of the weekly box-office feed."""

    show_id: str
    rank: int


@dataclass
class ShowRecord:
    """
    A fully enriched show, ready to be inserted into the store.

    Field names match the ``Show`` ORM columns.
    """

    show_id: str
    title: str
    start_date: date
    end_date: date
    region: str
    venue_name: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    seat_count: int | None = None
    cast: str | None = None
    creator: str | None = None
    runtime: str | None = None
    age_rating: str | None = None
    company: str | None = None
    price: str | None = None
    min_price: int | None = None
    max_price: int | None = None
    description: str | None = None
    lifecycle_state: LifecycleState = LifecycleState.UPCOMING
    schedule: str | None = None
    poster_url: str | None = None
    detail_image_urls: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate the run dates."""
        if self.end_date < self.start_date:
            raise ValueError(
                f"end_date {self.end_date} is before start_date {self.start_date}"
            )
