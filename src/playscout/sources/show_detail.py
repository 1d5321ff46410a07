"""Fetch a show's full KOPIS record and map it to a ShowRecord."""

import asyncio
import logging
import math
from datetime import date
from typing import Any

from playscout.config import settings
from playscout.errors import FetchError, NotFoundError
from playscout.models.show import LifecycleState
from playscout.sources.kopis_client import KopisClient
from playscout.sources.models import ShowRecord, VenueCoordinates
from playscout.sources.venue_geocoder import VenueGeocoder
from playscout.utils.dates import lifecycle_state_for, parse_kopis_date, today_at_offset
from playscout.utils.text import nan_to_none, parse_price
from playscout.utils.xml import as_list, find_entries

SHOW_ENDPOINT = "pblprfr"

# KOPIS prfstate text -> lifecycle state
SOURCE_STATES: dict[str, LifecycleState] = {
    "공연예정": LifecycleState.UPCOMING,
    "공연중": LifecycleState.RUNNING,
    "공연완료": LifecycleState.FINISHED,
}


class ShowDetailFetcher:
    """Builds a complete ShowRecord from the show detail and venue endpoints."""

    def __init__(
        self,
        client: KopisClient,
        geocoder: VenueGeocoder | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.client = client
        self.logger = logger or logging.getLogger(__name__)
        self.geocoder = geocoder or VenueGeocoder(client, logger=self.logger)

    async def fetch_detail(self, show_id: str, venue_name: str, region: str) -> ShowRecord:
        """
        Fetch and normalize one show.

        The detail request and the venue geocoding run concurrently. If either
        fails the whole call fails; no partial record is returned.

        Args:
            show_id: KOPIS performance id (``mt20id``)
            venue_name: Venue name from the listing, used for geocoding
            region: Display label of the region the show was listed under

        Returns:
            Normalized show record

        Raises:
            FetchError: If a request fails or the detail cannot be decoded
            NotFoundError: If the show or its venue is not found
        """
        endpoint = f"{SHOW_ENDPOINT}/{show_id}"
        results = await asyncio.gather(
            self.client.fetch(endpoint),
            self.geocoder.resolve_coordinates(venue_name),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        tree, coordinates = results

        details = find_entries(tree, "dbs", "db")
        if not details:
            raise NotFoundError(f"No detail found for show {show_id}")

        try:
            return parse_show_detail(details[0], coordinates, region)
        except (KeyError, ValueError) as e:
            raise FetchError(endpoint, e) from e


def parse_show_detail(
    show: dict[str, Any],
    coordinates: VenueCoordinates,
    region: str,
    today: date | None = None,
) -> ShowRecord:
    """
    Map a decoded KOPIS ``<db>`` detail element to a ShowRecord.

    Args:
        show: Decoded detail element
        coordinates: Geocoded venue for the show
        region: Region display label
        today: Date used when the source state text is unrecognized

    Raises:
        KeyError: If the id, title or run dates are missing
        ValueError: If the run dates are malformed
    """
    start_date = parse_kopis_date(show["prfpdfrom"])
    end_date = parse_kopis_date(show["prfpdto"])

    styurls = show.get("styurls")
    detail_images = as_list(styurls.get("styurl")) if isinstance(styurls, dict) else []

    price = _text(show, "pcseguidance")
    min_price, max_price = parse_price(price)

    state = SOURCE_STATES.get(_text(show, "prfstate") or "")
    if state is None:
        today = today or today_at_offset(settings.timezone_offset_hours)
        state = lifecycle_state_for(start_date, end_date, today)

    return ShowRecord(
        show_id=show["mt20id"],
        title=show["prfnm"],
        start_date=start_date,
        end_date=end_date,
        region=region,
        venue_name=_text(show, "fcltynm"),
        latitude=nan_to_none(coordinates.latitude),
        longitude=nan_to_none(coordinates.longitude),
        seat_count=None if math.isnan(coordinates.seat_count) else int(coordinates.seat_count),
        cast=_text(show, "prfcast"),
        creator=_text(show, "prfcrew"),
        runtime=_text(show, "prfruntime"),
        age_rating=_text(show, "prfage"),
        company=_text(show, "entrpsnm"),
        price=price,
        min_price=min_price,
        max_price=max_price,
        description=_text(show, "sty"),
        lifecycle_state=state,
        schedule=_text(show, "dtguidance"),
        poster_url=_text(show, "poster"),
        detail_image_urls=[url for url in detail_images if isinstance(url, str) and url],
    )


def _text(show: dict[str, Any], key: str) -> str | None:
    value = show.get(key)
    return value if isinstance(value, str) and value else None
