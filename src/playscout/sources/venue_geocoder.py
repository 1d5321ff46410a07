"""Resolve venue names to coordinates through the KOPIS venue endpoints."""

import logging

from playscout.errors import FetchError, NotFoundError
from playscout.sources.kopis_client import KopisClient
from playscout.sources.models import VenueCoordinates
from playscout.utils.text import to_float
from playscout.utils.xml import find_entries

VENUE_LIST_ENDPOINT = "prfplc"


class VenueGeocoder:
    """
    Two-step venue lookup.

    1. Search the venue list by name and take the first match's id
    2. Fetch that venue's detail record for latitude, longitude and seat count
    """

    def __init__(self, client: KopisClient, logger: logging.Logger | None = None) -> None:
        self.client = client
        self.logger = logger or logging.getLogger(__name__)

    async def resolve_coordinates(self, venue_name: str) -> VenueCoordinates:
        """
        Geocode a venue by name.

        Args:
            venue_name: Venue name as it appears on a show listing

        Returns:
            Coordinates and seat count; malformed numbers come back as NaN

        Raises:
            NotFoundError: If no venue or venue detail matches
            FetchError: If either KOPIS request fails
        """
        try:
            venue_id = await self._find_venue_id(venue_name)
            coordinates = await self._fetch_venue_detail(venue_id)
        except FetchError as e:
            raise FetchError(e.endpoint, e.cause, context=f"venue '{venue_name}'") from e

        self.logger.debug(f"Geocoded venue '{venue_name}' ({venue_id}): {coordinates}")
        return coordinates

    async def _find_venue_id(self, venue_name: str) -> str:
        params = {"rows": 1, "cpage": 1, "shprfnmfct": venue_name}
        tree = await self.client.fetch(VENUE_LIST_ENDPOINT, params)

        venues = find_entries(tree, "dbs", "db")
        if not venues or not venues[0].get("mt10id"):
            raise NotFoundError(f"No venue found for '{venue_name}'")
        return venues[0]["mt10id"]

    async def _fetch_venue_detail(self, venue_id: str) -> VenueCoordinates:
        tree = await self.client.fetch(f"{VENUE_LIST_ENDPOINT}/{venue_id}")

        details = find_entries(tree, "dbs", "db")
        if not details:
            raise NotFoundError(f"No venue detail found for {venue_id}")

        detail = details[0]
        return VenueCoordinates(
            latitude=to_float(detail.get("la")),
            longitude=to_float(detail.get("lo")),
            seat_count=to_float(detail.get("seatscale")),
        )
