"""List one page of shows across every KOPIS region in parallel."""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date, timedelta

from playscout.config import settings
from playscout.regions import Region, region_label
from playscout.sources.kopis_client import KopisClient
from playscout.sources.models import ShowListingEntry
from playscout.utils.dates import format_compact, today_at_offset
from playscout.utils.xml import find_entries

LISTING_ENDPOINT = "pblprfr"


@dataclass(frozen=True)
class DateWindow:
    """Inclusive range of performance dates to list."""

    start: date
    end: date

    @classmethod
    def from_today(cls, days: int, today: date | None = None) -> "DateWindow":
        """Window from today (KST) to ``days`` days ahead."""
        today = today or today_at_offset(settings.timezone_offset_hours)
        return cls(start=today, end=today + timedelta(days=days))


class RegionLister:
    """
    Fans a listing query out to every region.

    A failing region is logged and contributes no entries; it never fails
    the page.
    """

    def __init__(
        self,
        client: KopisClient,
        genre_code: str | None = None,
        regions: list[Region] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.client = client
        self.genre_code = genre_code or settings.genre_code
        self.regions = regions if regions is not None else list(Region)
        self.logger = logger or logging.getLogger(__name__)

    async def list_page(self, window: DateWindow, page: int, page_size: int) -> list[ShowListingEntry]:
        """
        Fetch one page from every region and merge the results.

        Args:
            window: Performance date range
            page: 1-based page number
            page_size: Rows requested per region

        Returns:
            Entries from all regions that answered; may be empty
        """
        tasks = [self._list_region(region, window, page, page_size) for region in self.regions]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        entries: list[ShowListingEntry] = []
        for region, result in zip(self.regions, results):
            if isinstance(result, BaseException):
                self.logger.error(
                    f"Failed to fetch shows for region {region.name} at page {page}: {result}"
                )
                continue
            entries.extend(result)

        self.logger.info(f"Page {page}: {len(entries)} shows found across {len(self.regions)} regions")
        return entries

    async def _list_region(
        self,
        region: Region,
        window: DateWindow,
        page: int,
        page_size: int,
    ) -> list[ShowListingEntry]:
        params = {
            "stdate": format_compact(window.start),
            "eddate": format_compact(window.end),
            "cpage": page,
            "rows": page_size,
            "shcate": self.genre_code,
            "signgucode": region.value,
        }
        tree = await self.client.fetch(LISTING_ENDPOINT, params)

        label = region_label(region)
        entries = [
            ShowListingEntry(
                show_id=show["mt20id"],
                venue_name=show.get("fcltynm", ""),
                region_label=label,
            )
            for show in find_entries(tree, "dbs", "db")
            if show.get("mt20id")
        ]
        self.logger.debug(f"Fetched {len(entries)} shows for region {region.name} ({label})")
        return entries
