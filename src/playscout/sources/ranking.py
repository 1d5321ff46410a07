"""Weekly box-office ranking feed."""

import logging
from datetime import date

from playscout.config import settings
from playscout.sources.kopis_client import KopisClient
from playscout.sources.models import RankEntry
from playscout.utils.dates import format_compact
from playscout.utils.xml import find_entries

BOXOFFICE_ENDPOINT = "boxoffice"


class RankingFeed:
    """Reads the KOPIS box-office report for one genre."""

    def __init__(
        self,
        client: KopisClient,
        genre_code: str | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.client = client
        self.genre_code = genre_code or settings.genre_code
        self.logger = logger or logging.getLogger(__name__)

    async def fetch_weekly(self, day: date) -> list[RankEntry]:
        """
        Fetch the weekly ranking as of ``day``.

        Rows without a show id or with a non-numeric rank are dropped.

        Raises:
            FetchError: If the request fails
        """
        params = {
            "ststype": "week",
            "catecode": self.genre_code,
            "date": format_compact(day),
        }
        tree = await self.client.fetch(BOXOFFICE_ENDPOINT, params)

        entries: list[RankEntry] = []
        for row in find_entries(tree, "boxofs", "boxof"):
            show_id = row.get("mt20id")
            try:
                rank = int(row.get("rnum", ""))
            except (TypeError, ValueError):
                self.logger.warning(f"Skipping ranking row with bad rank: {row!r}")
                continue
            if show_id:
                entries.append(RankEntry(show_id=show_id, rank=rank))

        self.logger.info(f"Fetched {len(entries)} ranking entries for week of {day}")
        return entries
