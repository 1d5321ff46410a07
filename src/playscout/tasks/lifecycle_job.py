"""Batch job that advances show lifecycle states and syncs box-office ranks."""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date

from playscout.config import settings
from playscout.database import AsyncSessionLocal
from playscout.errors import PlayscoutError
from playscout.repositories.shows import ShowRepository
from playscout.sources.kopis_client import KopisClient
from playscout.sources.ranking import RankingFeed
from playscout.utils.dates import today_at_offset


@dataclass
class SyncReport:
    """Outcome of one lifecycle sync run."""

    finished: int = 0
    running: int = 0
    ranks_requested: int = 0
    ranks_matched: int = 0
    failures: int = 0


class LifecycleSyncJob:
    """
    Two independent, idempotent updates run concurrently:

    - state advance: FINISHED for shows that ended before today, RUNNING for
      shows whose run includes today. UPCOMING is never written.
    - rank sync: the weekly box-office rank of each feed entry is written to
      the matching show; feed entries with no stored show are ignored.

    Each update's failure is logged and counted and does not stop the others.
    Nothing is transactional across updates.
    """

    def __init__(
        self,
        repository: ShowRepository,
        ranking: RankingFeed,
        logger: logging.Logger | None = None,
    ) -> None:
        self.repository = repository
        self.ranking = ranking
        self.logger = logger or logging.getLogger(__name__)

    async def run(self, today: date | None = None) -> SyncReport:
        """Run state advance and rank sync once for ``today`` (KST by default)."""
        today = today or today_at_offset(settings.timezone_offset_hours)
        report = SyncReport()

        finished, running, _ = await asyncio.gather(
            self._guard("mark finished", self.repository.mark_finished(today), report),
            self._guard("mark running", self.repository.mark_running(today), report),
            self.sync_ranks(today, report),
        )
        report.finished = finished or 0
        report.running = running or 0

        self.logger.info(
            f"Lifecycle sync for {today}: {report.finished} finished, {report.running} running, "
            f"{report.ranks_matched}/{report.ranks_requested} ranks applied, "
            f"{report.failures} failures"
        )
        return report

    async def sync_ranks(self, today: date, report: SyncReport) -> None:
        """Fetch the weekly ranking and write each rank concurrently."""
        try:
            entries = await self.ranking.fetch_weekly(today)
        except PlayscoutError as e:
            self.logger.error(f"Failed to fetch ranking for {today}: {e}")
            report.failures += 1
            return

        report.ranks_requested = len(entries)
        updated = await asyncio.gather(
            *(
                self._guard(
                    f"set rank {entry.rank} on {entry.show_id}",
                    self.repository.set_rank(entry.show_id, entry.rank),
                    report,
                )
                for entry in entries
            )
        )
        report.ranks_matched = sum(1 for count in updated if count)

    async def _guard(self, description: str, update, report: SyncReport) -> int | None:
        try:
            return await update
        except PlayscoutError as e:
            self.logger.error(f"Failed to {description}: {e}")
            report.failures += 1
            return None


async def run_lifecycle_sync(logger: logging.Logger | None = None) -> SyncReport:
    """Run the lifecycle sync once against the configured store."""
    logger = logger or logging.getLogger(__name__)
    job = LifecycleSyncJob(
        repository=ShowRepository(AsyncSessionLocal, logger=logger),
        ranking=RankingFeed(KopisClient(logger=logger), logger=logger),
        logger=logger,
    )
    return await job.run()
