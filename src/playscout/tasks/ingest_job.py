"""Batch job that crawls KOPIS listings and stores shows not seen before."""

import asyncio
import enum
import logging
from collections import Counter
from dataclasses import dataclass, field

from playscout.config import settings
from playscout.database import AsyncSessionLocal
from playscout.errors import DuplicateShowError, FetchError, NotFoundError, StoreError
from playscout.repositories.shows import ShowRepository
from playscout.sources.kopis_client import KopisClient
from playscout.sources.models import ShowListingEntry
from playscout.sources.region_lister import DateWindow, RegionLister
from playscout.sources.show_detail import ShowDetailFetcher


class EntryOutcome(str, enum.Enum):
    """What happened to one listing entry."""

    CREATED = "created"
    EXISTING = "existing"
    DUPLICATE = "duplicate"  # lost an insert race; the unique index kept one row
    FETCH_FAILED = "fetch_failed"
    STORE_FAILED = "store_failed"


@dataclass
class IngestionReport:
    """Outcome counts for one ingestion run."""

    pages: int = 0
    outcomes: Counter = field(default_factory=Counter)

    @property
    def created(self) -> int:
        return self.outcomes[EntryOutcome.CREATED]

    @property
    def failed(self) -> int:
        return self.outcomes[EntryOutcome.FETCH_FAILED] + self.outcomes[EntryOutcome.STORE_FAILED]


class IngestionOrchestrator:
    """
    Page-by-page crawl over all regions.

    For each listing entry the store is checked by show id; unknown shows are
    fetched in full and inserted. Entries of a page are processed
    concurrently and all of them settle before the next page is requested.

    The check-then-insert is not atomic. Two overlapping runs, or the same
    show listed twice on one page, can both pass the check; the unique index
    on ``show_id`` rejects the second insert, which is recorded as DUPLICATE.
    """

    def __init__(
        self,
        lister: RegionLister,
        fetcher: ShowDetailFetcher,
        repository: ShowRepository,
        page_size: int | None = None,
        page_delay: float | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.lister = lister
        self.fetcher = fetcher
        self.repository = repository
        self.page_size = page_size or settings.page_size
        self.page_delay = settings.page_delay_seconds if page_delay is None else page_delay
        self.logger = logger or logging.getLogger(__name__)

    async def run(self, window: DateWindow) -> IngestionReport:
        """
        Crawl every page of the listing for ``window``.

        The crawl stops at the first page with fewer than ``page_size``
        entries, including an empty first page.
        """
        report = IngestionReport()
        page = 1

        while True:
            entries = await self.lister.list_page(window, page, self.page_size)
            outcomes = await self.process_page(entries)
            report.pages += 1
            report.outcomes.update(outcomes)

            if len(entries) < self.page_size:
                self.logger.info(f"Processed {len(entries)} shows. Reached the last page (#{page}).")
                break

            self.logger.info(f"Processed {len(entries)} shows on page #{page}.")
            page += 1
            await asyncio.sleep(self.page_delay)

        return report

    async def process_page(self, entries: list[ShowListingEntry]) -> list[EntryOutcome]:
        """Process all entries of one page concurrently and collect their outcomes."""
        return list(await asyncio.gather(*(self.process_entry(entry) for entry in entries)))

    async def process_entry(self, entry: ShowListingEntry) -> EntryOutcome:
        """
        Store one listed show if it is not already stored.

        Never raises: every failure is logged and returned as an outcome.
        """
        try:
            if await self.repository.exists(entry.show_id):
                return EntryOutcome.EXISTING
        except StoreError as e:
            self.logger.error(f"Skipping show {entry.show_id}: {e}")
            return EntryOutcome.STORE_FAILED
        except Exception:
            self.logger.exception(f"Unexpected error looking up show {entry.show_id}")
            return EntryOutcome.STORE_FAILED

        try:
            record = await self.fetcher.fetch_detail(
                entry.show_id, entry.venue_name, entry.region_label
            )
        except (FetchError, NotFoundError) as e:
            self.logger.warning(f"Skipping show {entry.show_id}, will retry next run: {e}")
            return EntryOutcome.FETCH_FAILED
        except Exception:
            self.logger.exception(f"Unexpected error fetching show {entry.show_id}")
            return EntryOutcome.FETCH_FAILED

        try:
            await self.repository.insert(record)
        except DuplicateShowError:
            self.logger.info(f"Show {entry.show_id} was stored concurrently, skipping")
            return EntryOutcome.DUPLICATE
        except StoreError as e:
            self.logger.error(f"Failed to store show {entry.show_id}: {e}")
            return EntryOutcome.STORE_FAILED
        except Exception:
            self.logger.exception(f"Unexpected error storing show {entry.show_id}")
            return EntryOutcome.STORE_FAILED

        self.logger.info(f"Show titled '{record.title}' has been created.")
        return EntryOutcome.CREATED


async def run_ingestion(logger: logging.Logger | None = None) -> IngestionReport:
    """Crawl the configured listing window once and store new shows.

    Builds its own client and repository so it can be called from the
    console script or the scheduler.
    """
    logger = logger or logging.getLogger(__name__)
    window = DateWindow.from_today(settings.listing_window_days)
    logger.info(f"Start retrieving shows from {window.start} to {window.end}.")

    client = KopisClient(logger=logger)
    orchestrator = IngestionOrchestrator(
        lister=RegionLister(client, logger=logger),
        fetcher=ShowDetailFetcher(client, logger=logger),
        repository=ShowRepository(AsyncSessionLocal, logger=logger),
        logger=logger,
    )
    report = await orchestrator.run(window)

    logger.info(
        f"Ingestion complete: {report.pages} pages, {report.created} new shows, "
        f"{report.failed} failed, outcomes={dict(report.outcomes)}"
    )
    return report
