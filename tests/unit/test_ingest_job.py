"""Tests for the page-by-page ingestion crawl."""

import asyncio
from datetime import date
from unittest.mock import AsyncMock, MagicMock, patch

from conftest import load_tree
from playscout.errors import DuplicateShowError, FetchError, NotFoundError, StoreError
from playscout.sources.models import ShowListingEntry, ShowRecord
from playscout.sources.region_lister import DateWindow
from playscout.sources.show_detail import ShowDetailFetcher
from playscout.sources.venue_geocoder import VenueGeocoder
from playscout.tasks.ingest_job import EntryOutcome, IngestionOrchestrator

WINDOW = DateWindow(start=date(2024, 6, 15), end=date(2025, 3, 12))

# Bound before any test patches the crawl's asyncio.sleep
_yield_to_loop = asyncio.sleep


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeStore:
    """In-memory ShowRepository with the same unique-id behaviour."""

    def __init__(self, existing: set[str] | None = None) -> None:
        self.rows: dict[str, ShowRecord] = {}
        self.existing = set(existing or ())
        self.writes = 0

    async def exists(self, show_id: str) -> bool:
        found = show_id in self.existing or show_id in self.rows
        # Yield so concurrent entries interleave like real I/O
        await _yield_to_loop(0)
        return found

    async def insert(self, record: ShowRecord) -> ShowRecord:
        if record.show_id in self.existing or record.show_id in self.rows:
            raise DuplicateShowError(record.show_id)
        self.writes += 1
        self.rows[record.show_id] = record
        return record


def make_entries(count: int, prefix: str = "PF") -> list[ShowListingEntry]:
    return [
        ShowListingEntry(show_id=f"{prefix}{i:04d}", venue_name="대학로 틴틴홀", region_label="서울")
        for i in range(count)
    ]


def make_lister(pages: list[list[ShowListingEntry]]) -> MagicMock:
    lister = MagicMock()
    lister.list_page = AsyncMock(side_effect=pages)
    return lister


def make_fetcher(failures: dict[str, Exception] | None = None) -> MagicMock:
    failures = failures or {}

    async def fetch_detail(show_id: str, venue_name: str, region: str) -> ShowRecord:
        if show_id in failures:
            raise failures[show_id]
        return ShowRecord(
            show_id=show_id,
            title=f"Show {show_id}",
            start_date=date(2024, 6, 1),
            end_date=date(2024, 6, 20),
            region=region,
            venue_name=venue_name,
        )

    fetcher = MagicMock()
    fetcher.fetch_detail = AsyncMock(side_effect=fetch_detail)
    return fetcher


def make_orchestrator(
    lister, fetcher, store, page_size: int = 10, page_delay: float = 0
) -> IngestionOrchestrator:
    return IngestionOrchestrator(
        lister=lister,
        fetcher=fetcher,
        repository=store,
        page_size=page_size,
        page_delay=page_delay,
    )


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------


class TestPagination:
    async def test_stops_after_short_page(self) -> None:
        lister = make_lister([make_entries(10, "PA"), make_entries(10, "PB"), make_entries(3, "PC")])
        store = FakeStore()

        report = await make_orchestrator(lister, make_fetcher(), store).run(WINDOW)

        assert lister.list_page.await_count == 3
        assert [c.args[1] for c in lister.list_page.await_args_list] == [1, 2, 3]
        assert report.pages == 3
        assert report.created == 23

    async def test_empty_first_page_stops_immediately(self) -> None:
        lister = make_lister([[]])
        fetcher = make_fetcher()

        report = await make_orchestrator(lister, fetcher, FakeStore()).run(WINDOW)

        assert lister.list_page.await_count == 1
        fetcher.fetch_detail.assert_not_awaited()
        assert report.created == 0

    async def test_page_larger_than_page_size_continues(self) -> None:
        # Regions are merged, so one page can hold more than page_size entries
        lister = make_lister([make_entries(25, "PA"), make_entries(0)])

        report = await make_orchestrator(lister, make_fetcher(), FakeStore()).run(WINDOW)

        assert lister.list_page.await_count == 2
        assert report.created == 25

    async def test_passes_window_and_page_size(self) -> None:
        lister = make_lister([make_entries(2)])
        await make_orchestrator(lister, make_fetcher(), FakeStore(), page_size=5).run(WINDOW)
        lister.list_page.assert_awaited_once_with(WINDOW, 1, 5)

    async def test_sleeps_between_pages_only(self) -> None:
        lister = make_lister([make_entries(10, "PA"), make_entries(10, "PB"), make_entries(3, "PC")])
        orchestrator = make_orchestrator(lister, make_fetcher(), FakeStore(), page_delay=1.5)

        with patch("playscout.tasks.ingest_job.asyncio.sleep", new=AsyncMock()) as sleep:
            await orchestrator.run(WINDOW)

        assert sleep.await_count == 2
        assert all(c.args == (1.5,) for c in sleep.await_args_list)

    async def test_no_sleep_after_single_short_page(self) -> None:
        orchestrator = make_orchestrator(
            make_lister([make_entries(3)]), make_fetcher(), FakeStore(), page_delay=1.5
        )

        with patch("playscout.tasks.ingest_job.asyncio.sleep", new=AsyncMock()) as sleep:
            await orchestrator.run(WINDOW)

        sleep.assert_not_awaited()


# ---------------------------------------------------------------------------
# Deduplication and failures
# ---------------------------------------------------------------------------


class TestProcessEntries:
    async def test_rerun_over_known_shows_writes_nothing(self) -> None:
        entries = make_entries(4)
        store = FakeStore(existing={e.show_id for e in entries})
        fetcher = make_fetcher()

        report = await make_orchestrator(make_lister([entries]), fetcher, store).run(WINDOW)

        assert store.writes == 0
        fetcher.fetch_detail.assert_not_awaited()
        assert report.outcomes[EntryOutcome.EXISTING] == 4

    async def test_second_run_is_idempotent(self) -> None:
        store = FakeStore()
        entries = make_entries(3)
        await make_orchestrator(make_lister([entries]), make_fetcher(), store).run(WINDOW)
        writes_after_first = store.writes

        await make_orchestrator(make_lister([entries]), make_fetcher(), store).run(WINDOW)

        assert writes_after_first == 3
        assert store.writes == 3

    async def test_same_show_twice_on_a_page_is_benign(self) -> None:
        entry = make_entries(1)[0]
        store = FakeStore()

        report = await make_orchestrator(make_lister([[entry, entry]]), make_fetcher(), store).run(WINDOW)

        assert len(store.rows) == 1
        assert report.created == 1
        assert report.outcomes[EntryOutcome.DUPLICATE] == 1
        assert report.failed == 0

    async def test_fetch_failure_skips_only_that_show(self) -> None:
        entries = make_entries(3)
        fetcher = make_fetcher(
            {
                entries[0].show_id: NotFoundError("No venue found"),
                entries[1].show_id: FetchError("pblprfr/PF0001", "HTTP 500"),
            }
        )
        store = FakeStore()

        report = await make_orchestrator(make_lister([entries]), fetcher, store).run(WINDOW)

        assert set(store.rows) == {entries[2].show_id}
        assert report.outcomes[EntryOutcome.FETCH_FAILED] == 2

    async def test_store_failure_on_lookup_skips_show(self) -> None:
        store = FakeStore()
        store.exists = AsyncMock(side_effect=StoreError("connection reset"))
        fetcher = make_fetcher()

        outcome = await make_orchestrator(make_lister([]), fetcher, store).process_entry(
            make_entries(1)[0]
        )

        assert outcome == EntryOutcome.STORE_FAILED
        fetcher.fetch_detail.assert_not_awaited()

    async def test_store_failure_on_insert_is_reported(self) -> None:
        store = FakeStore()
        store.insert = AsyncMock(side_effect=StoreError("disk full"))

        outcome = await make_orchestrator(make_lister([]), make_fetcher(), store).process_entry(
            make_entries(1)[0]
        )

        assert outcome == EntryOutcome.STORE_FAILED

    async def test_detail_fetch_receives_listing_fields(self) -> None:
        entry = ShowListingEntry(show_id="PF1", venue_name="부산시민회관", region_label="경상")
        fetcher = make_fetcher()

        await make_orchestrator(make_lister([[entry]]), fetcher, FakeStore()).run(WINDOW)

        fetcher.fetch_detail.assert_awaited_once_with("PF1", "부산시민회관", "경상")

    async def test_unexpected_fetch_error_skips_only_that_show(self) -> None:
        page_one = make_entries(10, "PA")
        fetcher = make_fetcher({page_one[0].show_id: OverflowError("cannot convert float infinity")})
        lister = make_lister([page_one, make_entries(2, "PB")])
        store = FakeStore()

        report = await make_orchestrator(lister, fetcher, store).run(WINDOW)

        assert lister.list_page.await_count == 2
        assert report.outcomes[EntryOutcome.FETCH_FAILED] == 1
        assert report.created == 11
        assert page_one[0].show_id not in store.rows

    async def test_unexpected_insert_error_is_store_failure(self) -> None:
        store = FakeStore()
        store.insert = AsyncMock(side_effect=RuntimeError("event loop closed"))

        outcome = await make_orchestrator(make_lister([]), make_fetcher(), store).process_entry(
            make_entries(1)[0]
        )

        assert outcome == EntryOutcome.STORE_FAILED

    async def test_infinite_seat_count_is_stored_as_missing(self, kopis_client) -> None:
        kopis_client.routes["pblprfr/PF132236"] = load_tree("show_detail.xml")
        kopis_client.routes["prfplc"] = load_tree("venue_list.xml")
        kopis_client.routes["prfplc/FC001431"] = {
            "dbs": {"db": {"la": "37.5", "lo": "127.0", "seatscale": "inf"}}
        }
        fetcher = ShowDetailFetcher(kopis_client, VenueGeocoder(kopis_client))
        entry = ShowListingEntry(show_id="PF132236", venue_name="대학로 틴틴홀", region_label="서울")
        store = FakeStore()

        report = await make_orchestrator(make_lister([[entry]]), fetcher, store).run(WINDOW)

        assert report.created == 1
        assert store.rows["PF132236"].seat_count is None
        assert store.rows["PF132236"].latitude == 37.5
