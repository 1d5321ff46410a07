"""Run the show ingestion crawl once and exit."""

from playscout.scripts._batch import main_for
from playscout.tasks.ingest_job import run_ingestion


def main() -> None:
    main_for(run_ingestion, "Show ingestion")


if __name__ == "__main__":
    main()
