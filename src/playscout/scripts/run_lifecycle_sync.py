"""Run the lifecycle state and ranking sync once and exit."""

from playscout.scripts._batch import main_for
from playscout.tasks.lifecycle_job import run_lifecycle_sync


def main() -> None:
    main_for(run_lifecycle_sync, "Lifecycle sync")


if __name__ == "__main__":
    main()
