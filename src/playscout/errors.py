"""Exception types raised by the ingestion and sync pipeline."""


class PlayscoutError(Exception):
    """Base class for all playscout errors."""


class FetchError(PlayscoutError):
    """A KOPIS request failed: transport error, bad status, or undecodable body."""

    def __init__(self, endpoint: str, cause: BaseException | str, context: str | None = None) -> None:
        self.endpoint = endpoint
        self.cause = cause
        self.context = context
        target = f"'{endpoint}' for {context}" if context else f"'{endpoint}'"
        super().__init__(f"Failed to fetch {target}: {cause}")


class NotFoundError(PlayscoutError):
    """A lookup against the source returned no matching entry."""


class StoreError(PlayscoutError):
    """The show store rejected or failed an operation."""


class DuplicateShowError(StoreError):
    """An insert violated the unique index on ``show_id``."""

    def __init__(self, show_id: str) -> None:
        self.show_id = show_id
        super().__init__(f"Show {show_id} already exists")
