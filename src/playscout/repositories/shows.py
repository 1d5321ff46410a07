"""Persistence for Show rows.

Every method opens its own session, so callers may run them concurrently.
"""

import logging
from dataclasses import asdict
from datetime import date

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from playscout.errors import DuplicateShowError, StoreError
from playscout.models.show import LifecycleState, Show
from playscout.sources.models import ShowRecord

UNIQUE_VIOLATION = "23505"


def _is_unique_violation(error: IntegrityError) -> bool:
    orig = error.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code is not None:
        return code == UNIQUE_VIOLATION
    return "unique" in str(orig).lower()


class ShowRepository:
    """Store operations used by the ingestion and sync jobs."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        logger: logging.Logger | None = None,
    ) -> None:
        self.session_factory = session_factory
        self.logger = logger or logging.getLogger(__name__)

    async def exists(self, show_id: str) -> bool:
        """Return True if a show with this KOPIS id is stored."""
        stmt = select(Show.id).where(Show.show_id == show_id).limit(1)
        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                return result.scalar_one_or_none() is not None
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to look up show {show_id}: {e}") from e

    async def insert(self, record: ShowRecord) -> Show:
        """
        Insert a new show.

        The unique index on ``show_id`` is the only guard against duplicates;
        an existence check beforehand is an optimization, not a guarantee.

        Raises:
            DuplicateShowError: If the show id is already stored
            StoreError: On any other database failure
        """
        show = Show(**asdict(record))
        try:
            async with self.session_factory() as session:
                session.add(show)
                try:
                    await session.commit()
                except IntegrityError as e:
                    await session.rollback()
                    if _is_unique_violation(e):
                        raise DuplicateShowError(record.show_id) from e
                    raise StoreError(f"Failed to insert show {record.show_id}: {e}") from e
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to insert show {record.show_id}: {e}") from e
        return show

    async def mark_finished(self, today: date) -> int:
        """Set every show whose run ended before ``today`` to FINISHED."""
        stmt = (
            update(Show)
            .where(Show.end_date < today)
            .values(lifecycle_state=LifecycleState.FINISHED)
        )
        return await self._execute_update(stmt, "mark finished shows")

    async def mark_running(self, today: date) -> int:
        """Set every show whose run includes ``today`` to RUNNING."""
        stmt = (
            update(Show)
            .where(Show.start_date <= today, Show.end_date >= today)
            .values(lifecycle_state=LifecycleState.RUNNING)
        )
        return await self._execute_update(stmt, "mark running shows")

    async def set_rank(self, show_id: str, rank: int) -> int:
        """
        Write a box-office rank onto a show.

        Returns:
            Number of rows updated; 0 when the show is not stored
        """
        stmt = update(Show).where(Show.show_id == show_id).values(rank=rank)
        return await self._execute_update(stmt, f"set rank of {show_id}")

    async def _execute_update(self, stmt, description: str) -> int:
        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                await session.commit()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to {description}: {e}") from e

        self.logger.debug(f"{description}: {result.rowcount} rows")
        return result.rowcount
