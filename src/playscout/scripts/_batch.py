"""Shared process lifecycle for the batch console scripts."""

import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable

from playscout.config import settings
from playscout.database import check_connection, dispose_engine
from playscout.logging_config import configure_logging

Job = Callable[[logging.Logger], Awaitable[object]]


async def run_batch(job: Job, name: str, logger: logging.Logger) -> int:
    """
    Connect to the store, run ``job`` once and always release the engine.

    Returns:
        Process exit status: 1 if the store is unreachable, otherwise 0
    """
    try:
        try:
            await check_connection()
        except Exception as e:
            logger.error(f"Failed to connect to the database, aborting {name}: {e}")
            return 1
        logger.info("Connected to the database.")

        logger.info(f"{name} started.")
        try:
            await job(logger)
        except Exception:
            logger.exception(f"An error occurred during {name}.")
        else:
            logger.info(f"{name} completed successfully.")
        return 0
    finally:
        await dispose_engine()


def main_for(job: Job, name: str) -> None:
    """Run ``job`` as a one-shot process and exit with its status."""
    logger = configure_logging(settings)
    sys.exit(asyncio.run(run_batch(job, name, logger)))
