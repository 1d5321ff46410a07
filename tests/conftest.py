"""Shared test fixtures."""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from playscout.utils.xml import decode_xml

FIXTURE_DIR = Path(__file__).parent / "fixtures" / "kopis"


def load_fixture(name: str) -> bytes:
    """Raw bytes of a KOPIS XML fixture."""
    return (FIXTURE_DIR / name).read_bytes()


def load_tree(name: str) -> dict:
    """A KOPIS XML fixture decoded the way KopisClient.fetch returns it."""
    return decode_xml(load_fixture(name))


@pytest.fixture
def kopis_client() -> AsyncMock:
    """A KopisClient double whose ``fetch`` routes by endpoint.

    Set ``kopis_client.routes[endpoint] = tree_or_exception`` in a test.
    """
    client = AsyncMock()
    client.routes = {}

    async def fetch(endpoint: str, params: dict | None = None) -> dict:
        result = client.routes[endpoint]
        if isinstance(result, Exception):
            raise result
        return result

    client.fetch = AsyncMock(side_effect=fetch)
    return client
