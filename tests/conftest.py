from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import pytest

from verifier.schemas import VerificationReport


class FakeEngine:
    """Stands in for an AsyncEngine: one connection, counts releases and disposals."""

    def __init__(self, connect_error=None):
        self.connect_error = connect_error
        self.conn = MagicMock(name="conn")
        self.dispose = AsyncMock()
        self.connects = 0
        self.releases = 0

    def connect(self):
        self.connects += 1
        return self._connection()

    @asynccontextmanager
    async def _connection(self):
        if self.connect_error is not None:
            raise self.connect_error
        try:
            yield self.conn
        finally:
            self.releases += 1


@pytest.fixture
def report():
    return VerificationReport()


@pytest.fixture
def engine():
    return FakeEngine()


@pytest.fixture
def healthy_env():
    return {
        "POSTGRES_HOST": "localhost",
        "POSTGRES_PORT": "5432",
        "POSTGRES_DB": "rag",
        "POSTGRES_USER": "postgres",
        "POSTGRES_PASSWORD": "secret",
    }


@pytest.fixture
def make_engine():
    return FakeEngine
