from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from splitledger.core.logging_config import reset_logging
from splitledger.db.session import get_ledger_service
from splitledger.main import app
from splitledger.services.ledger_service import LedgerService

ALICE = "0x00000000000000000000000000000000000a11ce"
BOB = "0x0000000000000000000000000000000000000b0b"
CAROL = "0x00000000000000000000000000000000000ca401"

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def service() -> LedgerService:
    """Fresh in-memory ledger with a fixed clock."""
    return LedgerService.in_memory(clock=lambda: FIXED_NOW)


@pytest.fixture
def notifications(service):
    """Every notification the service publishes, in order."""
    received = []
    service.subscribe(received.append)
    return received


@pytest_asyncio.fixture
async def registered(service):
    """Alice and Bob registered under their names."""
    await service.register(ALICE, "Alice")
    await service.register(BOB, "Bob")
    return service


@pytest.fixture
def test_client(service):
    """FastAPI test client wired to the fixture service."""
    app.dependency_overrides[get_ledger_service] = lambda: service
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
    reset_logging()


def caller(identity: str) -> dict:
    """Headers identifying the caller."""
    return {"X-Caller-Identity": identity}


@pytest.fixture
def mock_db():
    """Mongo database double. Collections are created on attribute/item access."""
    collections = {}

    def collection(name):
        if name not in collections:
            coll = MagicMock()
            coll.insert_one = AsyncMock()
            coll.find_one = AsyncMock(return_value=None)
            coll.find_one_and_update = AsyncMock(return_value=None)
            coll.count_documents = AsyncMock(return_value=0)
            coll.create_index = AsyncMock()
            collections[name] = coll
        return collections[name]

    db = MagicMock()
    db.__getitem__.side_effect = collection
    return db


def mock_cursor(docs):
    """Cursor double supporting sort/skip/limit chaining and async iteration."""
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.skip.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.__aiter__.return_value = docs
    return cursor
