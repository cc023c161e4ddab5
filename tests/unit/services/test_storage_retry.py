"""
Unit tests for bounded storage retry
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from sqlalchemy.exc import OperationalError

from config import ApplicationConfig
from src.adapter.services.storage_retry import storage_retry
from src.domain.errors import TransientStorageError


class FlakyRepository:
    def __init__(self, failures: int):
        self.session = MagicMock()
        self.session.rollback = AsyncMock()
        self.failures = failures
        self.calls = 0

    @storage_retry
    async def load(self, key):
        self.calls += 1
        if self.calls <= self.failures:
            raise OperationalError("SELECT 1", {}, Exception("connection reset"))
        return f"value-{key}"

    @storage_retry
    async def broken(self):
        self.calls += 1
        raise ValueError("not a storage fault")


@pytest.fixture(autouse=True)
def fast_retries(monkeypatch):
    monkeypatch.setattr(ApplicationConfig, "STORAGE_RETRY_ATTEMPTS", 3)
    monkeypatch.setattr(ApplicationConfig, "STORAGE_RETRY_BACKOFF_SECONDS", 0)
    monkeypatch.setattr(ApplicationConfig, "STORAGE_RETRY_MAX_WAIT_SECONDS", 0)


@pytest.mark.asyncio
async def test_recovers_after_transient_failures():
    repo = FlakyRepository(failures=2)

    assert await repo.load("a") == "value-a"
    assert repo.calls == 3
    assert repo.session.rollback.await_count == 2


@pytest.mark.asyncio
async def test_gives_up_with_transient_storage_error():
    repo = FlakyRepository(failures=10)

    with pytest.raises(TransientStorageError) as exc_info:
        await repo.load("a")

    assert repo.calls == 3
    assert isinstance(exc_info.value.__cause__, OperationalError)
    assert "connection reset" not in str(exc_info.value)


@pytest.mark.asyncio
async def test_other_errors_are_not_retried():
    repo = FlakyRepository(failures=0)

    with pytest.raises(ValueError):
        await repo.broken()

    assert repo.calls == 1
    repo.session.rollback.assert_not_called()
