import pytest
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

from src.adapter.services.token_issuer import JoseTokenIssuer
from src.domain.entities import Teacher
from tests.unit.factories import FIXED_NOW, UNIT_TEST_SECRET


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def token_issuer():
    return JoseTokenIssuer(UNIT_TEST_SECRET)


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def teacher():
    return Teacher(
        id=uuid4(),
        external_id="TCH001",
        name="Jane Doe",
        email="jane@school.edu",
    )
