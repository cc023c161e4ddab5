"""
Unit tests for Manage Sessions Use Case
"""

import pytest
from unittest.mock import AsyncMock
from uuid import uuid4

from src.app.use_cases.sessions import ManageSessionsUseCase
from tests.unit.factories import FIXED_NOW, make_web_session


@pytest.mark.asyncio
async def test_list_active_sessions(mock_uow, clock, teacher):
    sessions = [
        make_web_session(is_active=True, teacher_id=teacher.id, device_id="phone-a"),
        make_web_session(is_active=True, teacher_id=teacher.id, device_id="tablet"),
    ]
    mock_uow.teachers.get_by_id = AsyncMock(return_value=teacher)
    mock_uow.web_sessions.get_active_by_teacher_id = AsyncMock(return_value=sessions)

    result = await ManageSessionsUseCase(mock_uow, clock=clock).list_active_sessions(teacher.id)

    assert result.is_ok()
    assert [s.device_id for s in result.value] == ["phone-a", "tablet"]
    assert result.value[0].teacher_name == "Jane Doe"
    mock_uow.web_sessions.get_active_by_teacher_id.assert_called_once_with(teacher.id, FIXED_NOW)


@pytest.mark.asyncio
async def test_list_active_sessions_unknown_teacher(mock_uow, clock):
    mock_uow.teachers.get_by_id = AsyncMock(return_value=None)

    result = await ManageSessionsUseCase(mock_uow, clock=clock).list_active_sessions(uuid4())

    assert result.is_err()
    assert result.error.code == "SUBJECT_NOT_FOUND"


@pytest.mark.asyncio
async def test_verify_active_session(mock_uow, clock, teacher):
    web_session = make_web_session(is_active=True, teacher_id=teacher.id, device_id="mobile-app")
    mock_uow.web_sessions.get_live_by_session_id = AsyncMock(return_value=web_session)
    mock_uow.teachers.get_by_id = AsyncMock(return_value=teacher)

    result = await ManageSessionsUseCase(mock_uow, clock=clock).verify_session(
        web_session.session_id
    )

    assert result.is_ok()
    assert result.value.valid is True
    assert result.value.session.session_id == web_session.session_id


@pytest.mark.asyncio
async def test_verify_pending_session_is_not_valid(mock_uow, clock):
    web_session = make_web_session()
    mock_uow.web_sessions.get_live_by_session_id = AsyncMock(return_value=web_session)

    result = await ManageSessionsUseCase(mock_uow, clock=clock).verify_session(
        web_session.session_id
    )

    assert result.is_err()
    assert result.error.code == "SESSION_NOT_FOUND"


@pytest.mark.asyncio
async def test_disconnect_own_session(mock_uow, clock, teacher):
    web_session = make_web_session(is_active=True, teacher_id=teacher.id, device_id="mobile-app")
    mock_uow.web_sessions.get_live_by_session_id = AsyncMock(return_value=web_session)
    mock_uow.web_sessions.expire = AsyncMock(return_value=True)

    result = await ManageSessionsUseCase(mock_uow, clock=clock).disconnect_session(
        web_session.session_id, teacher.id
    )

    assert result.is_ok()
    assert result.value.session_id == web_session.session_id
    mock_uow.web_sessions.expire.assert_called_once_with(web_session.session_id, FIXED_NOW)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_disconnect_other_teachers_session_forbidden(mock_uow, clock, teacher):
    web_session = make_web_session(is_active=True, teacher_id=uuid4(), device_id="mobile-app")
    mock_uow.web_sessions.get_live_by_session_id = AsyncMock(return_value=web_session)
    mock_uow.web_sessions.expire = AsyncMock()

    result = await ManageSessionsUseCase(mock_uow, clock=clock).disconnect_session(
        web_session.session_id, teacher.id
    )

    assert result.is_err()
    assert result.error.code == "FORBIDDEN"
    mock_uow.web_sessions.expire.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_list_tenant_sessions(mock_uow, clock, teacher):
    tenant_id = uuid4()
    web_session = make_web_session(is_active=True, teacher_id=teacher.id, device_id="mobile-app")
    mock_uow.teachers.get_ids_by_tenant_id = AsyncMock(return_value=[teacher.id])
    mock_uow.web_sessions.get_active_by_teacher_ids = AsyncMock(return_value=[web_session])
    mock_uow.teachers.get_by_id = AsyncMock(return_value=teacher)

    result = await ManageSessionsUseCase(mock_uow, clock=clock).list_tenant_sessions(tenant_id)

    assert result.is_ok()
    assert len(result.value) == 1
    assert result.value[0].teacher_email == "jane@school.edu"
    mock_uow.web_sessions.get_active_by_teacher_ids.assert_called_once_with(
        [teacher.id], FIXED_NOW
    )
