import pytest
from uuid import uuid4

from httpx import AsyncClient

from tests.integration.settings import ADMIN_KEY, API_PREFIX

CREATE = f"{API_PREFIX}/web-session/create"
AUTHENTICATE = f"{API_PREFIX}/web-session/authenticate"
CHECK_AUTH = f"{API_PREFIX}/web-session/check-auth"


async def _login(client: AsyncClient, external_id="TCH001", device_id="phone-a", tenant_id=None):
    body = {"tenantId": str(tenant_id)} if tenant_id else {}
    created = (await client.post(CREATE, json=body)).json()
    claimed = await client.post(
        AUTHENTICATE,
        json={"sessionId": created["sessionId"], "teacherId": external_id, "deviceId": device_id},
    )
    assert claimed.status_code == 200
    return claimed.json()


def _bearer(assertion: str) -> dict:
    return {"Authorization": f"Bearer {assertion}"}


@pytest.mark.asyncio
async def test_list_active_sessions(client: AsyncClient, teacher):
    first = await _login(client, device_id="phone-a")
    await _login(client, device_id="tablet")

    response = await client.get(
        f"{API_PREFIX}/web-session/active", headers=_bearer(first["assertion"])
    )

    assert response.status_code == 200
    devices = sorted(s["deviceId"] for s in response.json())
    assert devices == ["phone-a", "tablet"]


@pytest.mark.asyncio
async def test_active_sessions_requires_valid_assertion(client: AsyncClient):
    missing = await client.get(f"{API_PREFIX}/web-session/active")
    assert missing.status_code == 401

    invalid = await client.get(f"{API_PREFIX}/web-session/active", headers=_bearer("garbage"))
    assert invalid.status_code == 401
    assert invalid.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_verify_session(client: AsyncClient, teacher):
    login = await _login(client)

    response = await client.post(
        f"{API_PREFIX}/web-session/verify", json={"sessionId": login["sessionId"]}
    )

    assert response.status_code == 200
    assert response.json()["valid"] is True
    assert response.json()["session"]["sessionId"] == login["sessionId"]


@pytest.mark.asyncio
async def test_verify_pending_session(client: AsyncClient):
    created = (await client.post(CREATE)).json()

    response = await client.post(
        f"{API_PREFIX}/web-session/verify", json={"sessionId": created["sessionId"]}
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_disconnect_ends_session(client: AsyncClient, teacher):
    login = await _login(client)

    response = await client.post(
        f"{API_PREFIX}/web-session/disconnect",
        json={"sessionId": login["sessionId"]},
        headers=_bearer(login["assertion"]),
    )
    assert response.status_code == 200

    polled = await client.get(CHECK_AUTH, params={"sessionId": login["sessionId"]})
    assert polled.status_code == 404


@pytest.mark.asyncio
async def test_disconnect_other_teachers_session(client: AsyncClient, teacher, other_teacher):
    mine = await _login(client, external_id="TCH001")
    theirs = await _login(client, external_id="TCH002")

    response = await client.post(
        f"{API_PREFIX}/web-session/disconnect",
        json={"sessionId": theirs["sessionId"]},
        headers=_bearer(mine["assertion"]),
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


@pytest.mark.asyncio
async def test_admin_lists_tenant_sessions(client: AsyncClient, teacher, other_teacher):
    tenant_id = uuid4()
    await _login(client, external_id="TCH001", tenant_id=tenant_id)
    await _login(client, external_id="TCH002")

    response = await client.get(
        f"{API_PREFIX}/admin/tenants/{tenant_id}/sessions",
        headers={"X-Admin-API-Key": ADMIN_KEY},
    )

    assert response.status_code == 200
    sessions = response.json()
    assert len(sessions) == 1
    assert sessions[0]["teacherName"] == "Jane Doe"


@pytest.mark.asyncio
async def test_admin_requires_api_key(client: AsyncClient):
    missing = await client.post(f"{API_PREFIX}/admin/sessions/purge-expired")
    assert missing.status_code == 401

    wrong = await client.post(
        f"{API_PREFIX}/admin/sessions/purge-expired", headers={"X-Admin-API-Key": "nope"}
    )
    assert wrong.status_code == 401
    assert wrong.json()["error"]["code"] == "INVALID_API_KEY"


@pytest.mark.asyncio
async def test_admin_removes_tenant_membership(client: AsyncClient, teacher):
    tenant_id = uuid4()
    login = await _login(client, tenant_id=tenant_id)
    url = f"{API_PREFIX}/admin/teachers/tch001/tenants/{tenant_id}"

    removed = await client.delete(url, headers={"X-Admin-API-Key": ADMIN_KEY})
    assert removed.status_code == 200
    assert removed.json()["remaining_tenant_ids"] == []
    assert removed.json()["sessions_expired"] == 1

    polled = await client.get(CHECK_AUTH, params={"sessionId": login["sessionId"]})
    assert polled.status_code == 404

    again = await client.delete(url, headers={"X-Admin-API-Key": ADMIN_KEY})
    assert again.status_code == 404
    assert again.json()["error"]["code"] == "MEMBERSHIP_NOT_FOUND"


@pytest.mark.asyncio
async def test_admin_purges_expired_sessions(client: AsyncClient, teacher):
    login = await _login(client)
    await client.post(
        f"{API_PREFIX}/web-session/disconnect",
        json={"sessionId": login["sessionId"]},
        headers=_bearer(login["assertion"]),
    )

    response = await client.post(
        f"{API_PREFIX}/admin/sessions/purge-expired", headers={"X-Admin-API-Key": ADMIN_KEY}
    )

    assert response.status_code == 200
    assert response.json()["sessions_purged"] == 1


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
