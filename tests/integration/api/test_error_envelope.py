import pytest
from httpx import ASGITransport, AsyncClient


@pytest.mark.asyncio
async def test_unexpected_error_hides_details(app):
    async def explode():
        raise RuntimeError("connection string leaked: postgres://secret")

    app.add_api_route("/explode", explode, methods=["GET"])

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get("/explode")

    assert response.status_code == 500
    data = response.json()
    assert data["success"] is False
    assert data["message"] == "Internal server error"
    assert data["error"]["code"] == "INTERNAL_ERROR"
    assert "secret" not in response.text
