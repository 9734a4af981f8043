import httpx
import pytest

from lawconsult.services.admin_client import AdminApiClient, FetchStatus


def make_client(handler, token="secret"):
    return AdminApiClient(
        base_url="http://admin.test/api/v1/admin",
        token=token,
        timeout=1,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_fetch_returns_data_and_sends_token():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers["Authorization"]
        seen["path"] = request.url.path
        return httpx.Response(200, json={"totalUsers": 3})

    result = await make_client(handler).dashboard_stats()

    assert result.ok
    assert result.data == {"totalUsers": 3}
    assert seen == {"auth": "Bearer secret", "path": "/api/v1/admin/dashboard/stats"}


@pytest.mark.asyncio
async def test_query_params_skip_none():
    seen = {}

    def handler(request):
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json={"users": []})

    await make_client(handler).users(page=2, search="li", role=None)
    assert seen["params"] == {"page": "2", "page_size": "10", "search": "li"}


@pytest.mark.asyncio
async def test_missing_token_is_unavailable_without_request():
    def handler(request):
        raise AssertionError("no request expected")

    result = await make_client(handler, token="").system_settings()
    assert result.status == FetchStatus.UNAVAILABLE
    assert result.data is None


@pytest.mark.asyncio
async def test_http_error_status_is_unavailable():
    result = await make_client(lambda request: httpx.Response(503)).payments()
    assert not result.ok
    assert result.status_code == 503
    assert result.data is None


@pytest.mark.asyncio
async def test_network_error_is_unavailable():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    result = await make_client(handler).reviews()
    assert result.status == FetchStatus.UNAVAILABLE
    assert "refused" in result.error


@pytest.mark.asyncio
async def test_invalid_json_is_unavailable():
    result = await make_client(lambda request: httpx.Response(200, text="<html>")).lawyers()
    assert result.status == FetchStatus.UNAVAILABLE
