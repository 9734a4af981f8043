import httpx
import pytest

from lawconsult.services.admin_client import AdminApiClient
from scripts import admin_report, seed_lawyers


@pytest.mark.asyncio
async def test_seed_is_idempotent_unless_forced(store):
    written = await seed_lawyers.seed()
    assert written == {"lawyers": 4, "reviews": 5, "consultations": 3, "users": 6}
    assert store.docs["users/2"]["role"] == "lawyer"
    assert store.docs["consultations/2"]["clientId"] == "client1"

    store.docs["lawyers/1"]["rating"] = 1.0
    assert (await seed_lawyers.seed())["lawyers"] == 0
    assert store.docs["lawyers/1"]["rating"] == 1.0

    assert (await seed_lawyers.seed(force=True))["lawyers"] == 4
    assert store.docs["lawyers/1"]["rating"] == 4.8


@pytest.mark.asyncio
async def test_admin_report_prints_stats(capsys):
    stats = {"totalUsers": 3, "totalLawyers": 4, "totalConsultations": 2, "totalRevenue": 500,
             "consultationsByStatus": {"pending": 1, "completed": 1}}
    client = AdminApiClient(base_url="http://admin.test", token="t",
                            transport=httpx.MockTransport(lambda r: httpx.Response(200, json=stats)))

    assert await admin_report.report(client) == 0
    out = capsys.readouterr().out
    assert "Lawyers:       4" in out
    assert "pending: 1" in out


@pytest.mark.asyncio
async def test_admin_report_unavailable(capsys):
    client = AdminApiClient(base_url="http://admin.test", token="t",
                            transport=httpx.MockTransport(lambda r: httpx.Response(500)))

    assert await admin_report.report(client) == 1
    out = capsys.readouterr().out
    assert "unavailable" in out
    assert "Lawyers" not in out
