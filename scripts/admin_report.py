"""
Print the admin dashboard figures fetched from the back-office API.

Usage: python -m scripts.admin_report

Exits with status 1 when the API is unavailable; no placeholder figures
are ever printed.
"""

import asyncio
import logging
import sys

from lawconsult.services.admin_client import AdminApiClient

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


async def report(client: AdminApiClient) -> int:
    result = await client.dashboard_stats()
    if not result.ok:
        print(f"Dashboard data unavailable: {result.error}")
        return 1

    stats = result.data
    print(f"Users:         {stats.get('totalUsers', 0)}")
    print(f"Lawyers:       {stats.get('totalLawyers', 0)}")
    print(f"Consultations: {stats.get('totalConsultations', 0)}")
    print(f"Revenue:       {stats.get('totalRevenue', 0)}")
    for status, count in sorted((stats.get("consultationsByStatus") or {}).items()):
        print(f"  {status}: {count}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(report(AdminApiClient())))
