"""
Client for the admin back-office REST API.

Every fetch resolves to an AdminFetchResult. Failures (missing token,
network error, non-2xx status, undecodable body) come back as an
``unavailable`` result carrying the reason; no placeholder data is ever
substituted.
"""

import logging
from enum import Enum
from typing import Any, Optional

import httpx
from pydantic import BaseModel

from lawconsult.config import settings

logger = logging.getLogger(__name__)


class FetchStatus(str, Enum):
    OK = "ok"
    UNAVAILABLE = "unavailable"


class AdminFetchResult(BaseModel):
    status: FetchStatus
    data: Any = None
    error: Optional[str] = None
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.status == FetchStatus.OK


def _unavailable(path: str, error: str, status_code: Optional[int] = None) -> AdminFetchResult:
    logger.warning("Admin data unavailable for %s: %s", path, error)
    return AdminFetchResult(status=FetchStatus.UNAVAILABLE, error=error, status_code=status_code)


class AdminApiClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.ADMIN_API_BASE_URL).rstrip("/")
        self.token = token if token is not None else settings.ADMIN_API_TOKEN
        self.timeout = timeout or settings.ADMIN_API_TIMEOUT_SECONDS
        self.transport = transport

    async def fetch(self, path: str, params: Optional[dict] = None) -> AdminFetchResult:
        """
        GET an admin resource.

        Args:
            path: Resource path relative to the base URL, e.g. ``/dashboard/stats``
            params: Optional query parameters

        Returns:
            ``ok`` result with the decoded JSON body, or ``unavailable`` with the reason
        """
        if not self.token:
            return _unavailable(path, "No admin token configured")

        headers = {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(url, headers=headers, params=params)
        except httpx.HTTPError as e:
            return _unavailable(path, f"Request failed: {e}")

        if response.is_error:
            return _unavailable(path, f"HTTP {response.status_code}", response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            return _unavailable(path, f"Invalid JSON response: {e}", response.status_code)

        return AdminFetchResult(status=FetchStatus.OK, data=data, status_code=response.status_code)

    async def dashboard_stats(self) -> AdminFetchResult:
        return await self.fetch("/dashboard/stats")

    async def users(self, page: int = 1, page_size: int = 10, **filters) -> AdminFetchResult:
        params = {"page": page, "page_size": page_size}
        params.update({k: v for k, v in filters.items() if v is not None})
        return await self.fetch("/users", params=params)

    async def lawyers(self, page: int = 1, page_size: int = 10, **filters) -> AdminFetchResult:
        params = {"page": page, "page_size": page_size}
        params.update({k: v for k, v in filters.items() if v is not None})
        return await self.fetch("/lawyers", params=params)

    async def consultations(self, status: Optional[str] = None) -> AdminFetchResult:
        return await self.fetch("/consultations", params={"status": status} if status else None)

    async def payments(self, status: Optional[str] = None) -> AdminFetchResult:
        return await self.fetch("/payments", params={"status": status} if status else None)

    async def reviews(self) -> AdminFetchResult:
        return await self.fetch("/reviews")

    async def system_settings(self) -> AdminFetchResult:
        return await self.fetch("/settings")
