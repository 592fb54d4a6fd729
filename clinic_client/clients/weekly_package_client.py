"""
Weekly Package Client

Weekly schedules of day packages (``/api/v1/package-week``).
"""

import httpx

from clinic_client.clients.base_client import ResourceClient
from clinic_client.schemas.api import Record
from clinic_client.schemas.envelope import unwrap_data


class WeeklyPackageClient(ResourceClient[Record]):
    BASE_PATH = "/api/v1/package-week"

    def __init__(self, http_client: httpx.AsyncClient):
        super().__init__(http_client, self.BASE_PATH)

    async def get_detail_by_id(self, id: str) -> Record:
        """Weekly package with its ``packageDays`` expanded."""
        body = await self._request("get", self._item_url(id, "details"))
        return unwrap_data(body)
