"""
Schedule Client

Resource client for ``/api/v1/schedule`` appointment bookings.

Schedule status is owned by the backend. This client only requests
transitions (e.g. cancellation) and never derives status locally.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Any

import httpx

from clinic_client.clients.base_client import Payload, QueryParams, ResourceClient
from clinic_client.schemas.api import PaginatedApiResponse, Record
from clinic_client.schemas.enums import ScheduleStatus
from clinic_client.schemas.envelope import unwrap_data


@dataclass(frozen=True)
class DateRange:
    start: datetime
    end: datetime


class ScheduleClient(ResourceClient[Record]):
    BASE_PATH = "/api/v1/schedule"

    def __init__(self, http_client: httpx.AsyncClient):
        super().__init__(http_client, self.BASE_PATH)

    async def get_many_with_pagination(self, params: QueryParams = None) -> PaginatedApiResponse[Record]:
        return await self.get_paginated(params)

    async def get_user_schedules(self, params: Mapping[str, Any] | None = None) -> PaginatedApiResponse[Record]:
        """Bookings of the authenticated patient."""
        body = await self._request("get", self._url("user"), params=params)
        return PaginatedApiResponse[Record].model_validate(unwrap_data(body))

    async def get_current_week_schedules(self) -> list[Record]:
        body = await self._request("get", self._url("current-week"))
        return unwrap_data(body)

    async def get_by_specialization(self, specialization: str | None = None) -> list[Record]:
        params = {"specialization": specialization} if specialization else None
        body = await self._request("get", self._url("by-specialization"), params=params)
        return unwrap_data(body)

    async def update(self, id: str, data: Payload) -> Record:
        body = await self._request("patch", self._item_url(id), json=data)
        return unwrap_data(body)

    async def cancel_schedule(self, id: str) -> Record:
        """Request cancellation of a booking."""
        return await self.update(id, {"status": ScheduleStatus.CANCELLED.value})

    @staticmethod
    def get_week_period(selected: datetime) -> DateRange:
        """Sunday 00:00:00 to Saturday 23:59:59.999 of the week containing ``selected``."""
        start_day = selected.date() - timedelta(days=ScheduleClient.get_day_offset(selected))
        start = datetime.combine(start_day, time.min, tzinfo=selected.tzinfo)
        end = datetime.combine(start_day + timedelta(days=6), time(23, 59, 59, 999000), tzinfo=selected.tzinfo)
        return DateRange(start=start, end=end)

    @staticmethod
    def get_day_offset(selected: datetime) -> int:
        """Day of week with Sunday as 0."""
        return (selected.weekday() + 1) % 7
