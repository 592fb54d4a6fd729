"""
Prescription Client

Resource client for ``/api/v1/prescription``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from clinic_client.clients.base_client import ResourceClient
from clinic_client.schemas.api import Record
from clinic_client.schemas.enums import PrescriptionPaymentStatus
from clinic_client.schemas.envelope import unwrap_data


class PrescriptionClient(ResourceClient[Record]):
    BASE_PATH = "/api/v1/prescription"

    def __init__(self, http_client: httpx.AsyncClient):
        super().__init__(http_client, self.BASE_PATH)

    async def get_doctor_prescriptions(self, params: Mapping[str, Any] | None = None) -> list[Record]:
        """Prescriptions written by the authenticated doctor."""
        body = await self._request("get", self._url("doctor"), params=params)
        return unwrap_data(body)

    async def get_patient_prescriptions(self, params: Mapping[str, Any] | None = None) -> list[Record]:
        """Prescriptions issued to the authenticated patient."""
        body = await self._request("get", self._url("patient"), params=params)
        return unwrap_data(body)

    async def update_payment_status(self, id: str, payment_status: PrescriptionPaymentStatus | str) -> Record:
        status = PrescriptionPaymentStatus(payment_status).value
        response = await self._get_full_response(
            self._item_url(id, "payment"), method="put", params={"paymentStatus": status}
        )
        return response.data
