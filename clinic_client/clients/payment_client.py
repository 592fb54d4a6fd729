"""
Payment Client

Resource client for ``/api/v1/payment``: payment records, status
transitions and VNPay checkout creation.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from typing import Any

import httpx

from clinic_client.clients.base_client import Payload, ResourceClient
from clinic_client.schemas.api import PaginatedApiResponse, Record
from clinic_client.schemas.enums import PaymentMethod, PaymentStatus
from clinic_client.schemas.envelope import unwrap_data

logger = logging.getLogger(__name__)


class PaymentClient(ResourceClient[Record]):
    """
    Async client for payments.

    Status changes go through ``{base}/{id}/status`` rather than a plain
    field update, so the backend can run its side effects.
    """

    BASE_PATH = "/api/v1/payment"

    def __init__(self, http_client: httpx.AsyncClient):
        super().__init__(http_client, self.BASE_PATH)

    async def get_all(self, params: Mapping[str, Any] | None = None) -> PaginatedApiResponse[Record]:
        body = await self._request("get", self.base_path, params=params)
        return PaginatedApiResponse[Record].model_validate(unwrap_data(body))

    async def get_user_payments(self, params: Mapping[str, Any] | None = None) -> PaginatedApiResponse[Record]:
        """Payments of the authenticated user."""
        body = await self._request("get", self._url("user"), params=params)
        return PaginatedApiResponse[Record].model_validate(unwrap_data(body))

    async def get_by_status(
        self, status: PaymentStatus | str, params: Mapping[str, Any] | None = None
    ) -> PaginatedApiResponse[Record]:
        body = await self._request("get", self._url("status", PaymentStatus(status).value), params=params)
        return PaginatedApiResponse[Record].model_validate(unwrap_data(body))

    async def update_status(self, id: str, data: Payload) -> Record:
        """
        Move a payment to a new status.

        Args:
            id: Payment id
            data: Status payload, e.g. ``{"status": "paid"}``

        Returns:
            Updated payment
        """
        response = await self._get_full_response(self._item_url(id, "status"), method="put", params=data)
        return response.data

    async def create_vnpay_payment(self, data: Payload) -> Record:
        """
        Create a VNPay checkout for a payment.

        Returns:
            Backend payload including the redirect ``paymentUrl``
        """
        response = await self._get_full_response(self._url("vnpay", "create"), method="post", params=data)
        return response.data

    async def update_payment_method_by_ids(
        self, payment_ids: Sequence[str], method: PaymentMethod | str
    ) -> list[Record]:
        """
        Set the payment method on several payments concurrently.

        Individual failures are logged and skipped. Results keep the order of
        ``payment_ids``.
        """
        method_value = PaymentMethod(method).value
        results = await asyncio.gather(
            *(self.update(id, {"method": method_value}) for id in payment_ids),
            return_exceptions=True,
        )

        updated: list[Record] = []
        for id, result in zip(payment_ids, results):
            if isinstance(result, asyncio.CancelledError):
                raise result
            if isinstance(result, Exception):
                logger.warning(f"Failed to update payment method for {id}: {result}")
                continue
            if result is not None:
                updated.append(result)
        return updated
