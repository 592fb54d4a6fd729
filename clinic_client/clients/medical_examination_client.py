"""
Medical Examination Client

Resource client for ``/api/v1/medical-examinations``.

Examinations reference patients, prescriptions, ICD diagnoses and services.
The list endpoint returns them populated and accepts both flat filters
(``patient``, ``startDate``, ...) and the JSON ``options`` parameter for
MongoDB-style filtering.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field

from clinic_client.clients.base_client import Payload, ResourceClient
from clinic_client.schemas.api import PaginatedApiResponse, PaginationParams, QueryOptions, Record
from clinic_client.schemas.envelope import unwrap_data

DEFAULT_SORT = {"createdAt": -1}


class ExaminationQuery(BaseModel):
    """Flat filters accepted by the examination list endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    page: int | None = None
    limit: int | None = None
    patient: str | None = None
    examination_date: str | None = Field(None, alias="examinationDate")
    start_date: str | None = Field(None, alias="startDate")
    end_date: str | None = Field(None, alias="endDate")
    prescription: str | None = None
    has_services: bool | None = Field(None, alias="hasServices")
    options: QueryOptions | None = None

    def to_query_params(self) -> dict[str, Any]:
        params = self.model_dump(by_alias=True, exclude_none=True, exclude={"options"})
        if self.has_services is not None:
            params["hasServices"] = "true" if self.has_services else "false"
        if self.options is not None:
            params["options"] = self.options.to_query_value()
        return params


class MedicalExaminationClient(ResourceClient[Record]):
    BASE_PATH = "/api/v1/medical-examinations"

    def __init__(self, http_client: httpx.AsyncClient):
        super().__init__(http_client, self.BASE_PATH)

    async def get_all_populated(self, query: ExaminationQuery | None = None) -> PaginatedApiResponse[Record]:
        """
        List examinations with patient, prescription and services populated.

        Args:
            query: Flat filters and/or advanced ``options``

        Returns:
            Paginated examinations
        """
        params = query.to_query_params() if query else None
        body = await self._request("get", self.base_path, params=params)
        return PaginatedApiResponse[Record].model_validate(unwrap_data(body))

    async def get_user_examinations(self) -> list[Record]:
        """Examinations of the authenticated patient, newest first."""
        body = await self._request("get", self._url("user"))
        return unwrap_data(body)

    async def get_by_patient_id(self, patient_id: str) -> list[Record]:
        body = await self._request("get", self._url("patient", patient_id))
        return unwrap_data(body)

    async def update(self, id: str, data: Payload) -> Record:
        # Doctors only; the backend enforces the role.
        body = await self._request("patch", self._item_url(id), json=data)
        return unwrap_data(body)

    async def get_with_advanced_filter(
        self,
        filter: dict[str, Any] | None = None,
        page: int = 1,
        limit: int = 10,
        sort: dict[str, Any] | None = None,
    ) -> PaginatedApiResponse[Record]:
        options = QueryOptions(
            filter=filter or {},
            pagination=PaginationParams(page=page, limit=limit),
            sort=sort or dict(DEFAULT_SORT),
        )
        return await self.get_all_populated(ExaminationQuery(options=options))

    async def get_by_date_range(
        self, start_date: str, end_date: str, page: int = 1, limit: int = 10
    ) -> PaginatedApiResponse[Record]:
        """Examinations between two ISO dates (inclusive, evaluated server-side)."""
        query = ExaminationQuery(start_date=start_date, end_date=end_date, page=page, limit=limit)
        return await self.get_all_populated(query)

    async def get_with_services(
        self, has_services: bool = True, page: int = 1, limit: int = 10
    ) -> PaginatedApiResponse[Record]:
        query = ExaminationQuery(has_services=has_services, page=page, limit=limit)
        return await self.get_all_populated(query)

    async def get_by_diagnosis_code(
        self, icd_code: str, page: int = 1, limit: int = 10
    ) -> PaginatedApiResponse[Record]:
        return await self.get_with_advanced_filter({"finalDiagnosis.icdCode": icd_code}, page, limit)

    async def get_with_follow_up(self, page: int = 1, limit: int = 10) -> PaginatedApiResponse[Record]:
        """Examinations with a scheduled follow-up visit."""
        follow_up = {"followUp.nextVisit": {"$exists": True, "$ne": None}}
        return await self.get_with_advanced_filter(follow_up, page, limit)
