"""
Envelope, pagination and query models for the clinic API.
"""

from clinic_client.schemas.api import (
    ApiResponse,
    GetManyParams,
    HttpMethod,
    PaginatedApiResponse,
    PaginationInfo,
    PaginationParams,
    PopulateOptions,
    QueryOptions,
    Record,
    build_query_params,
)
from clinic_client.schemas.enums import (
    PaymentMethod,
    PaymentStatus,
    PrescriptionPaymentStatus,
    ScheduleStatus,
    WaitingMessageStatus,
)
from clinic_client.schemas.envelope import (
    ManyResponseKind,
    classify_many_response,
    unwrap_data,
    unwrap_many,
    unwrap_nested_envelope,
    unwrap_or_raw,
)

__all__ = [
    "ApiResponse",
    "GetManyParams",
    "HttpMethod",
    "PaginatedApiResponse",
    "PaginationInfo",
    "PaginationParams",
    "PopulateOptions",
    "QueryOptions",
    "Record",
    "build_query_params",
    "ManyResponseKind",
    "classify_many_response",
    "unwrap_data",
    "unwrap_many",
    "unwrap_nested_envelope",
    "unwrap_or_raw",
    "PaymentMethod",
    "PaymentStatus",
    "PrescriptionPaymentStatus",
    "ScheduleStatus",
    "WaitingMessageStatus",
]
