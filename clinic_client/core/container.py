"""
Dependency Injection Container

Creates the shared HTTP transport once and wires every resource client to it.
Clients are created lazily and reused for the lifetime of the container.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

import httpx

from clinic_client.clients import (
    AuthClient,
    BlogClient,
    ChatClient,
    ConsultationPackageClient,
    ConsultationServiceClient,
    DoctorClient,
    IcdClient,
    ImageClient,
    MedicalExaminationClient,
    MedicationClient,
    MedicineClient,
    PaymentClient,
    PrescriptionClient,
    PromotionClient,
    ResourceClient,
    RoomClient,
    ScheduleClient,
    SpecialtyClient,
    UserClient,
    WaitingMessageClient,
    WeeklyPackageClient,
)
from clinic_client.config.settings import Settings, get_settings
from clinic_client.core.http import TokenStore, create_http_client

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=ResourceClient)


class ClientContainer:
    """
    Dependency Injection Container for the clinic API clients.

    Single Responsibility: Own the transport and hand out one client per resource.

    Example:
        async with ClientContainer() as clients:
            services = await clients.consultation_services().get_by_ids(["a", "b"])
            reply = await clients.chat().send_message("Hello")
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        token_store: TokenStore | None = None,
    ):
        """
        Initialize container.

        Args:
            settings: Client settings (defaults to ``get_settings()``)
            transport: Optional custom transport, e.g. ``httpx.MockTransport``
            token_store: Shared token holder (built from settings when omitted)
        """
        self.settings = settings or get_settings()
        self.token_store = token_store or TokenStore(
            self.settings.CLINIC_API_ACCESS_TOKEN,
            self.settings.CLINIC_API_REFRESH_TOKEN,
        )
        self.http_client = create_http_client(self.settings, self.token_store, transport)
        self._clients: dict[type, ResourceClient] = {}

        logger.info("ClientContainer initialized")

    async def __aenter__(self) -> ClientContainer:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the shared transport."""
        await self.http_client.aclose()
        logger.info("ClientContainer closed")

    def _get(self, client_cls: type[C], factory: Callable[[], C] | None = None) -> C:
        if client_cls not in self._clients:
            self._clients[client_cls] = factory() if factory else client_cls(self.http_client)
        return self._clients[client_cls]  # type: ignore[return-value]

    # ============================================================
    # CLIENTS
    # ============================================================

    def auth(self) -> AuthClient:
        return self._get(AuthClient, lambda: AuthClient(self.http_client, self.token_store))

    def chat(self) -> ChatClient:
        """Chat client probing the configured ``CHAT_ENDPOINTS``."""
        return self._get(ChatClient, lambda: ChatClient(self.http_client, self.settings.CHAT_ENDPOINTS))

    def blogs(self) -> BlogClient:
        return self._get(BlogClient)

    def consultation_packages(self) -> ConsultationPackageClient:
        return self._get(ConsultationPackageClient)

    def consultation_services(self) -> ConsultationServiceClient:
        return self._get(ConsultationServiceClient)

    def doctors(self) -> DoctorClient:
        return self._get(DoctorClient)

    def icd(self) -> IcdClient:
        return self._get(IcdClient)

    def images(self) -> ImageClient:
        return self._get(ImageClient)

    def medical_examinations(self) -> MedicalExaminationClient:
        return self._get(MedicalExaminationClient)

    def medicines(self) -> MedicineClient:
        return self._get(MedicineClient)

    def medications(self) -> MedicationClient:
        return self._get(MedicationClient)

    def payments(self) -> PaymentClient:
        return self._get(PaymentClient)

    def prescriptions(self) -> PrescriptionClient:
        return self._get(PrescriptionClient)

    def promotions(self) -> PromotionClient:
        return self._get(PromotionClient)

    def rooms(self) -> RoomClient:
        return self._get(RoomClient)

    def schedules(self) -> ScheduleClient:
        return self._get(ScheduleClient)

    def specialties(self) -> SpecialtyClient:
        return self._get(SpecialtyClient)

    def users(self) -> UserClient:
        return self._get(UserClient)

    def waiting_messages(self) -> WaitingMessageClient:
        return self._get(WaitingMessageClient)

    def weekly_packages(self) -> WeeklyPackageClient:
        return self._get(WeeklyPackageClient)
