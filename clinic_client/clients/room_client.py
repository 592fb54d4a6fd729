"""
Room Client

Examination rooms (``/api/v1/room``). Plain CRUD, no extensions.
"""

import httpx

from clinic_client.clients.base_client import ResourceClient
from clinic_client.schemas.api import Record


class RoomClient(ResourceClient[Record]):
    BASE_PATH = "/api/v1/room"

    def __init__(self, http_client: httpx.AsyncClient):
        super().__init__(http_client, self.BASE_PATH)
