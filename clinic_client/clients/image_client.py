"""
Image Client

Multipart image uploads to ``/api/v1/image``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import IO, Any

import httpx

from clinic_client.clients.base_client import ResourceClient
from clinic_client.schemas.api import Record
from clinic_client.schemas.envelope import unwrap_data

FileContent = bytes | IO[bytes]


@dataclass
class ImageUploadOptions:
    category: str | None = None
    resize: bool | None = None
    max_width: int | None = None
    max_height: int | None = None

    def to_form_data(self) -> dict[str, str]:
        form: dict[str, str] = {}
        if self.category:
            form["category"] = self.category
        if self.resize is not None:
            form["resize"] = "true" if self.resize else "false"
        if self.max_width:
            form["maxWidth"] = str(self.max_width)
        if self.max_height:
            form["maxHeight"] = str(self.max_height)
        return form


class ImageClient(ResourceClient[Record]):
    BASE_PATH = "/api/v1/image"

    def __init__(self, http_client: httpx.AsyncClient):
        super().__init__(http_client, self.BASE_PATH)

    async def _upload(self, endpoint: str, files: list[tuple[str, Any]], options: ImageUploadOptions | None) -> Any:
        form = options.to_form_data() if options else {}
        response = await self._http.post(endpoint, files=files, data=form)
        response.raise_for_status()
        return unwrap_data(response.json())

    async def upload_image(
        self,
        filename: str,
        content: FileContent,
        content_type: str = "image/jpeg",
        options: ImageUploadOptions | None = None,
    ) -> Record:
        """
        Upload one image.

        Returns:
            Stored image metadata (``url``, ``publicId``, ...)
        """
        return await self._upload(self.base_path, [("image", (filename, content, content_type))], options)

    async def upload_multiple_images(
        self,
        images: Sequence[tuple[str, FileContent, str]],
        options: ImageUploadOptions | None = None,
    ) -> list[Record]:
        """
        Upload several images in one multipart request.

        Args:
            images: ``(filename, content, content_type)`` triples
        """
        files = [("images", (name, content, content_type)) for name, content, content_type in images]
        return await self._upload(self._url("multiple"), files, options)
