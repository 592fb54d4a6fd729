"""
AI Chat Client

Async client for the clinic's AI assistant.

The chat backend has been deployed under different paths over time, so
``send_message`` walks a list of candidate endpoints:

    - 404           -> try the next candidate
    - other error   -> fail immediately (translated to ChatError)
    - success       -> pin that endpoint for every later call

Unlike the CRUD clients, chat errors are translated into a small closed
taxonomy (``ChatErrorCode``) carrying a ``retryable`` flag for the UI.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Sequence
from enum import Enum
from typing import Any

import httpx

from clinic_client.clients.base_client import ResourceClient
from clinic_client.config.settings import DEFAULT_CHAT_ENDPOINTS
from clinic_client.schemas.api import Record
from clinic_client.schemas.envelope import unwrap_data

logger = logging.getLogger(__name__)


class ChatErrorCode(str, Enum):
    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    ENDPOINT_NOT_FOUND = "ENDPOINT_NOT_FOUND"
    RATE_LIMITED = "RATE_LIMITED"
    SERVER_ERROR = "SERVER_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class ChatError(Exception):
    """
    User-facing chat failure.

    Attributes:
        error_code: Machine-readable ``ChatErrorCode``
        error_message: Message suitable for display
        retryable: Whether offering a retry makes sense
        details: Optional diagnostic text
    """

    def __init__(
        self,
        error_code: ChatErrorCode,
        error_message: str,
        retryable: bool = False,
        details: str | None = None,
    ):
        self.error_code = error_code
        self.error_message = error_message
        self.retryable = retryable
        self.details = details
        super().__init__(f"{error_code.value}: {error_message}")


# status -> (code, default message, retryable)
_STATUS_ERRORS: dict[int, tuple[ChatErrorCode, str, bool]] = {
    400: (ChatErrorCode.BAD_REQUEST, "Invalid request. Please check your message.", False),
    401: (ChatErrorCode.UNAUTHORIZED, "Please sign in to continue chatting.", False),
    403: (ChatErrorCode.FORBIDDEN, "You do not have permission to use the chat feature.", False),
    404: (ChatErrorCode.ENDPOINT_NOT_FOUND, "Chat service is not available. Please contact support.", False),
    429: (ChatErrorCode.RATE_LIMITED, "Too many messages. Please wait a moment before sending another.", True),
}

_SERVER_ERROR_MESSAGE = "AI service is temporarily unavailable. Please try again later."
_UNKNOWN_ERROR_MESSAGE = "An unexpected error occurred. Please try again."


def _server_message(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return None


def to_chat_error(error: BaseException) -> ChatError:
    """
    Translate a transport error into a ``ChatError``.

    400 and unmapped statuses prefer the server's ``message`` when present.
    """
    if isinstance(error, ChatError):
        return error

    if isinstance(error, httpx.HTTPStatusError):
        status = error.response.status_code
        server_message = _server_message(error.response)

        if status in _STATUS_ERRORS:
            code, message, retryable = _STATUS_ERRORS[status]
            if code is ChatErrorCode.BAD_REQUEST and server_message:
                message = server_message
            return ChatError(code, message, retryable)
        if status >= 500:
            return ChatError(ChatErrorCode.SERVER_ERROR, _SERVER_ERROR_MESSAGE, True)
        return ChatError(ChatErrorCode.UNKNOWN_ERROR, server_message or _UNKNOWN_ERROR_MESSAGE, True)

    if isinstance(error, httpx.RequestError):
        return ChatError(
            ChatErrorCode.NETWORK_ERROR,
            "Network connection failed. Please check your internet connection.",
            True,
            details=str(error) or type(error).__name__,
        )

    return ChatError(ChatErrorCode.UNKNOWN_ERROR, _UNKNOWN_ERROR_MESSAGE, True, details=str(error))


class ChatClient(ResourceClient[Record]):
    """
    Async client for the AI assistant with endpoint discovery.

    ``base_path`` is the pinned endpoint. It changes only when a different
    candidate answers ``send_message`` successfully.

    Example:
        chat = ChatClient(http_client, endpoints=["/api/v1/chat", "/chat"])
        reply = await chat.send_message("Which package covers a blood test?")
        print(reply["reply"])
    """

    def __init__(self, http_client: httpx.AsyncClient, endpoints: Sequence[str] | None = None):
        candidates = [endpoint for endpoint in (endpoints or DEFAULT_CHAT_ENDPOINTS) if endpoint]
        if not candidates:
            raise ValueError("At least one chat endpoint is required")
        super().__init__(http_client, candidates[0])
        self.endpoints = ["/" + endpoint.strip("/") for endpoint in candidates]
        self.current_endpoint_index = 0

    def _candidate_order(self) -> list[int]:
        # Pinned endpoint first, then the remaining candidates in declared order.
        start = self.current_endpoint_index
        return [start] + [i for i in range(len(self.endpoints)) if i != start]

    def _pin(self, index: int) -> None:
        if index != self.current_endpoint_index:
            logger.info(f"Pinning chat endpoint {self.endpoints[index]}")
        self.current_endpoint_index = index
        self.base_path = self.endpoints[index]

    async def send_message(self, message: str) -> Record:
        """
        Send a message to the assistant.

        Args:
            message: User message

        Returns:
            Unwrapped chat response (``reply``, ``conversationId``, ...)

        Raises:
            ChatError: ENDPOINT_NOT_FOUND when every candidate answered 404,
                otherwise the translated error of the first non-404 failure
        """
        last_error: BaseException | None = None
        tried: list[str] = []

        for index in self._candidate_order():
            endpoint = self.endpoints[index]
            tried.append(endpoint)
            logger.debug(f"Trying chat endpoint ({len(tried)}/{len(self.endpoints)}): {endpoint}")
            try:
                body = await self._request("post", endpoint, json={"message": message})
            except httpx.HTTPStatusError as e:
                last_error = e
                if e.response.status_code == 404:
                    logger.warning(f"Chat endpoint {endpoint} not found")
                    continue
                logger.error(f"Chat endpoint {endpoint} failed: {e}")
                raise to_chat_error(e) from e
            except httpx.RequestError as e:
                logger.error(f"Chat endpoint {endpoint} unreachable: {e}")
                raise to_chat_error(e) from e

            self._pin(index)
            return unwrap_data(body)

        logger.error(f"All chat endpoints failed. Tried: {tried}")
        raise ChatError(
            ChatErrorCode.ENDPOINT_NOT_FOUND,
            f"Chat service is not available. Tried endpoints: {', '.join(tried)}. Please contact support.",
            retryable=False,
            details=f"Last error: {last_error}" if last_error else None,
        ) from last_error

    async def send_message_stream(self, message: str, on_chunk: Callable[[str], None] | None = None) -> Record:
        """
        Send a message and stream the reply.

        Each text chunk is passed to ``on_chunk`` as it arrives. If streaming
        fails for any reason the message is re-sent through ``send_message``.
        """
        try:
            chunks: list[str] = []
            async with self._http.stream("POST", self._url("stream"), json={"message": message}) as response:
                response.raise_for_status()
                async for chunk in response.aiter_text():
                    chunks.append(chunk)
                    if on_chunk:
                        on_chunk(chunk)
            return unwrap_data(json.loads("".join(chunks)))
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Streaming failed, falling back to regular message: {e}")
            return await self.send_message(message)

    async def get_conversation(self, conversation_id: str) -> list[Record]:
        try:
            body = await self._request("get", self._url("conversation", conversation_id))
        except httpx.HTTPError as e:
            raise to_chat_error(e) from e
        return unwrap_data(body)

    async def delete_conversation(self, conversation_id: str) -> None:
        try:
            await self._request("delete", self._url("conversation", conversation_id))
        except httpx.HTTPError as e:
            raise to_chat_error(e) from e

    async def get_conversations(self) -> list[Record]:
        """Conversation summaries (``id``, ``title``, ``lastMessage``, ``updatedAt``)."""
        try:
            body = await self._request("get", self._url("conversations"))
        except httpx.HTTPError as e:
            raise to_chat_error(e) from e
        return unwrap_data(body)

    async def update_conversation_title(self, conversation_id: str, title: str) -> None:
        try:
            await self._request("patch", self._url("conversation", conversation_id), json={"title": title})
        except httpx.HTTPError as e:
            raise to_chat_error(e) from e

    async def get_suggestions(self, current_page: str | None = None, user_role: str | None = None) -> list[str]:
        """Suggested prompts. Not critical: failures yield an empty list."""
        params: dict[str, Any] = {"currentPage": current_page, "userRole": user_role}
        try:
            body = await self._request("get", self._url("suggestions"), params=params)
        except httpx.HTTPError as e:
            logger.warning(f"Failed to get chat suggestions: {e}")
            return []
        return unwrap_data(body)
