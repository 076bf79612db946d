"""
Diary Notes Client — HTTP Client
=================================

What:  Thin async wrapper over the notes endpoints.
How:   One httpx request per call; 2xx bodies are parsed into Note models,
       everything else (including transport errors and timeouts) raises
       ApiError. No retries: a failed call is reported once.
Who:   Used by NotesBoard; usable on its own from scripts.
"""

import logging
from typing import Any, Callable, List, Optional, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from diary_client.config import ClientSettings
from diary_client.exceptions import ApiError
from diary_client.models import Note

logger = logging.getLogger(__name__)

NOTE_LIST = TypeAdapter(List[Note])

T = TypeVar("T")


def server_message(response: httpx.Response) -> Optional[str]:
    """
    Extract the server's explanation from an error body.

    Handles `{"message": ...}` (404/500) and `{"errors": [{"msg": ...}]}` (400).
    """
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    if isinstance(body.get("message"), str):
        return body["message"]
    errors = body.get("errors")
    if isinstance(errors, list) and errors and isinstance(errors[0], dict):
        msg = errors[0].get("msg")
        return msg if isinstance(msg, str) else None
    return None


class NotesApi:
    """
    Async client for the notes collection at `notes_url`.

    Pass `client` to reuse an httpx.AsyncClient (or to inject a test
    transport); otherwise one is created and owned by this object.
    """

    def __init__(
        self,
        notes_url: str,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ) -> None:
        self.notes_url = notes_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(cls, settings: Optional[ClientSettings] = None) -> "NotesApi":
        settings = settings or ClientSettings()
        return cls(settings.api_url, timeout=settings.timeout)

    async def __aenter__(self) -> "NotesApi":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ── Endpoints ────────────────────────────────────────────────────────

    async def list_notes(self) -> List[Note]:
        response = await self._request("GET", self.notes_url, "fetch notes")
        return self._parse(response, "fetch notes", NOTE_LIST.validate_python)

    async def get_note(self, note_id: str) -> Note:
        response = await self._request("GET", self._item_url(note_id), "fetch note")
        return self._parse(response, "fetch note", Note.model_validate)

    async def create_note(self, title: str, content: str) -> Note:
        response = await self._request(
            "POST", self.notes_url, "add note", json={"title": title, "content": content}
        )
        return self._parse(response, "add note", Note.model_validate)

    async def update_note(self, note_id: str, title: str, content: str) -> Note:
        response = await self._request(
            "PUT",
            self._item_url(note_id),
            "update note",
            json={"title": title, "content": content},
        )
        return self._parse(response, "update note", Note.model_validate)

    async def delete_note(self, note_id: str) -> Note:
        response = await self._request("DELETE", self._item_url(note_id), "delete note")
        return self._parse(response, "delete note", Note.model_validate)

    # ── Internals ────────────────────────────────────────────────────────

    def _item_url(self, note_id: str) -> str:
        return f"{self.notes_url}/{note_id}"

    async def _request(
        self, method: str, url: str, action: str, json: Any = None
    ) -> httpx.Response:
        try:
            response = await self._client.request(method, url, json=json)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise ApiError(f"Failed to {action}: {e.__class__.__name__}") from e

        if response.is_error:
            raise ApiError(
                f"Failed to {action}: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
                detail=server_message(response),
            )
        return response

    def _parse(self, response: httpx.Response, action: str, validate: Callable[[Any], T]) -> T:
        """Decode a 2xx body; anything that is not the expected shape is an ApiError."""
        try:
            body = response.json()
        except ValueError as e:
            raise ApiError(
                f"Failed to {action}: invalid JSON in response",
                status_code=response.status_code,
            ) from e

        try:
            return validate(body)
        except PydanticValidationError as e:
            logger.warning("Failed to %s: unexpected response shape: %s", action, e)
            raise ApiError(
                f"Failed to {action}: unexpected response shape",
                status_code=response.status_code,
            ) from e
