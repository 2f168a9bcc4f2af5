"""Confirm speculative states against a remote HTTP endpoint."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from optimistic_state.config import RemoteConfig, get_remote_config

from .http_resilience import ResilientClient

if TYPE_CHECKING:
    from collections.abc import Callable

    from optimistic_state.config.http_resilience import ResilienceConfig

log = getLogger(__name__)


class ConfirmationResponse(BaseModel):
    """Body returned by the confirmation endpoint."""

    model_config = ConfigDict(extra="ignore")

    ok: bool = True
    result: Any = None
    error: str | None = None


class RemoteConfirmationError(RuntimeError):
    """Raised when the endpoint rejects a speculative state."""

    def __init__(
        self, message: str, *, status_code: int | None = None, payload: object = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class RemoteConfirmation:
    """Routine that sends the state as JSON and returns the confirmed ``result``.

    A client is opened lazily and shared by every submission; call ``aclose``
    when done.
    """

    config: RemoteConfig = field(default_factory=get_remote_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    _client: ResilientClient | None = field(default=None, init=False, repr=False)

    async def __call__(self, state: object) -> Any:
        client = self._ensure_client()
        log.debug("Confirming state via %s %s", self.config.method, self.config.endpoint)
        response = await client.request(self.config.method, self.config.endpoint, json=state)
        return _parse_confirmation(response)

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _ensure_client(self) -> ResilientClient:
        if self._client is None:
            self._client = self.client_factory(self.config.resilience)
        return self._client


def _parse_confirmation(response: httpx.Response) -> Any:
    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise RemoteConfirmationError(
            f"Confirmation rejected with HTTP {response.status_code}",
            status_code=response.status_code,
            payload=response.text,
        ) from exc

    if not response.content:
        return None
    try:
        body = ConfirmationResponse.model_validate_json(response.content)
    except ValidationError as exc:
        raise RemoteConfirmationError(
            "Confirmation response is not valid",
            status_code=response.status_code,
            payload=response.text,
        ) from exc

    if not body.ok:
        raise RemoteConfirmationError(
            body.error or "Confirmation rejected",
            status_code=response.status_code,
            payload=body.model_dump(),
        )
    return body.result


__all__ = ["ConfirmationResponse", "RemoteConfirmation", "RemoteConfirmationError"]
