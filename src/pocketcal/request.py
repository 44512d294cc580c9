# Request - request context, capability mixins and dispatch for API calls.
# Created: 2026-10-18

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Self, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from pocketcal.errors import (
    RequestError,
    ResponseDecodeError,
    TransportError,
    UnsupportedOperation,
    read_error_body,
)

if TYPE_CHECKING:
    from pocketcal.auth.client import GoogleClient

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=BaseModel)

_BODYLESS = frozenset({"GET", "DELETE"})
_WITH_BODY = frozenset({"POST", "PATCH"})


@dataclass
class RequestContext:
    """Accumulated state for one API call.

    Built up by a request builder and handed to :func:`execute` or
    :func:`execute_delete`.
    """

    client: GoogleClient
    method: str = "GET"
    url: str = ""
    params: dict[str, str] = field(default_factory=dict)
    body: BaseModel | None = None

    def set_param(self, name: str, value: Any) -> None:
        self.params[name] = _param_value(value)


def _param_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def to_rfc3339(value: datetime) -> str:
    """Format a datetime as RFC 3339. Naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.isoformat()


# ============================================================================
# Capability mixins
# ============================================================================


class _HasRequest:
    _request: RequestContext


class PaginationMixin(_HasRequest):
    """``maxResults`` / ``pageToken`` query parameters."""

    def max_results(self, max_results: int) -> Self:
        """Maximum number of results per page."""
        self._request.set_param("maxResults", max_results)
        return self

    def page_token(self, token: str) -> Self:
        """Page to return, from a previous response's ``next_page_token``."""
        self._request.set_param("pageToken", token)
        return self


class TimeRangeMixin(_HasRequest):
    """``timeMin`` / ``timeMax`` query parameters as RFC 3339 timestamps."""

    def time_min(self, time_min: datetime) -> Self:
        """Lower bound (exclusive) on an event's end time."""
        self._request.set_param("timeMin", to_rfc3339(time_min))
        return self

    def time_max(self, time_max: datetime) -> Self:
        """Upper bound (exclusive) on an event's start time."""
        self._request.set_param("timeMax", to_rfc3339(time_max))
        return self


# ============================================================================
# Dispatch
# ============================================================================


def _serialize(body: BaseModel | None) -> dict[str, Any]:
    if body is None:
        return {}
    return body.model_dump(mode="json", by_alias=True, exclude_none=True)


async def _send(context: RequestContext) -> httpx.Response:
    method = context.method.upper()
    if method not in _WITH_BODY and method not in _BODYLESS:
        raise UnsupportedOperation(method)

    await context.client.ensure_fresh()

    kwargs: dict[str, Any] = {
        "params": context.params,
        "headers": context.client.auth_headers(),
    }
    if method in _WITH_BODY:
        kwargs["json"] = _serialize(context.body)

    try:
        resp = await context.client.http.request(method, context.url, **kwargs)
    except httpx.TransportError as e:
        logger.warning("%s %s failed: %s", method, context.url, e)
        raise TransportError(f"{method} {context.url} failed: {e}") from e

    logger.debug("%s %s -> %s", method, context.url, resp.status_code)
    if not resp.is_success:
        raise RequestError(resp.status_code, read_error_body(resp), method, context.url)
    return resp


async def execute(context: RequestContext, result_type: type[R]) -> R | None:
    """Send the request and decode a 2xx body into ``result_type``.

    Returns None when the successful response has no body.

    Raises:
        AuthError: the token could not be refreshed; nothing was sent.
        RequestError: non-2xx status.
        TransportError: connection or timeout failure.
        ResponseDecodeError: 2xx body is not valid for ``result_type``.
        UnsupportedOperation: method other than GET/POST/PATCH/DELETE.
    """
    resp = await _send(context)
    if not resp.content.strip():
        return None

    try:
        return result_type.model_validate(resp.json())
    except (ValueError, ValidationError) as e:
        raise ResponseDecodeError(resp.status_code, read_error_body(resp), str(e)) from e


async def execute_delete(context: RequestContext) -> None:
    """Send a DELETE. Success carries no body; failures raise as in :func:`execute`."""
    await _send(context)
