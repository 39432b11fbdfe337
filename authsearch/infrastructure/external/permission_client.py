"""HTTP client for the permission backend (implements IPermissionAuthorizer).

Request body: {"items": [{"id", "permission": {"name"}, "resourceRef"?}]}.
Response body: {"items": [{"id", "result"}]}; decisions are matched back by id.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from contextlib import asynccontextmanager
from typing import Any

import httpx

from authsearch.application.dtos.search import (
    AuthorizeDecision,
    AuthorizeRequest,
    QueryRequestOptions,
)
from authsearch.domain.enums import AuthorizeResult
from authsearch.domain.exceptions import AuthorizationFailureException
from authsearch.shared.telemetry.logging import get_logger
from authsearch.shared.telemetry.tracing import traced

logger = get_logger(__name__)


class HttpPermissionAuthorizer:
    """Sends batched authorization requests to a remote permission backend."""

    def __init__(
        self,
        base_url: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._shared_http = http_client

    @asynccontextmanager
    async def _http_cm(self):
        """Yield shared HTTP client or a short-lived one (connection reuse when shared)."""
        if self._shared_http is not None:
            yield self._shared_http
            return
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            yield client

    @traced("permission_backend.authorize")
    async def authorize(
        self,
        requests: Sequence[AuthorizeRequest],
        options: QueryRequestOptions,
    ) -> list[AuthorizeDecision]:
        """POST {base_url}/authorize and return decisions in request order.

        Raises:
            AuthorizationFailureException: On transport error, non-2xx, or a
                response that does not answer every request.
        """
        if not requests:
            return []
        ids = [str(uuid.uuid4()) for _ in requests]
        items: list[dict[str, Any]] = []
        for item_id, request in zip(ids, requests):
            item: dict[str, Any] = {"id": item_id, "permission": {"name": request.permission}}
            if request.resource_ref is not None:
                item["resourceRef"] = request.resource_ref
            items.append(item)
        headers = {"Content-Type": "application/json"}
        if options.token:
            headers["Authorization"] = f"Bearer {options.token}"

        try:
            async with self._http_cm() as client:
                resp = await client.post(
                    f"{self.base_url}/authorize",
                    json={"items": items},
                    headers=headers,
                )
        except httpx.HTTPError as e:
            raise AuthorizationFailureException(str(e)) from e
        if not resp.is_success:
            logger.warning("Permission backend returned %s", resp.status_code)
            raise AuthorizationFailureException(
                f"permission backend responded {resp.status_code}",
                status_code=resp.status_code,
            )
        try:
            by_id = {
                entry["id"]: AuthorizeResult(entry["result"])
                for entry in resp.json()["items"]
            }
        except (ValueError, KeyError, TypeError) as e:
            raise AuthorizationFailureException(
                f"malformed permission backend response: {e}"
            ) from e
        missing = [item_id for item_id in ids if item_id not in by_id]
        if missing:
            raise AuthorizationFailureException(
                f"permission backend omitted {len(missing)} decision(s)"
            )
        return [AuthorizeDecision(result=by_id[item_id]) for item_id in ids]
