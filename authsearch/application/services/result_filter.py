"""Per-result authorization of raw engine hits."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import TYPE_CHECKING

from authsearch.application.dtos.search import (
    AuthorizeDecision,
    AuthorizeRequest,
    DocumentTypeInfo,
    SearchResult,
)
from authsearch.domain.enums import AuthorizeResult
from authsearch.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from authsearch.application.services.decision_batcher import DecisionBatcher

logger = get_logger(__name__)


class ResultFilter:
    """Keeps the results the caller may see, in engine order.

    When a conditionally visible type has no permission configured, or a
    document carries no resource reference, the result cannot be checked
    per resource. It is kept unless require_resource_ref is set.
    """

    def __init__(
        self,
        types: Mapping[str, DocumentTypeInfo],
        require_resource_ref: bool = False,
    ) -> None:
        self.types = types
        self.require_resource_ref = require_resource_ref

    async def filter_results(
        self,
        results: list[SearchResult],
        type_decisions: Mapping[str, AuthorizeDecision],
        batcher: "DecisionBatcher",
    ) -> list[SearchResult]:
        """Return the authorized subset of results; checks run concurrently."""
        checked = await asyncio.gather(
            *(self._check(result, type_decisions, batcher) for result in results)
        )
        return [result for result in checked if result is not None]

    async def _check(
        self,
        result: SearchResult,
        type_decisions: Mapping[str, AuthorizeDecision],
        batcher: "DecisionBatcher",
    ) -> SearchResult | None:
        decision = type_decisions.get(result.type)
        if decision is None:
            logger.warning("Dropping result of unrequested type %r", result.type)
            return None
        if decision.result == AuthorizeResult.ALLOW:
            return result
        if decision.result == AuthorizeResult.DENY:
            return None

        info = self.types.get(result.type)
        permission = info.visibility_permission if info else None
        authorization = result.document.authorization
        resource_ref = authorization.resource_ref if authorization else None
        if not permission or not resource_ref:
            return None if self.require_resource_ref else result

        resource_decision = await batcher.load(
            AuthorizeRequest(permission=permission, resource_ref=resource_ref)
        )
        if resource_decision.result == AuthorizeResult.ALLOW:
            return result
        return None
