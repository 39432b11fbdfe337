"""Query-scoped batching and deduplication of authorization requests.

One DecisionBatcher belongs to one query. Requests loaded during the same
event-loop turn are sent to the permission backend as a single batch, and a
request already loaded in this query reuses the pending or resolved decision.
Nothing is cached across queries.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import TYPE_CHECKING

from authsearch.application.dtos.search import AuthorizeDecision, AuthorizeRequest
from authsearch.domain.exceptions import (
    AuthorizationFailureException,
    SearchGatewayException,
)
from authsearch.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from authsearch.application.dtos.search import QueryRequestOptions
    from authsearch.application.interfaces.services import IPermissionAuthorizer

logger = get_logger(__name__)


class DecisionBatcher:
    """Deduplicating loader of AuthorizeDecision for a single query."""

    def __init__(
        self,
        authorizer: "IPermissionAuthorizer",
        options: "QueryRequestOptions",
        max_batch_size: int | None = None,
    ) -> None:
        if max_batch_size is not None and max_batch_size < 1:
            raise ValueError("max_batch_size must be >= 1")
        self.authorizer = authorizer
        self.options = options
        self.max_batch_size = max_batch_size
        self._decisions: dict[AuthorizeRequest, asyncio.Future[AuthorizeDecision]] = {}
        self._queue: list[AuthorizeRequest] = []
        self._dispatch_scheduled = False
        self._batch_tasks: set[asyncio.Task[None]] = set()

    def load(self, request: AuthorizeRequest) -> Awaitable[AuthorizeDecision]:
        """Return an awaitable decision for request, queuing it if new to this query."""
        future = self._decisions.get(request)
        if future is not None:
            return future
        loop = asyncio.get_running_loop()
        future = loop.create_future()
        self._decisions[request] = future
        self._queue.append(request)
        if not self._dispatch_scheduled:
            self._dispatch_scheduled = True
            # Runs after every task already scheduled this turn has had a chance to load.
            loop.call_soon(self._dispatch)
        return future

    async def load_many(
        self, requests: list[AuthorizeRequest]
    ) -> list[AuthorizeDecision]:
        """Load several requests concurrently; decisions in request order."""
        return list(await asyncio.gather(*(self.load(r) for r in requests)))

    def _dispatch(self) -> None:
        self._dispatch_scheduled = False
        queue, self._queue = self._queue, []
        if not queue:
            return
        size = self.max_batch_size or len(queue)
        for start in range(0, len(queue), size):
            batch = queue[start : start + size]
            task = asyncio.ensure_future(self._run_batch(batch))
            self._batch_tasks.add(task)
            task.add_done_callback(self._batch_tasks.discard)

    async def _run_batch(self, batch: list[AuthorizeRequest]) -> None:
        logger.debug("Dispatching %d authorization request(s)", len(batch))
        try:
            decisions = await self.authorizer.authorize(batch, self.options)
            if len(decisions) != len(batch):
                raise AuthorizationFailureException(
                    f"expected {len(batch)} decisions, got {len(decisions)}"
                )
        except SearchGatewayException as e:
            self._fail(batch, e)
            return
        except Exception as e:
            failure = AuthorizationFailureException(str(e))
            failure.__cause__ = e
            self._fail(batch, failure)
            return
        for request, decision in zip(batch, decisions):
            future = self._decisions[request]
            if not future.done():
                future.set_result(decision)

    def _fail(self, batch: list[AuthorizeRequest], error: Exception) -> None:
        """Fail the whole query: every undecided load gets error, sibling batches stop."""
        logger.warning("Authorization batch of %d failed: %s", len(batch), error)
        for future in self._decisions.values():
            if not future.done():
                future.set_exception(error)
        self._queue.clear()
        current = asyncio.current_task()
        siblings = [task for task in self._batch_tasks if task is not current]
        if siblings:
            logger.debug("Cancelling %d in-flight authorization batch(es)", len(siblings))
        for task in siblings:
            task.cancel()
