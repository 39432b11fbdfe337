"""Type-level visibility decisions for the document types of a query."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from authsearch.application.dtos.search import (
    AuthorizeDecision,
    AuthorizeRequest,
    DocumentTypeInfo,
)
from authsearch.domain.enums import AuthorizeResult
from authsearch.domain.exceptions import ValidationException

if TYPE_CHECKING:
    from authsearch.application.services.decision_batcher import DecisionBatcher

_ALLOW = AuthorizeDecision(result=AuthorizeResult.ALLOW)


class TypeAuthorizer:
    """Resolves, once per type, whether the caller may see that type at all."""

    def __init__(self, types: Mapping[str, DocumentTypeInfo]) -> None:
        self.types = types

    def requested_types(self, types: list[str] | None) -> list[str]:
        """Return the requested types, or every registered type when none given.

        Raises:
            ValidationException: If a requested type is not registered.
        """
        if not types:
            return list(self.types)
        unknown = [t for t in types if t not in self.types]
        if unknown:
            raise ValidationException(
                f"Unknown document type(s): {', '.join(unknown)}", field="types"
            )
        return list(dict.fromkeys(types))

    async def authorize_types(
        self,
        requested_types: list[str],
        batcher: "DecisionBatcher",
    ) -> dict[str, AuthorizeDecision]:
        """Map each type to its decision; permission checks go out as one batch."""
        gated = [
            t for t in requested_types if self.types[t].visibility_permission
        ]
        loaded = await batcher.load_many(
            [
                AuthorizeRequest(permission=self.types[t].visibility_permission)
                for t in gated
            ]
        )
        decisions = dict(zip(gated, loaded))
        return {t: decisions.get(t, _ALLOW) for t in requested_types}

    @staticmethod
    def authorized_types(decisions: Mapping[str, AuthorizeDecision]) -> list[str]:
        """Types worth querying: ALLOW or CONDITIONAL, in requested order."""
        return [
            type_name
            for type_name, decision in decisions.items()
            if decision.result != AuthorizeResult.DENY
        ]
