from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Self
from uuid import UUID

from pydantic import BaseModel

if TYPE_CHECKING:
    from logovote.app.namespaces.domain import Namespace
    from logovote.app.namespaces.services import PruneResult


class DeleteNamespaceRequest(BaseModel):
    namespace_id: UUID


class ImportResponse(BaseModel):
    namespaces: int


class NamespaceSummarySchema(BaseModel):
    id: UUID
    friendly_url_name: str | None
    created_at: datetime | None
    logos: int
    total_votes: int

    @classmethod
    def from_entity(cls, namespace: Namespace) -> Self:
        return cls(
            id=namespace.id,
            friendly_url_name=namespace.friendly_url_name,
            created_at=namespace.created_at,
            logos=len(namespace.logos),
            total_votes=namespace.total_votes(),
        )


class ListNamespacesResponse(BaseModel):
    items: list[NamespaceSummarySchema]


class PruneResponse(BaseModel):
    checked: int
    deleted: list[UUID]
    failed: list[UUID]

    @classmethod
    def from_entity(cls, entity: PruneResult) -> Self:
        return cls(
            checked=entity.checked,
            deleted=entity.deleted,
            failed=entity.failed,
        )
