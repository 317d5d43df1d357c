from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Annotated, Self
from uuid import UUID

from pydantic import BaseModel, Field

from logovote.api.logos.schemas import LogoSchema

if TYPE_CHECKING:
    from fastapi import Request

    from logovote.app.namespaces.domain import Namespace


class CreateNamespaceResponse(BaseModel):
    namespace_id: UUID
    admin_key: str


class NamespaceSchema(BaseModel):
    id: UUID
    friendly_url_name: str | None
    created_at: datetime | None
    total_votes: int
    logos: list[LogoSchema]

    @classmethod
    def from_entity(cls, namespace: Namespace, request: Request) -> Self:
        return cls(
            id=namespace.id,
            friendly_url_name=namespace.friendly_url_name,
            created_at=namespace.created_at,
            total_votes=namespace.total_votes(),
            logos=[LogoSchema.from_entity(logo, request) for logo in namespace.logos],
        )


class RenameNamespaceRequest(BaseModel):
    name: Annotated[str | None, Field(max_length=128)] = None


class ResolveNamespaceResponse(BaseModel):
    namespace_id: UUID
    friendly_url_name: str | None
