from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Self
from uuid import UUID

from pydantic import BaseModel, Field, StringConstraints

from logovote.app.namespaces.usecases.namespace import ErrorCode

if TYPE_CHECKING:
    from fastapi import Request

    from logovote.app.namespaces.domain import Logo
    from logovote.app.namespaces.usecases.namespace import LogoUploadResult


class LogoSchema(BaseModel):
    id: UUID
    path: str
    url: str
    description: str
    votes: int

    @classmethod
    def from_entity(cls, logo: Logo, request: Request) -> Self:
        return cls(
            id=logo.id,
            path=logo.path,
            url=str(request.url_for("uploads", path=logo.path)),
            description=logo.description,
            votes=logo.vote_count,
        )


class DeleteLogoRequest(BaseModel):
    logo_id: UUID


class ListLogosResponse(BaseModel):
    items: list[LogoSchema]


class UpdateDescriptionRequest(BaseModel):
    logo_id: UUID
    description: Annotated[str, Field(max_length=512)]


class UploadResult(BaseModel):
    filename: str | None
    logo: LogoSchema | None
    err_code: ErrorCode | None

    @classmethod
    def from_entity(cls, entity: LogoUploadResult, request: Request) -> Self:
        return cls(
            filename=entity.filename,
            logo=LogoSchema.from_entity(entity.logo, request) if entity.logo else None,
            err_code=entity.err_code,
        )


class UploadResponse(BaseModel):
    items: list[UploadResult]


class VoteRequest(BaseModel):
    namespace_id: UUID
    logo_id: UUID
    identifier: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class VoteResponse(BaseModel):
    votes: int
