from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, File, Request, UploadFile

from logovote.api import exceptions as api_exceptions
from logovote.api.deps import AdminNamespaceIDDeps, UseCasesDeps
from logovote.app.namespaces.domain import Logo, Namespace

from . import exceptions
from .schemas import (
    DeleteLogoRequest,
    ListLogosResponse,
    LogoSchema,
    UpdateDescriptionRequest,
    UploadResponse,
    UploadResult,
    VoteRequest,
    VoteResponse,
)

router = APIRouter()


@router.post("/delete")
async def delete(
    request: Request,
    payload: DeleteLogoRequest,
    namespace_id: AdminNamespaceIDDeps,
    usecases: UseCasesDeps,
) -> LogoSchema:
    """Deletes a logo with its file."""
    try:
        logo = await usecases.namespace.delete_logo(namespace_id, payload.logo_id)
    except Namespace.NotFound as exc:
        raise api_exceptions.NamespaceNotFound() from exc
    except Logo.NotFound as exc:
        raise exceptions.LogoNotFound() from exc

    return LogoSchema.from_entity(logo, request)


@router.get("/list")
async def list_logos(
    request: Request,
    namespace_id: UUID,
    usecases: UseCasesDeps,
) -> ListLogosResponse:
    """Lists namespace logos in upload order."""
    try:
        namespace = await usecases.namespace.get_namespace(namespace_id)
    except Namespace.NotFound as exc:
        raise api_exceptions.NamespaceNotFound() from exc

    return ListLogosResponse(
        items=[LogoSchema.from_entity(logo, request) for logo in namespace.logos]
    )


@router.post("/update_description")
async def update_description(
    request: Request,
    payload: UpdateDescriptionRequest,
    namespace_id: AdminNamespaceIDDeps,
    usecases: UseCasesDeps,
) -> LogoSchema:
    """Updates logo description."""
    try:
        logo = await usecases.namespace.set_logo_description(
            namespace_id, payload.logo_id, payload.description
        )
    except Namespace.NotFound as exc:
        raise api_exceptions.NamespaceNotFound() from exc
    except Logo.NotFound as exc:
        raise exceptions.LogoNotFound() from exc

    return LogoSchema.from_entity(logo, request)


@router.post("/upload")
async def upload(
    request: Request,
    namespace_id: UUID,
    usecases: UseCasesDeps,
    files: list[UploadFile] = File(...),
) -> UploadResponse:
    """
    Uploads a batch of logos. Files that fail are reported with an error code and
    don't affect the rest of the batch.
    """
    try:
        results = await usecases.namespace.add_logos(namespace_id, files)
    except Logo.TooManyFiles as exc:
        raise exceptions.TooManyFiles() from exc
    except Namespace.NotFound as exc:
        raise api_exceptions.NamespaceNotFound() from exc

    return UploadResponse(
        items=[UploadResult.from_entity(result, request) for result in results]
    )


@router.post("/vote")
async def vote(payload: VoteRequest, usecases: UseCasesDeps) -> VoteResponse:
    """Votes for a logo. An identifier can vote for a logo only once."""
    try:
        votes = await usecases.namespace.vote(
            payload.namespace_id, payload.logo_id, payload.identifier
        )
    except Namespace.NotFound as exc:
        raise api_exceptions.NamespaceNotFound() from exc
    except Logo.NotFound as exc:
        raise exceptions.LogoNotFound() from exc
    except Logo.AlreadyVoted as exc:
        raise exceptions.AlreadyVoted() from exc

    return VoteResponse(votes=votes)
