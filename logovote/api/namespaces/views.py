from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Request

from logovote.api import exceptions as api_exceptions
from logovote.api.deps import AdminNamespaceIDDeps, UseCasesDeps
from logovote.app.namespaces.domain import Namespace

from . import exceptions
from .schemas import (
    CreateNamespaceResponse,
    NamespaceSchema,
    RenameNamespaceRequest,
    ResolveNamespaceResponse,
)

router = APIRouter()


@router.post("/clear_votes")
async def clear_votes(
    request: Request,
    namespace_id: AdminNamespaceIDDeps,
    usecases: UseCasesDeps,
) -> NamespaceSchema:
    """Removes all votes in a namespace."""
    try:
        namespace = await usecases.namespace.clear_votes(namespace_id)
    except Namespace.NotFound as exc:
        raise api_exceptions.NamespaceNotFound() from exc

    return NamespaceSchema.from_entity(namespace, request)


@router.post("/create")
async def create(usecases: UseCasesDeps) -> CreateNamespaceResponse:
    """
    Creates a new namespace. The admin key is returned only once and is required
    for every admin action on the namespace.
    """
    namespace = await usecases.namespace.create_namespace()
    return CreateNamespaceResponse(
        namespace_id=namespace.id,
        admin_key=namespace.admin_key,
    )


@router.post("/delete")
async def delete(
    namespace_id: AdminNamespaceIDDeps,
    usecases: UseCasesDeps,
) -> None:
    """Deletes a namespace with all of its logos."""
    if not await usecases.namespace.delete_namespace(namespace_id):
        raise exceptions.NamespaceDeleteFailed()


@router.get("/get")
async def get(
    request: Request,
    namespace_id: UUID,
    usecases: UseCasesDeps,
) -> NamespaceSchema:
    """Returns a namespace with its logos and vote counts."""
    try:
        namespace = await usecases.namespace.get_namespace(namespace_id)
    except Namespace.NotFound as exc:
        raise api_exceptions.NamespaceNotFound() from exc

    return NamespaceSchema.from_entity(namespace, request)


@router.post("/rename")
async def rename(
    request: Request,
    payload: RenameNamespaceRequest,
    namespace_id: AdminNamespaceIDDeps,
    usecases: UseCasesDeps,
) -> NamespaceSchema:
    """Sets a friendly name for a namespace. Empty name removes it."""
    try:
        namespace = await usecases.namespace.rename(namespace_id, payload.name)
    except Namespace.NotFound as exc:
        raise api_exceptions.NamespaceNotFound() from exc
    except Namespace.FriendlyNameTaken as exc:
        raise exceptions.FriendlyNameTaken() from exc

    return NamespaceSchema.from_entity(namespace, request)


@router.get("/resolve")
async def resolve(name: str, usecases: UseCasesDeps) -> ResolveNamespaceResponse:
    """Returns namespace ID by its friendly name."""
    try:
        namespace = await usecases.namespace.resolve(name)
    except Namespace.NotFound as exc:
        raise api_exceptions.NamespaceNotFound() from exc

    return ResolveNamespaceResponse(
        namespace_id=namespace.id,
        friendly_url_name=namespace.friendly_url_name,
    )
