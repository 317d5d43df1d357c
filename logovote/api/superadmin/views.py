from __future__ import annotations

from fastapi import APIRouter, File, UploadFile
from fastapi.responses import StreamingResponse

from logovote.api.deps import SuperAdminTokenDeps, UseCasesDeps
from logovote.api.namespaces.exceptions import NamespaceDeleteFailed
from logovote.app.namespaces.services import BackupService
from logovote.toolkit import timezone

from . import exceptions
from .schemas import (
    DeleteNamespaceRequest,
    ImportResponse,
    ListNamespacesResponse,
    NamespaceSummarySchema,
    PruneResponse,
)

router = APIRouter()


@router.get("/export")
async def export(
    _: SuperAdminTokenDeps,
    usecases: UseCasesDeps,
):
    """Downloads all namespaces and uploaded files as a ZIP archive."""
    filename = f"logovote-{timezone.now():%Y%m%d%H%M%S}.zip"
    headers = {
        "Content-Disposition": f'attachment; filename="{filename}"',
        "Content-Type": "application/zip",
    }
    return StreamingResponse(usecases.superadmin.export(), headers=headers)


@router.post("/import")
async def import_(
    _: SuperAdminTokenDeps,
    usecases: UseCasesDeps,
    file: UploadFile = File(...),
) -> ImportResponse:
    """Replaces all namespaces and uploaded files with an archive content."""
    try:
        count = await usecases.superadmin.import_(file)
    except BackupService.InvalidArchive as exc:
        raise exceptions.InvalidArchive() from exc

    return ImportResponse(namespaces=count)


@router.post("/namespaces/delete")
async def delete_namespace(
    _: SuperAdminTokenDeps,
    payload: DeleteNamespaceRequest,
    usecases: UseCasesDeps,
) -> None:
    """Deletes any namespace."""
    if not await usecases.superadmin.delete_namespace(payload.namespace_id):
        raise NamespaceDeleteFailed()


@router.get("/namespaces/list")
async def list_namespaces(
    _: SuperAdminTokenDeps,
    usecases: UseCasesDeps,
) -> ListNamespacesResponse:
    """Lists all namespaces."""
    namespaces = await usecases.superadmin.list_namespaces()
    return ListNamespacesResponse(
        items=[NamespaceSummarySchema.from_entity(ns) for ns in namespaces]
    )


@router.post("/prune")
async def prune(
    _: SuperAdminTokenDeps,
    usecases: UseCasesDeps,
) -> PruneResponse:
    """Deletes old namespaces without votes right away."""
    result = await usecases.superadmin.prune()
    return PruneResponse.from_entity(result)
