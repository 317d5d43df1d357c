from __future__ import annotations

import secrets
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader, OAuth2PasswordBearer

from logovote.config import config
from logovote.infrastructure.context import UseCases

from . import exceptions

__all__ = [
    "AdminNamespaceIDDeps",
    "SuperAdminTokenDeps",
    "UseCasesDeps",
]

admin_key_header = APIKeyHeader(name="X-Admin-Key", auto_error=False)
reusable_oauth2 = OAuth2PasswordBearer(tokenUrl="", auto_error=False)


async def usecases(request: Request):
    return request.state.usecases


async def admin_namespace_id(
    namespace_id: UUID,
    usecases: UseCasesDeps,
    admin_key: str | None = Depends(admin_key_header),
) -> UUID:
    """Returns namespace ID from a query if the admin key belongs to the namespace."""
    if not admin_key:
        raise exceptions.MissingAdminKey() from None

    # a namespace that doesn't exist has no owner, so it is reported as forbidden
    if not await usecases.namespace.validate_owner(namespace_id, admin_key):
        raise exceptions.InvalidAdminKey() from None

    return namespace_id


async def superadmin_token(token: str | None = Depends(reusable_oauth2)):
    """Requires a superadmin token."""
    if not token:
        raise exceptions.MissingToken() from None

    expected = config.auth.superadmin_token
    if not expected or not secrets.compare_digest(token.encode(), expected.encode()):
        raise exceptions.InvalidToken() from None


AdminNamespaceIDDeps = Annotated[UUID, Depends(admin_namespace_id)]
SuperAdminTokenDeps = Annotated[None, Depends(superadmin_token)]
UseCasesDeps = Annotated[UseCases, Depends(usecases)]
