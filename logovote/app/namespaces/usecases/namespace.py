from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING, Protocol

from logovote.app.namespaces.domain import Logo, Namespace
from logovote.config import config

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from logovote.app.infrastructure import IFileContent
    from logovote.app.namespaces.services import LogoService, NamespaceService

    class IUseCaseServices(Protocol):
        logo: LogoService
        namespace: NamespaceService

__all__ = [
    "ErrorCode",
    "LogoUploadResult",
    "NamespaceUseCase",
]

logger = logging.getLogger(__name__)


class ErrorCode(str, enum.Enum):
    internal = "internal_error"
    logo_too_large = "logo_too_large"
    unsupported_type = "unsupported_type"


class LogoUploadResult:
    __slots__ = ("filename", "logo", "err_code")

    def __init__(
        self,
        filename: str | None,
        logo: Logo | None = None,
        err_code: ErrorCode | None = None,
    ) -> None:
        self.filename = filename
        self.logo = logo
        self.err_code = err_code

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"filename={self.filename!r}, "
            f"logo={self.logo!r}, "
            f"err_code={self.err_code!r}"
            ")"
        )


def exc_to_err_code(exc: Exception) -> ErrorCode:
    err_map: dict[type[Exception], ErrorCode] = {
        Logo.TooLarge: ErrorCode.logo_too_large,
        Logo.UnsupportedType: ErrorCode.unsupported_type,
    }
    if code := err_map.get(exc.__class__):
        return code
    return ErrorCode.internal


class NamespaceUseCase:
    __slots__ = ["logo", "namespace"]

    def __init__(self, services: IUseCaseServices):
        self.logo = services.logo
        self.namespace = services.namespace

    async def add_logos(
        self, ns_id: UUID, files: Sequence[IFileContent]
    ) -> list[LogoUploadResult]:
        """
        Uploads a batch of logos to a namespace.

        Every file is checked and saved on its own: a file that fails doesn't stop the
        rest of the batch and is reported with an error code instead. Saved logos are
        added to the namespace at once after the whole batch is processed.

        Raises:
            Logo.TooManyFiles: If the batch is larger than allowed.
            Namespace.NotFound: If namespace does not exist.

        Returns:
            list[LogoUploadResult]: A result for each file in the same order.
        """
        if len(files) > config.features.upload_max_files:
            raise Logo.TooManyFiles()

        if not await self.namespace.exists(ns_id):
            raise Namespace.NotFound()

        results, logos = [], []
        for file in files:
            try:
                logo = await self.logo.create(ns_id, file)
            except Exception as exc:
                err_code = exc_to_err_code(exc)
                if err_code == ErrorCode.internal:
                    logger.exception("Unexpectedly failed to save a logo")
                results.append(LogoUploadResult(file.filename, err_code=err_code))
            else:
                logos.append(logo)
                results.append(LogoUploadResult(file.filename, logo=logo))

        if logos:
            try:
                await self.namespace.add_logos(ns_id, logos)
            except Namespace.NotFound:
                # namespace was deleted while the batch was being saved
                await self.logo.delete_namespace_files(ns_id)
                raise
            except Exception:
                await self.logo.delete_files(logos)
                raise
            logger.info("Added %d logos to namespace %s", len(logos), ns_id)

        return results

    async def clear_votes(self, ns_id: UUID) -> Namespace:
        """
        Removes all votes in a namespace.

        Raises:
            Namespace.NotFound: If namespace does not exist.
        """
        namespace = await self.namespace.clear_votes(ns_id)
        logger.info("Votes cleared for namespace %s", ns_id)
        return namespace

    async def create_namespace(self) -> Namespace:
        """Creates a new namespace."""
        return await self.namespace.create()

    async def delete_logo(self, ns_id: UUID, logo_id: UUID) -> Logo:
        """
        Deletes a logo with its file.

        Raises:
            Namespace.NotFound: If namespace does not exist.
            Logo.NotFound: If there is no such logo in the namespace.
        """
        logo = await self.namespace.delete_logo(ns_id, logo_id)
        logger.info("Logo %s deleted from namespace %s", logo_id, ns_id)
        return logo

    async def delete_namespace(self, ns_id: UUID) -> bool:
        """
        Deletes a namespace with all of its logos.

        Returns:
            bool: False if some part of the namespace failed to be deleted.
        """
        return await self.namespace.delete(ns_id)

    async def get_namespace(self, ns_id: UUID) -> Namespace:
        """
        Returns a namespace.

        Raises:
            Namespace.NotFound: If namespace does not exist.
        """
        return await self.namespace.get_by_id(ns_id)

    async def rename(self, ns_id: UUID, name: str | None) -> Namespace:
        """
        Sets namespace friendly name. Empty name removes it.

        Raises:
            Namespace.NotFound: If namespace does not exist.
            Namespace.FriendlyNameTaken: If another namespace already uses the name.
        """
        return await self.namespace.rename(ns_id, name)

    async def resolve(self, name: str) -> Namespace:
        """
        Returns a namespace by its friendly name.

        Raises:
            Namespace.NotFound: If there is no namespace with such name.
        """
        return await self.namespace.get_by_friendly_name(name)

    async def set_logo_description(
        self, ns_id: UUID, logo_id: UUID, description: str
    ) -> Logo:
        """
        Updates logo description.

        Raises:
            Namespace.NotFound: If namespace does not exist.
            Logo.NotFound: If there is no such logo in the namespace.
        """
        return await self.namespace.set_description(ns_id, logo_id, description)

    async def validate_owner(self, ns_id: UUID, admin_key: str) -> bool:
        """Returns True if admin key belongs to the namespace."""
        return await self.namespace.validate_owner(ns_id, admin_key)

    async def vote(self, ns_id: UUID, logo_id: UUID, identifier: str) -> int:
        """
        Votes for a logo. An identifier can vote for a logo only once.

        Raises:
            Namespace.NotFound: If namespace does not exist.
            Logo.NotFound: If there is no such logo in the namespace.
            Logo.AlreadyVoted: If identifier has already voted for this logo.

        Returns:
            int: Logo vote count after the vote.
        """
        count = await self.namespace.vote(ns_id, logo_id, identifier)
        logger.info("Vote recorded for logo %s in namespace %s", logo_id, ns_id)
        return count
