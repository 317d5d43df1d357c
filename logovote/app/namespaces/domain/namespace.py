from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import ClassVar, Self
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from logovote.toolkit import json_

from .logo import Logo

__all__ = ["Namespace"]


class NamespaceError(Exception):
    pass


class NamespaceCorrupted(NamespaceError):
    pass


class NamespaceNotFound(NamespaceError):
    pass


class FriendlyNameTaken(NamespaceError):
    pass


class Namespace(BaseModel):
    Error: ClassVar[type[Exception]] = NamespaceError
    Corrupted: ClassVar[type[NamespaceCorrupted]] = NamespaceCorrupted
    FriendlyNameTaken: ClassVar[type[FriendlyNameTaken]] = FriendlyNameTaken
    NotFound: ClassVar[type[NamespaceNotFound]] = NamespaceNotFound

    model_config = ConfigDict(populate_by_name=True)

    # id is the record key and is never written into the record itself
    id: UUID = Field(default_factory=uuid.uuid4, exclude=True)
    admin_key: str = Field(
        default_factory=lambda: str(uuid.uuid4()), alias="adminKey"
    )
    created_at: datetime | None = Field(default=None, alias="createdAt")
    friendly_url_name: str | None = Field(default=None, alias="friendlyUrlName")
    logos: list[Logo] = []

    @field_validator("created_at")
    @classmethod
    def _as_aware(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @classmethod
    def from_record(cls, ns_id: UUID, record: bytes) -> Self:
        """
        Loads a namespace from its JSON record.

        Raises:
            Namespace.Corrupted: If a record is not a valid namespace.
        """
        try:
            return cls.model_validate({**json_.loads(record), "id": ns_id})
        except (TypeError, ValueError) as exc:
            msg = f"Namespace record for {ns_id} is malformed"
            raise cls.Corrupted(msg) from exc

    def as_record(self) -> bytes:
        """Returns a JSON record for the namespace."""
        return json_.dumps(
            self.model_dump(mode="json", by_alias=True),
            indent=True,
        )

    def get_logo(self, logo_id: UUID) -> Logo:
        """
        Returns a logo with a given ID.

        Raises:
            Logo.NotFound: If there is no such logo in the namespace.
        """
        for logo in self.logos:
            if logo.id == logo_id:
                return logo
        raise Logo.NotFound()

    def pop_logo(self, logo_id: UUID) -> Logo:
        """
        Removes a logo with a given ID from the namespace and returns it.

        Raises:
            Logo.NotFound: If there is no such logo in the namespace.
        """
        for idx, logo in enumerate(self.logos):
            if logo.id == logo_id:
                return self.logos.pop(idx)
        raise Logo.NotFound()

    def total_votes(self) -> int:
        """Returns number of votes across all logos."""
        return sum(logo.vote_count for logo in self.logos)
