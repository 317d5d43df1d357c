from __future__ import annotations

import uuid
from typing import ClassVar
from uuid import UUID

from pydantic import BaseModel, Field

__all__ = ["Logo"]


class LogoError(Exception):
    pass


class LogoAlreadyVoted(LogoError):
    pass


class LogoNotFound(LogoError):
    pass


class LogoTooLarge(LogoError):
    pass


class LogoUnsupportedType(LogoError):
    pass


class TooManyLogos(LogoError):
    pass


class Logo(BaseModel):
    Error: ClassVar[type[Exception]] = LogoError
    AlreadyVoted: ClassVar[type[LogoAlreadyVoted]] = LogoAlreadyVoted
    NotFound: ClassVar[type[LogoNotFound]] = LogoNotFound
    TooLarge: ClassVar[type[LogoTooLarge]] = LogoTooLarge
    TooManyFiles: ClassVar[type[TooManyLogos]] = TooManyLogos
    UnsupportedType: ClassVar[type[LogoUnsupportedType]] = LogoUnsupportedType

    id: UUID = Field(default_factory=uuid.uuid4)
    path: str
    description: str = ""
    votes: list[str] = []

    @property
    def vote_count(self) -> int:
        return len(self.votes)

    def add_vote(self, identifier: str) -> int:
        """
        Records a vote from the given identifier and returns a new vote count.

        Raises:
            Logo.AlreadyVoted: If identifier has already voted for this logo.
        """
        if identifier in self.votes:
            raise self.AlreadyVoted()
        self.votes.append(identifier)
        return self.vote_count

    def clear_votes(self) -> None:
        self.votes = []
