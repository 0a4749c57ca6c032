"""Contracts of the collaborators used by the file operations.

The file manager depends on these protocols only, so the concrete
adapters in ``server.apps.files.infrastructure`` can be replaced
(e.g., by fakes in tests).
"""

import uuid
from typing import Protocol

from server.apps.files.models import File


class Lifecycle(Protocol):
    """Explicit lifecycle shared by all collaborators."""

    def connect(self) -> None:
        """Acquire connections or create directories."""

    def close(self) -> None:
        """Release what connect acquired."""

    def is_alive(self) -> bool:
        """Report whether the collaborator is usable."""


class SessionResolver(Lifecycle, Protocol):
    """Maps bearer tokens to user ids."""

    def resolve(self, token: str | None) -> str | None:
        """Return the user id bound to token, or None."""


class ContentStore(Lifecycle, Protocol):
    """Stores opaque byte payloads under generated names."""

    def write(self, content: bytes, name: str | None = None) -> str:
        """Store bytes and return the blob name."""

    def read(self, name: str) -> bytes:
        """Return the stored bytes, FileNotFoundError if absent."""

    def exists(self, name: str) -> bool:
        """Check whether a blob exists."""

    def rollback_write(self, name: str) -> None:
        """Best-effort deletion of a blob whose metadata was not saved."""


class MetadataRepository(Lifecycle, Protocol):
    """Persists File records."""

    def get(self, file_id: uuid.UUID) -> File | None:
        """Fetch a record by id."""

    def get_owned(self, file_id: uuid.UUID, user_id: str) -> File | None:
        """Fetch a record by id and owner."""

    def insert(  # noqa: WPS211
        self,
        user_id: str,
        name: str,
        file_type: str,
        parent_id: uuid.UUID | None,
        is_public: bool,
        local_path: str = '',
    ) -> File:
        """Insert a new record."""

    def list_children(
        self,
        user_id: str,
        parent_id: uuid.UUID | None,
        offset: int,
        limit: int,
    ) -> list[File]:
        """List a user's records with the given parent."""

    def set_public(
        self,
        file_id: uuid.UUID,
        user_id: str,
        is_public: bool,
    ) -> File | None:
        """Atomically set visibility of an owned record."""
