"""File metadata repository on top of the Django ORM."""

import logging
import uuid
from typing import final

from django.db import DEFAULT_DB_ALIAS, connections, transaction
from django.db.utils import DatabaseError

from server.apps.files.models import File

logger = logging.getLogger(__name__)


@final
class FileRepository:
    """Persists and queries File records.

    Every lookup takes already-parsed identifiers; converting client
    strings is the caller's job.
    """

    def __init__(self, using: str = DEFAULT_DB_ALIAS) -> None:
        """Initialize the repository.

        Args:
            using: Database alias to run queries against.
        """
        self._using = using

    def connect(self) -> None:
        """Open the database connection eagerly."""
        connections[self._using].ensure_connection()
        logger.info('Metadata store connected: %s', self._using)

    def close(self) -> None:
        """Close the database connection."""
        connections[self._using].close()

    def is_alive(self) -> bool:
        """Check that the database accepts connections.

        Returns:
            True if a connection can be established, False otherwise.
        """
        try:
            connections[self._using].ensure_connection()
        except DatabaseError:
            logger.exception('Metadata store health check failed')
            return False
        return True

    def get(self, file_id: uuid.UUID) -> File | None:
        """Fetch a record by id, whoever owns it.

        Args:
            file_id: Record id.

        Returns:
            File instance, or None if not found.
        """
        return (
            File.objects.using(self._using)
            .filter(id=file_id)
            .first()
        )

    def get_owned(self, file_id: uuid.UUID, user_id: str) -> File | None:
        """Fetch a record by id and owner.

        Args:
            file_id: Record id.
            user_id: Owner id.

        Returns:
            File instance, or None if absent or owned by someone else.
        """
        return (
            File.objects.using(self._using)
            .filter(id=file_id, user_id=user_id)
            .first()
        )

    def insert(  # noqa: WPS211
        self,
        user_id: str,
        name: str,
        file_type: str,
        parent_id: uuid.UUID | None,
        is_public: bool,
        local_path: str = '',
    ) -> File:
        """Insert a new record.

        Args:
            user_id: Owner id.
            name: Display name.
            file_type: One of the FileType values.
            parent_id: Containing folder id, None for the root.
            is_public: Visibility flag.
            local_path: Blob name for files and images.

        Returns:
            Created File instance.
        """
        file_instance = File.objects.using(self._using).create(
            user_id=user_id,
            name=name,
            type=file_type,
            parent_id=parent_id,
            is_public=is_public,
            local_path=local_path,
        )
        logger.info(
            'File record created: %s (ID: %s)',
            name,
            file_instance.id,
        )
        return file_instance

    def list_children(
        self,
        user_id: str,
        parent_id: uuid.UUID | None,
        offset: int,
        limit: int,
    ) -> list[File]:
        """List a user's records with the given parent, one page at a time.

        Args:
            user_id: Owner id.
            parent_id: Containing folder id, None for the root.
            offset: Number of records to skip.
            limit: Maximum number of records to return.

        Returns:
            Records in insertion order.
        """
        queryset = File.objects.using(self._using).filter(
            user_id=user_id,
            parent_id=parent_id,
        )
        return list(queryset[offset:offset + limit])

    def set_public(
        self,
        file_id: uuid.UUID,
        user_id: str,
        is_public: bool,
    ) -> File | None:
        """Atomically set visibility of an owned record.

        The update is a single conditional UPDATE statement; the
        re-read happens in the same transaction.

        Args:
            file_id: Record id.
            user_id: Owner id.
            is_public: Target visibility.

        Returns:
            Updated File instance, or None if no owned record matched.
        """
        with transaction.atomic(using=self._using):
            updated = (
                File.objects.using(self._using)
                .filter(id=file_id, user_id=user_id)
                .update(is_public=is_public)
            )
            if not updated:
                return None
            file_instance = File.objects.using(self._using).get(id=file_id)

        logger.info(
            'File visibility set: ID=%s, is_public=%s',
            file_id,
            is_public,
        )
        return file_instance

    def count(self) -> int:
        """Count all records.

        Returns:
            Number of File records.
        """
        return File.objects.using(self._using).count()
