"""Local filesystem blob store for file contents."""

import logging
import os
import uuid
from typing import final

from django.core.files.base import ContentFile
from django.core.files.storage import FileSystemStorage

logger = logging.getLogger(__name__)


@final
class BlobStorage(FileSystemStorage):
    """Blob store for uploaded contents on the local filesystem.

    Blobs get random uuid4 hex names, so concurrent uploads never
    collide and nothing about a record leaks into its blob name.
    """

    def connect(self) -> None:
        """Create the storage root if it does not exist yet."""
        os.makedirs(self.location, exist_ok=True)
        logger.info('Blob storage ready at %s', self.location)

    def close(self) -> None:
        """Release resources (nothing to release for local files)."""

    def is_alive(self) -> bool:
        """Check that the storage root is a writable directory.

        Returns:
            True if blobs can be written, False otherwise.
        """
        return os.path.isdir(self.location) and os.access(
            self.location,
            os.W_OK,
        )

    def write(self, content: bytes, name: str | None = None) -> str:
        """Write bytes under a new blob name.

        Args:
            content: Raw bytes to store.
            name: Explicit blob name. A random uuid4 name is generated
                when omitted.

        Returns:
            Name of the stored blob.

        Raises:
            OSError: If the file cannot be written.
        """
        blob_name = name or uuid.uuid4().hex
        try:
            saved_name = self.save(blob_name, ContentFile(content))
        except OSError:
            logger.exception('Failed to write blob %s', blob_name)
            raise
        logger.debug('Wrote blob %s (%d bytes)', saved_name, len(content))
        return saved_name

    def read(self, name: str) -> bytes:
        """Read a whole blob.

        Args:
            name: Blob name.

        Returns:
            Stored bytes.

        Raises:
            FileNotFoundError: If the blob does not exist.
        """
        with self.open(name, 'rb') as blob:
            return blob.read()

    def rollback_write(self, name: str) -> None:
        """Delete a written blob after its metadata insert failed.

        Never raises: a blob that cannot be deleted is logged and left
        for the cleanup_orphan_blobs command.

        Args:
            name: Blob name.
        """
        try:
            self.delete(name)
        except Exception:
            logger.exception(
                'Failed to rollback blob write, orphaned blob: %s',
                name,
            )
        else:
            logger.warning('Rolled back blob write: %s', name)
