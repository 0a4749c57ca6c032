"""Database models for files app."""

import uuid
from typing import ClassVar, Final, final, override

from django.conf import settings
from django.db import models

# Constants for field max lengths
NAME_MAX_LENGTH: Final = 255
_TYPE_MAX_LENGTH: Final = 16
_LOCAL_PATH_MAX_LENGTH: Final = 64  # uuid4 hex + thumbnail suffix

# Value exposed to clients for records without a parent
ROOT_PARENT_ID: Final = 0


class FileType(models.TextChoices):
    """Kinds of file records."""

    FOLDER = 'folder', 'Folder'
    FILE = 'file', 'File'
    IMAGE = 'image', 'Image'


# Types that carry content in the blob store
CONTENT_TYPES: Final = frozenset((FileType.FILE, FileType.IMAGE))


@final
class File(models.Model):
    """File, image or folder owned by a user.

    Folders form the hierarchy: a record with a ``parent`` lives inside
    that folder, a record without one lives at the user's root.

    Files and images point at their content through ``local_path``,
    the name of a blob in the local blob store. Folders never have
    content, so their ``local_path`` stays empty.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )

    # Owner relationship
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='files',
        db_index=True,
    )

    name = models.CharField(max_length=NAME_MAX_LENGTH)

    type = models.CharField(
        max_length=_TYPE_MAX_LENGTH,
        choices=FileType.choices,
    )

    # None means the record lives at the user's root
    parent = models.ForeignKey(
        'self',
        on_delete=models.PROTECT,
        related_name='children',
        null=True,
        blank=True,
    )

    is_public = models.BooleanField(default=False)

    local_path = models.CharField(
        max_length=_LOCAL_PATH_MAX_LENGTH,
        blank=True,
        default='',
        help_text='Blob name in the local blob store (files and images only)',
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'File'  # type: ignore[mutable-override]
        verbose_name_plural = 'Files'  # type: ignore[mutable-override]
        # Insertion order; id breaks ties between equal timestamps
        ordering: ClassVar[list[str]] = ['created_at', 'id']

        indexes: ClassVar[list[models.Index]] = [
            # Optimize folder listing queries
            models.Index(
                fields=['user', 'parent', 'created_at'],
                name='files_user_parent_idx',
            ),
        ]

        constraints: ClassVar[list[models.BaseConstraint]] = [
            # Content reference exists only for files and images
            models.CheckConstraint(
                condition=(
                    models.Q(type=FileType.FOLDER, local_path='')
                    | (
                        models.Q(type__in=[FileType.FILE, FileType.IMAGE])
                        & ~models.Q(local_path='')
                    )
                ),
                name='files_local_path_matches_type',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.user_id}:{self.name} ({self.type})'

    @property
    def is_folder(self) -> bool:
        """Whether this record is a folder."""
        return self.type == FileType.FOLDER

    def to_dict(self) -> dict[str, object]:
        """Serialize the record for API responses.

        Returns:
            Dictionary with camelCase keys. ``localPath`` is present
            only for files and images.
        """
        payload: dict[str, object] = {
            'id': str(self.id),
            'userId': str(self.user_id),
            'name': self.name,
            'type': self.type,
            'isPublic': self.is_public,
            'parentId': (
                str(self.parent_id)
                if self.parent_id is not None
                else ROOT_PARENT_ID
            ),
        }
        if self.local_path:
            payload['localPath'] = self.local_path
        return payload
