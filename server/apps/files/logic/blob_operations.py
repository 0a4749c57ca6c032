"""Business logic for blob store maintenance."""

import logging
from datetime import timedelta

from django.utils import timezone

from server.apps.files.infrastructure.storage import BlobStorage
from server.apps.files.logic.thumbnail_operations import thumbnail_name
from server.apps.files.models import File

logger = logging.getLogger(__name__)


def referenced_blob_names(widths: tuple[int, ...]) -> set[str]:
    """Collect every blob name a File record can point at.

    Args:
        widths: Thumbnail widths derived from each image.

    Returns:
        Original blob names plus their thumbnail names.
    """
    names: set[str] = set()
    local_paths = File.objects.exclude(local_path='').values_list(
        'local_path',
        flat=True,
    )
    for local_path in local_paths:
        names.add(local_path)
        names.update(thumbnail_name(local_path, width) for width in widths)
    return names


def find_orphan_blobs(
    storage: BlobStorage,
    widths: tuple[int, ...],
    min_age: timedelta,
) -> list[str]:
    """List blobs that no File record references.

    Blobs younger than min_age are skipped: an upload writes its blob
    before inserting the record.

    Args:
        storage: Blob store to scan.
        widths: Thumbnail widths derived from each image.
        min_age: Minimum age of a blob before it counts as orphaned.

    Returns:
        Sorted orphan blob names.
    """
    _, blob_names = storage.listdir('')
    referenced = referenced_blob_names(widths)
    cutoff = timezone.now() - min_age

    orphans = [
        name for name in blob_names
        if name not in referenced
        and storage.get_modified_time(name) <= cutoff
    ]
    logger.debug('Found %d orphan blobs', len(orphans))
    return sorted(orphans)
