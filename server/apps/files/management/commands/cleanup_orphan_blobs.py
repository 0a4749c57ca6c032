"""Management command to delete blobs no File record points at."""

import logging
from datetime import timedelta
from typing import Any, Final

from django.conf import settings
from django.core.management.base import BaseCommand

from server.apps.files.infrastructure.storage import BlobStorage
from server.apps.files.logic.blob_operations import find_orphan_blobs

_DEFAULT_MIN_AGE_MINUTES: Final = 60

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Delete blobs left behind by failed uploads."""

    help = 'Delete orphaned blobs from the local blob store'

    def add_arguments(self, parser: Any) -> None:
        """Add command line arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be deleted without deleting',
        )
        parser.add_argument(
            '--min-age',
            type=int,
            default=_DEFAULT_MIN_AGE_MINUTES,
            help=(
                'Only delete blobs older than this many minutes '
                f'(default: {_DEFAULT_MIN_AGE_MINUTES})'
            ),
        )

    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the cleanup command.

        Args:
            args: Positional arguments (unused).
            options: Command options.
        """
        dry_run = options['dry_run']
        storage = BlobStorage(location=settings.FOLDER_PATH)
        storage.connect()

        orphans = find_orphan_blobs(
            storage,
            widths=tuple(settings.THUMBNAIL_WIDTHS),
            min_age=timedelta(minutes=options['min_age']),
        )

        count = 0
        failed = 0

        for blob_name in orphans:
            if dry_run:
                self.stdout.write(f'Would delete: {blob_name}')
                count += 1
                continue

            try:
                storage.delete(blob_name)
                count += 1
                logger.info('Deleted orphan blob: %s', blob_name)
            except Exception as exc:
                self.stderr.write(f'Failed to delete {blob_name}: {exc}')
                logger.exception('Failed to delete orphan blob: %s', blob_name)
                failed += 1

        if dry_run:
            self.stdout.write(
                self.style.SUCCESS(f'Would delete {count} orphan blobs'),
            )
        else:
            self.stdout.write(
                self.style.SUCCESS(
                    f'Deleted {count} orphan blobs, {failed} failed',
                ),
            )
