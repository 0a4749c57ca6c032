"""Management command to render thumbnails of uploaded images."""

import logging
from typing import Any, Final

from django.conf import settings
from django.core.management.base import BaseCommand

from server.apps.files.infrastructure.storage import BlobStorage
from server.apps.files.logic.thumbnail_operations import make_thumbnails
from server.apps.files.models import File, FileType

_DEFAULT_BATCH_SIZE: Final = 1000

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Render 500, 250 and 100 px wide variants of image uploads."""

    help = 'Generate missing thumbnails for image files'

    def add_arguments(self, parser: Any) -> None:
        """Add command line arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument(
            '--batch-size',
            type=int,
            default=_DEFAULT_BATCH_SIZE,
            help=f'Max images to process (default: {_DEFAULT_BATCH_SIZE})',
        )

    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the command.

        Args:
            args: Positional arguments (unused).
            options: Command options.
        """
        storage = BlobStorage(location=settings.FOLDER_PATH)
        storage.connect()
        widths = tuple(settings.THUMBNAIL_WIDTHS)

        images = File.objects.filter(
            type=FileType.IMAGE,
        ).exclude(local_path='')[:options['batch_size']]

        generated = 0
        failed = 0

        for image in images:
            try:
                generated += len(make_thumbnails(storage, image, widths))
            except Exception as exc:
                self.stderr.write(f'Failed to process {image.id}: {exc}')
                logger.exception('Failed to generate thumbnails: %s', image.id)
                failed += 1

        self.stdout.write(
            self.style.SUCCESS(
                f'Generated {generated} thumbnails, {failed} failed',
            ),
        )
