"""Business logic for image thumbnails.

Thumbnails are stored next to the original blob as
``<local_path>_<width>`` and served by the download operation when a
``size`` is requested.
"""

import logging
from io import BytesIO

from PIL import Image, UnidentifiedImageError

from server.apps.files.logic.interfaces import ContentStore
from server.apps.files.models import File, FileType

logger = logging.getLogger(__name__)


def thumbnail_name(local_path: str, width: int) -> str:
    """Build the blob name of a thumbnail.

    Args:
        local_path: Blob name of the original image.
        width: Thumbnail width in pixels.

    Returns:
        Blob name (e.g., '3f2a..._250').
    """
    return f'{local_path}_{width}'


def render_thumbnail(content: bytes, width: int) -> bytes:
    """Resize an image to the given width, keeping its aspect ratio.

    Args:
        content: Encoded source image.
        width: Target width in pixels.

    Returns:
        Encoded thumbnail in the source format (PNG if unknown).

    Raises:
        UnidentifiedImageError: If content is not a supported image.
    """
    with Image.open(BytesIO(content)) as image:
        image_format = image.format or 'PNG'
        height = max(1, round(image.height * width / image.width))
        resized = image.resize((width, height), Image.Resampling.LANCZOS)

    output = BytesIO()
    resized.save(output, format=image_format)
    return output.getvalue()


def make_thumbnails(
    storage: ContentStore,
    file_instance: File,
    widths: tuple[int, ...],
) -> list[str]:
    """Generate missing thumbnails for an image record.

    Existing thumbnails are left untouched, so running this twice is
    harmless.

    Args:
        storage: Blob store holding the original image.
        file_instance: Image record.
        widths: Thumbnail widths to generate.

    Returns:
        Names of the thumbnails written.

    Raises:
        ValueError: If the record is not an image.
        UnidentifiedImageError: If the stored content is not an image.
    """
    if file_instance.type != FileType.IMAGE:
        raise ValueError(f'Not an image: {file_instance.id}')

    missing = [
        width for width in widths
        if not storage.exists(
            thumbnail_name(file_instance.local_path, width),
        )
    ]
    if not missing:
        return []

    content = storage.read(file_instance.local_path)
    written = []
    for width in missing:
        name = thumbnail_name(file_instance.local_path, width)
        try:
            storage.write(render_thumbnail(content, width), name=name)
        except UnidentifiedImageError:
            logger.exception(
                'Cannot render thumbnail for file %s',
                file_instance.id,
            )
            raise
        written.append(name)

    logger.info(
        'Generated %d thumbnails for file %s',
        len(written),
        file_instance.id,
    )
    return written
