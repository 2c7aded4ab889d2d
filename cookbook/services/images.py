"""Upload staging and image resizing for avatars and recipe thumbnails."""

import logging
import shutil
import uuid
from dataclasses import dataclass
from pathlib import Path

from fastapi import UploadFile
from PIL import Image, UnidentifiedImageError

from cookbook.config import Settings
from cookbook.exceptions import ValidationFailed

logger = logging.getLogger(__name__)

# Content type -> file extension
ALLOWED_IMAGE_TYPES = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}

AVATAR_SIZE = (250, 250)
THUMB_SIZE = (357, 344)

AVATARS_FOLDER = "avatars"
THUMBS_FOLDER = "thumbs"


@dataclass
class StagedImage:
    """An uploaded image written to the staging directory."""

    path: Path
    extension: str

    def discard(self) -> None:
        self.path.unlink(missing_ok=True)


def safe_file_stem(text: str) -> str:
    """Turn free text into a file-name fragment ("Apple pie!" -> "Apple_pie")."""
    kept = "".join(c for c in text.strip() if c.isalnum() or c in (" ", "-", "_"))
    return kept.replace(" ", "_")[:60] or "untitled"


class ImageService:
    """Stages uploads, resizes them and moves them under the static directory."""

    def __init__(self, settings: Settings):
        self.settings = settings

    async def stage(self, upload: UploadFile | None) -> StagedImage:
        """Validate an upload and write it to the staging directory.

        Raises:
            ValidationFailed: missing file, wrong type, too large.
        """
        if upload is None or not upload.filename:
            raise ValidationFailed("File is required")

        extension = ALLOWED_IMAGE_TYPES.get(upload.content_type or "")
        if extension is None:
            raise ValidationFailed(
                f"Invalid file type. Allowed types: {', '.join(sorted(ALLOWED_IMAGE_TYPES))}"
            )

        # Read one byte past the limit so oversized files are detected without buffering them
        data = await upload.read(self.settings.max_upload_bytes + 1)
        if len(data) > self.settings.max_upload_bytes:
            raise ValidationFailed(
                f"File too large. Maximum size is {self.settings.max_upload_bytes} bytes."
            )

        tmp_dir = Path(self.settings.upload_tmp_dir)
        tmp_dir.mkdir(parents=True, exist_ok=True)
        path = tmp_dir / f"{uuid.uuid4().hex}.{extension}"
        path.write_bytes(data)
        return StagedImage(path=path, extension=extension)

    def publish(self, staged: StagedImage, folder: str, stem: str, size: tuple[int, int]) -> str:
        """Resize a staged image, move it into ``<static_dir>/<folder>`` and return its URL."""
        try:
            with Image.open(staged.path) as image:
                image.load()
                resized = _prepare_for_format(image, staged.extension).resize(
                    size, Image.Resampling.LANCZOS
                )
        except (UnidentifiedImageError, OSError) as e:
            staged.discard()
            logger.info(f"Rejected unreadable upload {staged.path.name}: {e}")
            raise ValidationFailed("Invalid image file") from None

        resized.save(staged.path)

        file_name = f"{stem}.{staged.extension}"
        target_dir = Path(self.settings.static_dir) / folder
        target_dir.mkdir(parents=True, exist_ok=True)
        shutil.move(str(staged.path), target_dir / file_name)

        logger.info(f"Stored image {folder}/{file_name}")
        return self.settings.public_url(f"{folder}/{file_name}")

    def publish_avatar(self, staged: StagedImage, user_id: int) -> str:
        return self.publish(staged, AVATARS_FOLDER, f"{user_id}_avatar", AVATAR_SIZE)

    def publish_thumb(self, staged: StagedImage, owner_id: int, title: str) -> str:
        return self.publish(
            staged,
            THUMBS_FOLDER,
            f"{owner_id}_{safe_file_stem(title)}_{uuid.uuid4().hex[:8]}",
            THUMB_SIZE,
        )

    def discard_published(self, folder: str, url: str) -> None:
        """Remove a file stored by ``publish``, given the URL it returned."""
        file_name = url.rsplit("/", 1)[-1]
        (Path(self.settings.static_dir) / folder / file_name).unlink(missing_ok=True)
        logger.info(f"Removed image {folder}/{file_name}")


def _prepare_for_format(image: Image.Image, extension: str) -> Image.Image:
    """JPEG has no alpha channel: flatten transparent images onto white."""
    if extension != "jpg" or image.mode == "RGB":
        return image
    background = Image.new("RGB", image.size, (255, 255, 255))
    if image.mode == "RGBA":
        background.paste(image, mask=image.split()[-1])
    else:
        background.paste(image.convert("RGB"))
    return background
