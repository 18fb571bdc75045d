"""Menu image upload — validate, store and attach a photo to a menu item."""

import time

import structlog
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from friendhome.accounts.roles import ensure_admin
from friendhome.menu.management import AttachMenuImage
from friendhome.menu.menu_item import MenuItem
from friendhome.menu.storage import get_storage
from friendhome.settings import custom_settings

logger = structlog.get_logger(__name__)

# Stored file extension per accepted content type. StaticFiles serves the
# file with the media type implied by this extension.
IMAGE_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}


def _media_type(content_type: str | None) -> str:
    return (content_type or "").split(";", 1)[0].strip().lower()


def validate_image(content_type: str | None, size: int) -> None:
    media_type = _media_type(content_type)
    if not media_type.startswith("image/"):
        raise ValidationError({"image": ["Please select an image file"]})
    if media_type not in IMAGE_EXTENSIONS:
        raise ValidationError({"image": ["Please upload a JPEG, PNG, WebP or GIF image"]})
    if size == 0:
        raise ValidationError({"image": ["Image is empty"]})

    max_bytes = int(custom_settings()["max_image_bytes"])
    if size > max_bytes:
        raise ValidationError({"image": [f"Image size should be less than {max_bytes // (1024 * 1024)}MB"]})


def upload_menu_image(actor_id, menu_item_id, data: bytes, content_type: str) -> str:
    """Store ``data`` as the photo of ``menu_item_id`` and return its public URL.

    The object is named ``{menu_item_id}-{epoch_ms}.{ext}`` so re-uploads never
    collide with the previous photo.
    """
    ensure_admin(actor_id)
    validate_image(content_type, len(data))

    # Fail fast on unknown items before writing anything to storage
    current_domain.repository_for(MenuItem).get(menu_item_id)

    path = f"{menu_item_id}-{int(time.time() * 1000)}.{IMAGE_EXTENSIONS[_media_type(content_type)]}"
    storage = get_storage()
    storage.upload(path, data, content_type)
    public_url = storage.public_url(path)

    current_domain.process(
        AttachMenuImage(actor_id=actor_id, menu_item_id=menu_item_id, image_url=public_url),
        asynchronous=False,
    )
    logger.info("Menu image uploaded", menu_item_id=str(menu_item_id), path=path, size=len(data))
    return public_url
