"""Post-processing for generated recipe images.

Both providers hand back image data in different shapes (raw bytes from
Imagen, base64 or data URLs from OpenRouter). prepare_image_payload() turns
any of them into the base64 string stored on Recipe.image_base64:

1. Decode to bytes (bytes, data URL or plain base64)
2. Validate the bytes are a real image (JPEG/PNG/WEBP)
3. Optionally compress for storage (COMPRESS_IMG)
4. Base64-encode

Every step degrades to None: an unusable image never fails a recipe.
"""

import base64
from io import BytesIO
from typing import Optional

import filetype
from PIL import Image

from pantry_chef.utils.config import config
from pantry_chef.utils.errors import safe_execute_sync
from pantry_chef.utils.logger import logger


SUPPORTED_IMAGE_TYPES = ("jpg", "jpeg", "png", "webp")


def decode_image_data(image_data: str | bytes | None) -> Optional[bytes]:
    """Get image bytes from raw bytes, a data URL or a plain base64 string.

    Returns:
        Image bytes, or None if the data is empty or not decodable.
    """
    if not image_data:
        return None

    if isinstance(image_data, bytes):
        return image_data

    if isinstance(image_data, str):
        encoded = image_data.split(",", 1)[1] if image_data.startswith("data:") else image_data

        def _decode():
            return base64.b64decode(encoded, validate=True)

        return safe_execute_sync(_decode, "Decode base64 image", log_level="warning", default_return=None)

    return None


def validate_image_format(image_bytes: bytes) -> bool:
    """Check the magic bytes identify a supported image type (JPEG, PNG, WEBP)."""
    kind = filetype.guess(image_bytes)
    if kind is None or kind.extension not in SUPPORTED_IMAGE_TYPES:
        logger.warning(f"Generated image has unsupported format: {kind.extension if kind else 'unknown'}")
        return False
    return True


def compress_image(image_bytes: bytes, max_width: Optional[int] = None) -> bytes:
    """Compress image for storage using Pillow.

    Uses JPEG format with quality=85 + optimize + progressive.
    Resizes oversized images and converts color modes to RGB.
    Only compresses if image size is above COMPRESS_IMG_THRESHOLD_KB.

    Args:
        image_bytes: Raw image bytes to compress
        max_width: Maximum image width in pixels (default: IMAGE_MAX_WIDTH)

    Returns:
        Compressed image bytes (or original if below threshold or compression fails)
    """
    max_width = max_width or config.IMAGE_MAX_WIDTH

    size_kb = len(image_bytes) / 1024
    if size_kb < config.COMPRESS_IMG_THRESHOLD_KB:
        logger.debug(
            f"Image size {size_kb:.1f}KB below compression threshold "
            f"({config.COMPRESS_IMG_THRESHOLD_KB}KB), skipping compression"
        )
        return image_bytes

    def _compress():
        img = Image.open(BytesIO(image_bytes))

        # Convert RGBA/LA/P to RGB for JPEG output
        if img.mode in ("RGBA", "LA", "P"):
            img = img.convert("RGBA")
            rgb_img = Image.new("RGB", img.size, (255, 255, 255))
            rgb_img.paste(img, mask=img.split()[-1])
            img = rgb_img
        elif img.mode != "RGB":
            img = img.convert("RGB")

        if img.width > max_width:
            ratio = max_width / img.width
            img = img.resize((max_width, int(img.height * ratio)), Image.Resampling.LANCZOS)

        output = BytesIO()
        img.save(output, format="JPEG", quality=85, optimize=True, progressive=True)
        compressed_bytes = output.getvalue()

        # Keep the original if re-encoding did not help
        if len(compressed_bytes) >= len(image_bytes):
            return image_bytes

        logger.debug(
            f"Image compressed: {size_kb:.1f}KB → {len(compressed_bytes) / 1024:.1f}KB "
            f"({(1 - len(compressed_bytes) / len(image_bytes)) * 100:.1f}% reduction)"
        )
        return compressed_bytes

    return safe_execute_sync(_compress, "Image compression", log_level="warning", default_return=image_bytes)


def prepare_image_payload(image_data: str | bytes | None) -> Optional[str]:
    """Decode, validate, optionally compress and base64-encode a generated image.

    Returns:
        Base64 string ready for Recipe.image_base64, or None if the data is unusable.
    """
    image_bytes = decode_image_data(image_data)
    if not image_bytes:
        return None

    if not validate_image_format(image_bytes):
        return None

    if config.COMPRESS_IMG:
        image_bytes = compress_image(image_bytes)

    return base64.b64encode(image_bytes).decode("ascii")
