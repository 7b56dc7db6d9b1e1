"""Face overlay compositing and image re-encoding."""
import io
import logging
from collections.abc import Iterable, Mapping

from PIL import Image

from apps.emojify.models import Emoji, FaceAnnotation
from apps.emojify.selector import select_emotion_emoji, select_hat_overlay

logger = logging.getLogger(__name__)

# Pillow formats that can store an alpha channel
ALPHA_FORMATS = {"PNG", "GIF", "WEBP", "TIFF"}


def _draw(canvas: Image.Image, emoji: Image.Image, position: tuple[int, int], size: tuple[int, int]) -> None:
    width, height = size
    if width <= 0 or height <= 0:
        logger.debug(f"Skipping overlay with empty size {size} at {position}")
        return
    x, y = position
    # alpha_composite rejects boxes outside the canvas, so crop to the visible part
    left, top = max(0, -x), max(0, -y)
    right, bottom = min(width, canvas.width - x), min(height, canvas.height - y)
    if right <= left or bottom <= top:
        return
    overlay = emoji.resize((width, height))
    canvas.alpha_composite(overlay, dest=(x + left, y + top), source=(left, top, right, bottom))


def composite(
    image: Image.Image,
    annotations: Iterable[FaceAnnotation],
    emojis: Mapping[Emoji, Image.Image],
    hat_overlay: bool = False,
) -> Image.Image:
    """
    Draw an emoji over every annotated face.

    Box geometry follows the Vision vertex order: width is taken from
    vertices 0 and 1, height from vertices 0 and 2, and the emoji is anchored
    at (x0, y1). Faces are drawn in annotation order, so later faces cover
    earlier ones where they overlap.

    Returns an RGBA copy; the source image is left untouched.
    """
    canvas = image.convert("RGBA")
    for annotation in annotations:
        (x0, y0), (x1, y1), (_, y2) = annotation.bounding_poly[:3]
        width = x1 - x0
        height = y2 - y0
        emoji = select_emotion_emoji(annotation)
        _draw(canvas, emojis[emoji], (x0, y1), (width, height))

        if hat_overlay and select_hat_overlay(annotation):
            hat_height = height // 2
            _draw(canvas, emojis[Emoji.HAT], (x0, y1 - hat_height), (width, hat_height))
    return canvas


def encode_image(image: Image.Image, subtype: str) -> bytes:
    """Encode an image in the format named by a MIME subtype (e.g. "jpeg")."""
    image_format = Image.registered_extensions().get(f".{subtype.lower()}")
    if image_format is None:
        raise ValueError(f"Unsupported image type: {subtype}")
    if image_format not in ALPHA_FORMATS and image.mode != "RGB":
        image = image.convert("RGB")

    buffer = io.BytesIO()
    image.save(buffer, format=image_format)
    return buffer.getvalue()
