"""Emoji overlay images bundled with the service."""
import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from PIL import Image

from apps.emojify.models import Emoji

logger = logging.getLogger(__name__)


def load_emoji_table(emojis_dir: Path) -> Mapping[Emoji, Image.Image]:
    """
    Load one `<emoji>.png` per Emoji from `emojis_dir`.

    Raises FileNotFoundError when any image is missing. The returned mapping
    is read-only and is meant to be shared by all requests.
    """
    emojis_dir = Path(emojis_dir)
    table: dict[Emoji, Image.Image] = {}
    for emoji in Emoji:
        path = emojis_dir / f"{emoji.value}.png"
        if not path.is_file():
            raise FileNotFoundError(f"Emoji image not found: {path}")
        with Image.open(path) as img:
            table[emoji] = img.convert("RGBA")

    logger.info(f"Loaded {len(table)} emoji images from {emojis_dir}")
    return MappingProxyType(table)
