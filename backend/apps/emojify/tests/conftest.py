from types import MappingProxyType

import pytest
from PIL import Image

from apps.emojify.engine import EmojifyEngine
from fakes import EMOJI_COLORS, FakeClassifier, FakeObjectStore, image_bytes


@pytest.fixture
def emojis():
    """Solid color emoji images, one color per emoji."""
    return MappingProxyType({emoji: Image.new("RGBA", (8, 8), color) for emoji, color in EMOJI_COLORS.items()})


@pytest.fixture
def store():
    return FakeObjectStore(
        {
            "emoji-bucket": {
                "face.jpg": ("image/jpeg", image_bytes(image_format="JPEG")),
                "face.png": ("image/png", image_bytes()),
                "untyped.png": (None, image_bytes()),
            }
        }
    )


@pytest.fixture
def classifier():
    return FakeClassifier()


@pytest.fixture
def engine(store, classifier, emojis):
    return EmojifyEngine(store=store, classifier=classifier, emojis=emojis, bucket_name="emoji-bucket")
