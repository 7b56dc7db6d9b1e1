import io

import pytest
from PIL import Image

from apps.emojify.compositor import composite, encode_image
from apps.emojify.models import Emoji, Likelihood
from fakes import BACKGROUND, EMOJI_COLORS, make_face

WHITE = BACKGROUND + (255,)


@pytest.fixture
def source():
    return Image.new("RGB", (100, 100), BACKGROUND)


def test_emoji_scaled_to_face_box(source, emojis):
    face = make_face(joy=Likelihood.VERY_LIKELY)
    result = composite(source, [face], emojis)

    joy = EMOJI_COLORS[Emoji.JOY]
    # 40 x 50 box anchored at (10, 10)
    assert result.getpixel((10, 10)) == joy
    assert result.getpixel((49, 59)) == joy
    assert result.getpixel((50, 59)) == WHITE
    assert result.getpixel((49, 60)) == WHITE
    assert result.getpixel((9, 9)) == WHITE


def test_anchor_uses_second_vertex_y(source, emojis):
    face = make_face(points=((10, 20), (50, 25), (50, 70), (10, 70)), anger=Likelihood.LIKELY)
    result = composite(source, [face], emojis)

    anger = EMOJI_COLORS[Emoji.ANGER]
    assert result.getpixel((10, 24)) == WHITE
    assert result.getpixel((10, 25)) == anger
    # height is y2 - y0 = 50, starting from y1 = 25
    assert result.getpixel((10, 74)) == anger
    assert result.getpixel((10, 75)) == WHITE


def test_later_face_drawn_on_top(source, emojis):
    first = make_face(joy=Likelihood.VERY_LIKELY)
    second = make_face(points=((30, 30), (70, 30), (70, 80), (30, 80)), anger=Likelihood.VERY_LIKELY)
    result = composite(source, [first, second], emojis)

    assert result.getpixel((20, 20)) == EMOJI_COLORS[Emoji.JOY]
    assert result.getpixel((40, 40)) == EMOJI_COLORS[Emoji.ANGER]


def test_face_without_emotion_gets_none_emoji(source, emojis):
    result = composite(source, [make_face()], emojis)
    assert result.getpixel((20, 20)) == EMOJI_COLORS[Emoji.NONE]


def test_source_image_untouched(source, emojis):
    composite(source, [make_face(joy=Likelihood.VERY_LIKELY)], emojis)
    assert source.getpixel((20, 20)) == BACKGROUND


def test_empty_box_draws_nothing(source, emojis):
    face = make_face(points=((10, 10), (10, 10), (10, 60), (10, 60)), joy=Likelihood.VERY_LIKELY)
    result = composite(source, [face], emojis)
    assert result.getpixel((10, 10)) == WHITE


def test_box_past_border_is_clipped(source, emojis):
    face = make_face(points=((80, 80), (120, 80), (120, 130), (80, 130)), joy=Likelihood.VERY_LIKELY)
    result = composite(source, [face], emojis)
    assert result.size == (100, 100)
    assert result.getpixel((99, 99)) == EMOJI_COLORS[Emoji.JOY]


def test_hat_layered_only_when_enabled(source, emojis):
    face = make_face(points=((10, 40), (50, 40), (50, 80), (10, 80)), joy=Likelihood.VERY_LIKELY, headwear=Likelihood.LIKELY)

    plain = composite(source, [face], emojis)
    assert plain.getpixel((20, 30)) == WHITE

    with_hat = composite(source, [face], emojis, hat_overlay=True)
    # 40 x 20 hat resting on top of the face box
    assert with_hat.getpixel((20, 20)) == EMOJI_COLORS[Emoji.HAT]
    assert with_hat.getpixel((20, 39)) == EMOJI_COLORS[Emoji.HAT]
    assert with_hat.getpixel((20, 19)) == WHITE
    assert with_hat.getpixel((20, 40)) == EMOJI_COLORS[Emoji.JOY]


def test_encode_jpeg_drops_alpha(source, emojis):
    result = composite(source, [make_face(joy=Likelihood.VERY_LIKELY)], emojis)
    with Image.open(io.BytesIO(encode_image(result, "jpeg"))) as decoded:
        assert decoded.format == "JPEG"
        assert decoded.mode == "RGB"
        assert decoded.size == (100, 100)


def test_encode_png_keeps_pixels(source, emojis):
    result = composite(source, [make_face(joy=Likelihood.VERY_LIKELY)], emojis)
    with Image.open(io.BytesIO(encode_image(result, "PNG"))) as decoded:
        assert decoded.format == "PNG"
        assert decoded.convert("RGBA").getpixel((10, 10)) == EMOJI_COLORS[Emoji.JOY]


def test_encode_unknown_type(source):
    with pytest.raises(ValueError, match="Unsupported image type"):
        encode_image(source, "x-unknown")


def test_translucent_emoji_keeps_photo_opaque(source):
    emojis = {emoji: Image.new("RGBA", (8, 8), (255, 0, 0, 128)) for emoji in Emoji}
    result = composite(source, [make_face(joy=Likelihood.VERY_LIKELY)], emojis)

    r, g, b, a = result.getpixel((20, 20))
    assert a == 255
    assert r == 255 and 120 <= g <= 135 and 120 <= b <= 135
    assert min(result.getchannel("A").getdata()) == 255

    with Image.open(io.BytesIO(encode_image(result, "png"))) as decoded:
        assert decoded.getchannel("A").getextrema() == (255, 255)


def test_box_before_origin_is_clipped(source, emojis):
    face = make_face(points=((-20, -20), (20, -20), (20, 30), (-20, 30)), joy=Likelihood.VERY_LIKELY)
    result = composite(source, [face], emojis)

    joy = EMOJI_COLORS[Emoji.JOY]
    assert result.getpixel((0, 0)) == joy
    assert result.getpixel((19, 29)) == joy
    assert result.getpixel((20, 0)) == WHITE
    assert result.getpixel((0, 30)) == WHITE


def test_box_outside_image_draws_nothing(source, emojis):
    face = make_face(points=((150, 150), (190, 150), (190, 200), (150, 200)), joy=Likelihood.VERY_LIKELY)
    result = composite(source, [face], emojis)
    assert result.getextrema() == ((255, 255),) * 4
