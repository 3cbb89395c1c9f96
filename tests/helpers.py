"""Template images shared by the test modules."""

from __future__ import annotations

from PIL import Image

TEMPLATE_SIZE = (640, 900)
TEMPLATE_COLOR = (40, 60, 90, 255)


def make_template(size=TEMPLATE_SIZE, color=TEMPLATE_COLOR) -> Image.Image:
    return Image.new("RGBA", size, color)
