"""
Text overlay module for drawing shadowed labels onto profile images.

The drawing surface mirrors the small slice of HTML canvas text state the
profile layouts rely on (font, fill style, alignment, baseline and shadow),
backed by a Pillow RGBA image.
"""

import base64
from dataclasses import dataclass
from io import BytesIO
from typing import Dict, Tuple

from PIL import Image, ImageDraw, ImageFilter, ImageFont


TRANSPARENT = (0, 0, 0, 0)
SHADOW_COLOR = (0, 0, 0, 204)  # rgba(0, 0, 0, 0.8)
SHADOW_BLUR = 10

# Canvas alignment/baseline names -> Pillow anchor characters
HORIZONTAL_ANCHORS = {
    'left': 'l',
    'start': 'l',
    'center': 'm',
    'right': 'r',
    'end': 'r',
}
VERTICAL_ANCHORS = {
    'top': 'a',
    'hanging': 'a',
    'middle': 'm',
    'alphabetic': 's',
    'ideographic': 'd',
    'bottom': 'd',
}

FONT_CANDIDATES = {
    'bold': [
        "arialbd.ttf",
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
    ],
    'normal': [
        "arial.ttf",
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    ],
}


@dataclass(frozen=True)
class FontDescriptor:
    size: int
    weight: str = 'bold'
    family: str = 'sans-serif'

    def __str__(self) -> str:
        return f"{self.weight} {self.size}px {self.family}"


@dataclass(frozen=True)
class TextSpec:
    """A fully resolved instruction for drawing one label."""
    text: str
    x: float
    y: float
    font: FontDescriptor
    color: str
    align: str
    baseline: str


_FONT_CACHE: Dict[FontDescriptor, ImageFont.FreeTypeFont] = {}


def get_font(descriptor: FontDescriptor) -> ImageFont.FreeTypeFont:
    """
    Resolve a font descriptor to a Pillow font, cached per descriptor.

    The generic ``sans-serif`` family tries a few common system fonts and
    falls back to Pillow's bundled scalable font.
    """
    if descriptor in _FONT_CACHE:
        return _FONT_CACHE[descriptor]

    if descriptor.family == 'sans-serif':
        candidates = FONT_CANDIDATES.get(descriptor.weight, FONT_CANDIDATES['normal'])
    else:
        candidates = [f"{descriptor.family}.ttf"]

    font = None
    for path in candidates:
        try:
            font = ImageFont.truetype(path, descriptor.size)
            break
        except (IOError, OSError):
            continue

    if font is None:
        font = ImageFont.load_default(descriptor.size)

    _FONT_CACHE[descriptor] = font
    return font


def text_anchor(align: str, baseline: str) -> str:
    """Translate canvas alignment and baseline into a Pillow anchor."""
    try:
        return HORIZONTAL_ANCHORS[align] + VERTICAL_ANCHORS[baseline]
    except KeyError as e:
        raise ValueError(f"Unsupported text alignment/baseline: {align}/{baseline}") from e


class DrawingSurface:
    """An RGBA canvas carrying canvas-style text and shadow state."""

    def __init__(self, width: int, height: int):
        self.image = Image.new('RGBA', (width, height), TRANSPARENT)
        self.width = width
        self.height = height

        self.font = FontDescriptor(10, weight='normal')
        self.fill_style = '#000000'
        self.text_align = 'start'
        self.text_baseline = 'alphabetic'

        self.shadow_color: Tuple[int, int, int, int] = TRANSPARENT
        self.shadow_blur = 0
        self.shadow_offset_x = 0
        self.shadow_offset_y = 0

    @classmethod
    def from_image(cls, img: Image.Image) -> 'DrawingSurface':
        """Create a surface the size of ``img`` with ``img`` as its base layer."""
        surface = cls(img.width, img.height)
        surface.image.paste(img.convert('RGBA'), (0, 0))
        return surface

    def _casts_shadow(self) -> bool:
        if self.shadow_color[3] == 0:
            return False
        return bool(self.shadow_blur or self.shadow_offset_x or self.shadow_offset_y)

    def fill_text(self, text: str, x: float, y: float) -> None:
        font = get_font(self.font)
        anchor = text_anchor(self.text_align, self.text_baseline)

        if self._casts_shadow():
            layer = Image.new('RGBA', self.image.size, TRANSPARENT)
            ImageDraw.Draw(layer).text(
                (x + self.shadow_offset_x, y + self.shadow_offset_y),
                text,
                font=font,
                fill=self.shadow_color,
                anchor=anchor,
            )
            if self.shadow_blur > 0:
                layer = layer.filter(ImageFilter.GaussianBlur(self.shadow_blur / 2))
            self.image.alpha_composite(layer)

        ImageDraw.Draw(self.image).text((x, y), text, font=font, fill=self.fill_style, anchor=anchor)

    def to_png_bytes(self) -> bytes:
        output = BytesIO()
        self.image.save(output, format='PNG')
        return output.getvalue()

    def to_data_url(self) -> str:
        encoded = base64.b64encode(self.to_png_bytes()).decode('ascii')
        return f"data:image/png;base64,{encoded}"


def draw_text_with_shadow(
    surface: DrawingSurface,
    text: str,
    x: float,
    y: float,
    font: FontDescriptor,
    fill_style: str,
    text_align: str,
    text_baseline: str,
) -> None:
    """
    Draw a label with a soft dark shadow so it stays legible on any background.

    Args:
        surface: The drawing surface to paint on
        text: The label to draw
        x: Anchor x coordinate in pixels
        y: Anchor y coordinate in pixels
        font: Font descriptor (weight, size, family)
        fill_style: Text color
        text_align: One of left, center, right
        text_baseline: Vertical anchor, e.g. middle, top, bottom
    """
    surface.font = font
    surface.fill_style = fill_style
    surface.text_align = text_align
    surface.text_baseline = text_baseline

    surface.shadow_color = SHADOW_COLOR
    surface.shadow_blur = SHADOW_BLUR
    surface.shadow_offset_x = 0
    surface.shadow_offset_y = 0

    try:
        surface.fill_text(text, x, y)
    finally:
        # Reset shadow for the next draw on this surface
        surface.shadow_color = TRANSPARENT
        surface.shadow_blur = 0


def draw_text_spec(surface: DrawingSurface, spec: TextSpec) -> None:
    draw_text_with_shadow(
        surface, spec.text, spec.x, spec.y, spec.font, spec.color, spec.align, spec.baseline
    )
