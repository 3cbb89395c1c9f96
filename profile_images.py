"""
Profile image generation: writes the animal and brain percentages onto
their background templates.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

import image_loader
from text_overlay import DrawingSurface, FontDescriptor, TextSpec, draw_text_spec


ANIMAL_KEYS = ('lobo', 'aguia', 'tubarao', 'gato')
BRAIN_KEYS = ('pensante', 'atuante', 'razao', 'emocao')

FONT_FAMILY = 'sans-serif'
TEXT_BASELINE = 'middle'

ANIMAL_NORMAL_FONT = FontDescriptor(36, 'bold', FONT_FAMILY)
ANIMAL_HIGHEST_FONT = FontDescriptor(40, 'bold', FONT_FAMILY)
ANIMAL_NORMAL_COLOR = '#FFFFFF'
ANIMAL_HIGHEST_COLOR = '#FFED00'

BRAIN_FONT = FontDescriptor(44, 'bold', FONT_FAMILY)
BRAIN_COLOR = '#FFFFFF'


@dataclass(frozen=True)
class LayoutEntry:
    x: int
    y: int
    align: str


ANIMAL_LAYOUT = MappingProxyType({
    'lobo':    LayoutEntry(120, 280, 'right'),
    'aguia':   LayoutEntry(420, 280, 'right'),
    'tubarao': LayoutEntry(120, 630, 'right'),
    'gato':    LayoutEntry(420, 630, 'right'),
})

BRAIN_LAYOUT = MappingProxyType({
    'pensante': LayoutEntry(320, 240, 'center'),
    'atuante':  LayoutEntry(320, 780, 'center'),
    'razao':    LayoutEntry(48, 450, 'left'),
    'emocao':   LayoutEntry(600, 450, 'right'),
})


class RenderError(Exception):
    """A renderer failure, labelled with the stage that produced it."""

    def __init__(self, context: str, cause: BaseException):
        self.context = context
        self.cause = cause
        super().__init__(f"Error during {context}: {cause}")


def format_percentage(value) -> str:
    if value is None:
        return 'null%'
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value}%"


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def highest_entry(data: Mapping[str, float], keys: Iterable[str]) -> Optional[str]:
    """
    Return the key holding the largest value.

    Keys are visited in the given order and only a strictly greater value
    replaces the current leader, so the first key wins ties. Values that are
    not numbers are drawn but never compared.
    """
    highest_name = None
    max_percentage = -1
    for name in keys:
        if name not in data:
            continue
        percentage = data[name]
        if not _is_number(percentage):
            continue
        if percentage > max_percentage:
            max_percentage = percentage
            highest_name = name
    return highest_name


def animal_text_specs(data: Mapping[str, float]):
    highest_name = highest_entry(data, ANIMAL_KEYS)
    for name in ANIMAL_KEYS:
        if name not in data:
            continue
        is_highest = name == highest_name
        pos = ANIMAL_LAYOUT[name]
        yield TextSpec(
            text=format_percentage(data[name]),
            x=pos.x,
            y=pos.y,
            font=ANIMAL_HIGHEST_FONT if is_highest else ANIMAL_NORMAL_FONT,
            color=ANIMAL_HIGHEST_COLOR if is_highest else ANIMAL_NORMAL_COLOR,
            align=pos.align,
            baseline=TEXT_BASELINE,
        )


def brain_text_specs(data: Mapping[str, float]):
    # Keys without a layout entry are ignored
    for name in BRAIN_KEYS:
        pos = BRAIN_LAYOUT.get(name)
        if pos is None or name not in data:
            continue
        yield TextSpec(
            text=format_percentage(data[name]),
            x=pos.x,
            y=pos.y,
            font=BRAIN_FONT,
            color=BRAIN_COLOR,
            align=pos.align,
            baseline=TEXT_BASELINE,
        )


def draw_animal_profile(surface: DrawingSurface, data: Mapping[str, float]) -> None:
    for spec in animal_text_specs(data):
        draw_text_spec(surface, spec)


def draw_brain_profile(surface: DrawingSurface, data: Mapping[str, float]) -> None:
    for spec in brain_text_specs(data):
        draw_text_spec(surface, spec)


def _render(context: str, base_image_url: str, data: Mapping[str, float], draw) -> str:
    try:
        img = image_loader.load_image(base_image_url)
        surface = DrawingSurface.from_image(img)
        draw(surface, data)
        return surface.to_data_url()
    except Exception as e:
        raise RenderError(context, e) from e


def generate_animal_image(base_image_url: str, data: Mapping[str, float]) -> str:
    """
    Render the animal profile onto its template.

    The highest percentage is drawn larger and in yellow.

    Args:
        base_image_url: URL of the animal template image
        data: Percentages keyed by lobo, aguia, tubarao and gato

    Returns:
        The composited image as a PNG data URI
    """
    return _render('animal image processing', base_image_url, data, draw_animal_profile)


def generate_brain_image(base_image_url: str, data: Mapping[str, float]) -> str:
    """
    Render the brain profile onto its template, every value styled alike.

    Args:
        base_image_url: URL of the brain template image
        data: Percentages keyed by pensante, atuante, razao and emocao

    Returns:
        The composited image as a PNG data URI
    """
    return _render('brain image processing', base_image_url, data, draw_brain_profile)
