"""Shared test fixtures."""

from __future__ import annotations

import pytest
from PIL import Image

import image_loader
from tests.helpers import make_template


@pytest.fixture
def template_image() -> Image.Image:
    return make_template()


@pytest.fixture
def loaded_urls(monkeypatch) -> list[str]:
    """Serve a solid template for every URL and record what was requested."""
    urls: list[str] = []

    def fake_load_image(url: str) -> Image.Image:
        urls.append(url)
        return make_template()

    monkeypatch.setattr(image_loader, "load_image", fake_load_image)
    return urls


@pytest.fixture
def animal_data() -> dict[str, float]:
    return {"lobo": 10, "aguia": 55, "tubarao": 20, "gato": 15}


@pytest.fixture
def brain_data() -> dict[str, float]:
    return {"pensante": 30, "atuante": 20, "razao": 25, "emocao": 25}
