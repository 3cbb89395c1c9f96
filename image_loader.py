"""
Base image loading for the profile templates.
"""

import os
from io import BytesIO

import requests
from PIL import Image

IMAGE_DOWNLOAD_TIMEOUT = int(os.environ.get("IMAGE_DOWNLOAD_TIMEOUT", 30))


class ImageLoadError(Exception):
    """Raised when a base image cannot be fetched or decoded."""


def download_image(url: str) -> bytes:
    """
    Download an image from a URL.

    Args:
        url: The URL of the image to download

    Returns:
        The image data as bytes
    """
    response = requests.get(url, timeout=IMAGE_DOWNLOAD_TIMEOUT)
    response.raise_for_status()
    return response.content


def load_image(url: str) -> Image.Image:
    """
    Download and decode a base image.

    Args:
        url: The URL of the template image

    Returns:
        The decoded image in RGBA mode
    """
    try:
        image_bytes = download_image(url)
    except requests.RequestException as e:
        raise ImageLoadError(f"Failed to load image from {url}: {str(e)}") from e

    try:
        img = Image.open(BytesIO(image_bytes))
        img.load()
    except (IOError, OSError, Image.DecompressionBombError) as e:
        raise ImageLoadError(f"Failed to load image from {url}: {str(e)}") from e

    return img.convert('RGBA')
