"""
File helpers for feeding images to the generator and saving its results.

The generator itself only works with base64 strings; these helpers are the
glue between it and the filesystem.
"""
import os
import base64
import logging
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ('jpeg', 'png')


def verify_image_format(image_path: str) -> str:
    """Verify that the image is in JPEG or PNG format.

    Args:
        image_path (str): Path to the image file

    Returns:
        str: Detected format ('jpeg' or 'png')

    Raises:
        ValueError: If the file is missing or not a JPEG or PNG image
    """
    if not os.path.exists(image_path):
        raise ValueError(f"Image file not found: {image_path}")

    try:
        with Image.open(image_path) as img:
            actual_type = (img.format or "").lower()
    except UnidentifiedImageError as e:
        raise ValueError(f"Could not determine image format: {str(e)}") from e
    logger.info(f"Detected image type: {actual_type}")

    if actual_type not in SUPPORTED_FORMATS:
        raise ValueError(f"Invalid image format. Expected JPEG or PNG, but got: {actual_type}")
    return actual_type


def read_image_as_base64(image_path: str) -> str:
    """Read an image file and return its base64 encoding."""
    verify_image_format(image_path)
    with open(image_path, "rb") as f:
        return base64.b64encode(f.read()).decode('utf8')


def write_image_from_base64(base64_data: str, output_path: str) -> str:
    """Decode base64 image data and write it to output_path.

    Parent directories are created as needed. The bytes are written as-is.

    Returns:
        str: The path written
    """
    parent = os.path.dirname(output_path)
    if parent:
        os.makedirs(parent, exist_ok=True)

    with open(output_path, "wb") as f:
        f.write(base64.b64decode(base64_data))

    logger.info(f"Image saved to: {output_path}")
    return output_path
