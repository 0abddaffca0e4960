import json
import base64
import binascii
import logging

from bedrock_image.errors import EmptyResultError, RemoteError
from bedrock_image.image_types import GenerationResult

logger = logging.getLogger(__name__)


def decode_response(raw_body: bytes, model_id: str) -> GenerationResult:
    """Decode a model response into a GenerationResult.

    The response is expected to look like ``{"images": ["<base64>", ...]}``
    or ``{"error": "<message>"}``. Only the first image is returned.

    Args:
        raw_body (bytes): Raw response body from the model
        model_id (str): Model the request was sent to

    Returns:
        GenerationResult: Decoded first image

    Raises:
        RemoteError: If the response carries an error
        EmptyResultError: If the response contains no image
        ValueError: If the body is not JSON or the image is not valid base64
    """
    response_body = json.loads(raw_body.decode("utf-8"))
    if not isinstance(response_body, dict):
        raise ValueError(f"Unexpected response body type: {type(response_body).__name__}")

    # Check for errors
    if response_body.get("error"):
        error_msg = response_body["error"]
        logger.error(f"Model returned an error: {error_msg}")
        raise RemoteError(f"Model error: {error_msg}")

    images = response_body.get("images")
    if not images or not images[0]:
        raise EmptyResultError("No image returned from model")

    base64_image = images[0]
    try:
        image_bytes = base64.b64decode(base64_image, validate=True)
    except (binascii.Error, TypeError) as e:
        raise ValueError(f"Invalid base64 image data: {str(e)}") from e

    logger.info(f"Decoded image of {len(image_bytes)} bytes from {model_id}")
    return GenerationResult(
        image_bytes=image_bytes,
        base64_image=base64_image,
        model_id=model_id
    )
