"""
Exceptions raised while building, sending and decoding image generation requests.
"""


class ImageGenerationError(Exception):
    """Base class for all image generation errors."""


class InvalidTaskError(ImageGenerationError, ValueError):
    """The task type is not one of the supported task kinds."""


class InvalidRequestError(ImageGenerationError, ValueError):
    """The request is missing a required field or combines exclusive ones."""


class RemoteError(ImageGenerationError):
    """The model response carried an error message."""


class EmptyResultError(ImageGenerationError):
    """The model response contained no image."""


class GenerationFailedError(ImageGenerationError):
    """Wraps any failure raised while invoking the model or decoding its response."""
