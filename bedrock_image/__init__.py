"""Build, send and decode Amazon Bedrock image generation requests."""

from bedrock_image.config import GeneratorSettings
from bedrock_image.errors import (
    EmptyResultError,
    GenerationFailedError,
    ImageGenerationError,
    InvalidRequestError,
    InvalidTaskError,
    RemoteError,
)
from bedrock_image.image_generator import BedrockImageGenerator
from bedrock_image.image_types import (
    ControlMode,
    GenerationRequest,
    GenerationResult,
    ImageConfig,
    OutPaintingMode,
    Quality,
    TaskType,
)

__all__ = [
    "BedrockImageGenerator",
    "ControlMode",
    "EmptyResultError",
    "GenerationFailedError",
    "GenerationRequest",
    "GenerationResult",
    "GeneratorSettings",
    "ImageConfig",
    "ImageGenerationError",
    "InvalidRequestError",
    "InvalidTaskError",
    "OutPaintingMode",
    "Quality",
    "RemoteError",
    "TaskType",
]
