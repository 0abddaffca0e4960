"""
Request and result types for Bedrock image generation tasks.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union


class TaskType(str, Enum):
    """Image generation task kinds, valued by their wire tag."""

    TEXT_IMAGE = "TEXT_IMAGE"
    INPAINTING = "INPAINTING"
    OUTPAINTING = "OUTPAINTING"
    BACKGROUND_REMOVAL = "BACKGROUND_REMOVAL"
    COLOR_GUIDED_GENERATION = "COLOR_GUIDED_GENERATION"


class Quality(str, Enum):
    STANDARD = "standard"
    PREMIUM = "premium"


class OutPaintingMode(str, Enum):
    DEFAULT = "DEFAULT"
    PRECISE = "PRECISE"


class ControlMode(str, Enum):
    CANNY_EDGE = "CANNY_EDGE"
    SEGMENTATION = "SEGMENTATION"


# Output size the service uses when width/height are not sent
DEFAULT_WIDTH = 1024
DEFAULT_HEIGHT = 1024


@dataclass
class ImageConfig:
    """Generation settings shared by every task.

    Attributes:
        width (Optional[int]): Output width. None leaves it to the service (1024).
        height (Optional[int]): Output height. None leaves it to the service (1024).
        quality (str): "standard" or "premium". Defaults to "premium".
        cfg_scale (float): Guidance scale. Defaults to 8.0.
        seed (Optional[int]): Random seed. None lets the service pick one.
        number_of_images (int): Number of images to request. Defaults to 1.
    """

    width: Optional[int] = None
    height: Optional[int] = None
    quality: Union[Quality, str] = Quality.PREMIUM
    cfg_scale: float = 8.0
    seed: Optional[int] = None
    number_of_images: int = 1


@dataclass
class GenerationRequest:
    """Unified input for all image generation tasks.

    Images are passed as base64 strings; reading them from disk is the
    caller's job (see ``bedrock_image.image_io``).
    """

    task_type: Union[TaskType, str]
    prompt: Optional[str] = None
    negative_prompt: Optional[str] = None
    base64_image: Optional[str] = None
    mask_image: Optional[str] = None
    mask_prompt: Optional[str] = None
    out_painting_mode: Optional[Union[OutPaintingMode, str]] = None
    condition_image: Optional[str] = None
    control_mode: Optional[Union[ControlMode, str]] = None
    control_strength: Optional[float] = None
    color_hex_list: Optional[List[str]] = None
    image_config: Optional[ImageConfig] = field(default_factory=ImageConfig)
    model_id: Optional[str] = None
    region: Optional[str] = None


@dataclass(frozen=True)
class GenerationResult:
    """A decoded image returned by the model."""

    image_bytes: bytes
    base64_image: str
    model_id: str
