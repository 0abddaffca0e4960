"""
Builds Nova Canvas request bodies from a GenerationRequest.

Every body has the same envelope::

    {
        "taskType": "<task>",
        "imageGenerationConfig": {"numberOfImages": 1, "quality": "premium", "cfgScale": 8.0, ...},
        "<taskSection>": {...}
    }

with exactly one task section, chosen by the task type:

    TEXT_IMAGE               -> textToImageParams
    INPAINTING               -> inPaintingParams
    OUTPAINTING              -> outPaintingParams
    BACKGROUND_REMOVAL       -> backgroundRemovalParams
    COLOR_GUIDED_GENERATION  -> colorGuidedGenerationParams

Fields left as None are omitted from the body rather than sent as null.
"""
import json
import logging
from enum import Enum
from typing import Dict, Optional, Type

from bedrock_image.errors import InvalidRequestError, InvalidTaskError
from bedrock_image.image_types import (
    ControlMode,
    GenerationRequest,
    ImageConfig,
    OutPaintingMode,
    Quality,
    TaskType,
)

logger = logging.getLogger(__name__)

TASK_SECTIONS = {
    TaskType.TEXT_IMAGE: "textToImageParams",
    TaskType.INPAINTING: "inPaintingParams",
    TaskType.OUTPAINTING: "outPaintingParams",
    TaskType.BACKGROUND_REMOVAL: "backgroundRemovalParams",
    TaskType.COLOR_GUIDED_GENERATION: "colorGuidedGenerationParams",
}


def _compact(params: Dict) -> Dict:
    """Drop keys whose value is None."""
    return {key: value for key, value in params.items() if value is not None}


def _enum_value(enum_cls: Type[Enum], value, field_name: str) -> Optional[str]:
    if value is None:
        return None
    try:
        return enum_cls(value).value
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise InvalidRequestError(f"Invalid {field_name}: {value!r}. Expected one of: {allowed}") from None


def _require(value, field_name: str, task_type: TaskType) -> None:
    if not value:
        raise InvalidRequestError(f"{field_name} is required for {task_type.value}")


def resolve_task_type(task_type) -> TaskType:
    """Return the TaskType for an enum member or its wire tag.

    Raises:
        InvalidTaskError: If the value is not a supported task type
    """
    try:
        return TaskType(task_type)
    except ValueError:
        raise InvalidTaskError(f"Unsupported task type: {task_type}") from None


def build_generation_config(config: ImageConfig) -> Dict:
    """Build the imageGenerationConfig block.

    seed, width and height are only included when set, so the service
    applies its own defaults for anything the caller left out.
    """
    generation_config = {
        "numberOfImages": config.number_of_images,
        "quality": _enum_value(Quality, config.quality, "quality"),
        "cfgScale": config.cfg_scale,
    }
    if config.seed is not None:
        generation_config["seed"] = config.seed
    if config.width is not None:
        generation_config["width"] = config.width
    if config.height is not None:
        generation_config["height"] = config.height
    return generation_config


def _text_to_image_params(request: GenerationRequest) -> Dict:
    _require(request.prompt, "prompt", TaskType.TEXT_IMAGE)
    params = {
        "text": request.prompt,
        "negativeText": request.negative_prompt,
    }
    if request.condition_image is not None:
        params["conditionImage"] = request.condition_image
        params["controlMode"] = _enum_value(ControlMode, request.control_mode, "control mode")
        params["controlStrength"] = request.control_strength
    return _compact(params)


def _check_mask(request: GenerationRequest, task_type: TaskType) -> None:
    # A mask is either an image or a prompt, never both
    if request.mask_image is not None and request.mask_prompt is not None:
        raise InvalidRequestError(
            f"mask_image and mask_prompt are mutually exclusive for {task_type.value}"
        )


def _inpainting_params(request: GenerationRequest) -> Dict:
    _require(request.base64_image, "base64_image", TaskType.INPAINTING)
    _check_mask(request, TaskType.INPAINTING)
    return _compact({
        "image": request.base64_image,
        "maskImage": request.mask_image,
        "maskPrompt": request.mask_prompt,
        "text": request.prompt,
        "negativeText": request.negative_prompt,
    })


def _outpainting_params(request: GenerationRequest) -> Dict:
    _require(request.base64_image, "base64_image", TaskType.OUTPAINTING)
    _check_mask(request, TaskType.OUTPAINTING)
    mode = _enum_value(OutPaintingMode, request.out_painting_mode, "outpainting mode")
    return _compact({
        "image": request.base64_image,
        "maskImage": request.mask_image,
        "maskPrompt": request.mask_prompt,
        "text": request.prompt,
        "negativeText": request.negative_prompt,
        "outPaintingMode": mode or OutPaintingMode.DEFAULT.value,
    })


def _background_removal_params(request: GenerationRequest) -> Dict:
    _require(request.base64_image, "base64_image", TaskType.BACKGROUND_REMOVAL)
    return {"image": request.base64_image}


def _color_guided_params(request: GenerationRequest) -> Dict:
    _require(request.prompt, "prompt", TaskType.COLOR_GUIDED_GENERATION)
    _require(request.base64_image, "base64_image", TaskType.COLOR_GUIDED_GENERATION)
    colors = list(request.color_hex_list) if request.color_hex_list is not None else None
    return _compact({
        "text": request.prompt,
        "negativeText": request.negative_prompt,
        "referenceImage": request.base64_image,
        "colors": colors,
    })


def build_request_body(request: GenerationRequest) -> Dict:
    """Build the request body for a generation request.

    Args:
        request (GenerationRequest): Unified task input

    Returns:
        Dict: JSON-serializable request body

    Raises:
        InvalidTaskError: If the task type is not supported
        InvalidRequestError: If a required field is missing or the mask is ambiguous
    """
    task_type = resolve_task_type(request.task_type)

    if task_type == TaskType.TEXT_IMAGE:
        params = _text_to_image_params(request)
    elif task_type == TaskType.INPAINTING:
        params = _inpainting_params(request)
    elif task_type == TaskType.OUTPAINTING:
        params = _outpainting_params(request)
    elif task_type == TaskType.BACKGROUND_REMOVAL:
        params = _background_removal_params(request)
    elif task_type == TaskType.COLOR_GUIDED_GENERATION:
        params = _color_guided_params(request)
    else:
        raise InvalidTaskError(f"Unsupported task type: {task_type}")

    body = {
        "taskType": task_type.value,
        "imageGenerationConfig": build_generation_config(request.image_config or ImageConfig()),
        TASK_SECTIONS[task_type]: params,
    }
    logger.debug(f"Built {task_type.value} request with sections: {list(body)}")
    return body


def serialize_request_body(body: Dict) -> str:
    """Serialize a request body to the JSON text sent to the model."""
    return json.dumps(body)
