import os
import logging
import argparse
from typing import Dict, List
from tqdm import tqdm

from bedrock_image.config import GeneratorSettings
from bedrock_image.image_generator import BedrockImageGenerator
from bedrock_image.image_io import read_image_as_base64, write_image_from_base64
from bedrock_image.image_types import GenerationRequest, ImageConfig, TaskType

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)

# Sample tasks; input files are looked up in the input directory
SAMPLE_TASKS: List[Dict] = [
    {
        # A futuristic cityscape from a text prompt
        "task_type": TaskType.TEXT_IMAGE,
        "input_files": [],
        "output_file": "result-1.png",
        "prompt": "A beautiful sunrise over a futuristic cityscape",
    },
    {
        # Replace the tree found by the mask prompt with a palm tree
        "task_type": TaskType.INPAINTING,
        "input_files": ["file-2.png"],
        "output_file": "result-2.png",
        "prompt": "A palm tree",
        "overrides": {
            "mask_prompt": "Tree",
            "negative_prompt": "forest",
            "image_config": ImageConfig(width=1024, height=1024),
        },
    },
    {
        # Replace the masked coffee cup with a bowl of olives
        "task_type": TaskType.INPAINTING,
        "input_files": ["file-3.png", "file-3-mask.png"],
        "output_file": "result-3.png",
        "prompt": "A bowl of olives",
        "overrides": {
            "negative_prompt": "coffee",
            "image_config": ImageConfig(width=1024, height=1024),
        },
    },
    {
        # Keep the man, replace the countryside around him with a city street
        "task_type": TaskType.OUTPAINTING,
        "input_files": ["file-4.png"],
        "output_file": "result-4.png",
        "prompt": "A man walking in the middle of a busy New York street with "
                  "skyscrapers in the background and people around him",
        "overrides": {
            "mask_prompt": "man",
            "image_config": ImageConfig(width=1024, height=1024),
        },
    },
    {
        "task_type": TaskType.BACKGROUND_REMOVAL,
        "input_files": ["file-5.png"],
        "output_file": "result-5.png",
    },
    {
        "task_type": TaskType.COLOR_GUIDED_GENERATION,
        "input_files": ["file-6.png"],
        "output_file": "result-6.png",
        "prompt": "A small blonde child smiling at the camera showing their head "
                  "and shoulders, where they are looking left",
        "overrides": {
            "color_hex_list": ["#5e17eb"],
            "image_config": ImageConfig(seed=100),
        },
    },
]


def build_request(task: Dict, input_dir: str, model_id: str) -> GenerationRequest:
    """Turn a sample task into a GenerationRequest, reading its input images."""
    overrides = dict(task.get("overrides", {}))
    input_files = task["input_files"]

    base64_image = None
    if input_files:
        base64_image = read_image_as_base64(os.path.join(input_dir, input_files[0]))

    # The mask image is only needed when no mask prompt is given
    mask_image = None
    if task["task_type"] in (TaskType.INPAINTING, TaskType.OUTPAINTING) and not overrides.get("mask_prompt"):
        if len(input_files) < 2:
            raise ValueError(f"{task['output_file']}: a mask image or mask prompt is required")
        mask_image = read_image_as_base64(os.path.join(input_dir, input_files[1]))

    request_args = {
        "task_type": task["task_type"],
        "prompt": task.get("prompt"),
        "base64_image": base64_image,
        "mask_image": mask_image,
        "model_id": model_id,
        "image_config": ImageConfig(width=512, height=512, quality="premium"),
    }
    request_args.update(overrides)
    return GenerationRequest(**request_args)


def run_tasks(generator: BedrockImageGenerator, tasks: List[Dict], input_dir: str, output_dir: str) -> List[str]:
    """Run the given tasks one after another and save each result."""
    output_paths = []
    for index, task in enumerate(tqdm(tasks, desc="Generating images"), start=1):
        logger.info(f"Running task {index}: {task['task_type'].value}")
        request = build_request(task, input_dir, generator.model_id)
        result = generator.generate_image(request)
        output_paths.append(
            write_image_from_base64(result.base64_image, os.path.join(output_dir, task["output_file"]))
        )
    return output_paths


def main():
    settings = GeneratorSettings.from_env()

    parser = argparse.ArgumentParser(description='Run sample Nova Canvas image tasks')
    parser.add_argument('--input-dir', type=str, default=os.getenv('IMAGE_INPUT_DIR', './images'),
                      help='Directory holding the input images (default: ./images)')
    parser.add_argument('--output-dir', type=str, default=os.getenv('IMAGE_OUTPUT_DIR', './results'),
                      help='Directory the results are written to (default: ./results)')
    parser.add_argument('--region', type=str, default=None,
                      help='AWS region (default: AWS_REGION or us-east-1)')
    parser.add_argument('--model-id', type=str, default=None,
                      help='Bedrock model id (default: amazon.nova-canvas-v1:0)')
    parser.add_argument('--only', nargs='+', choices=[t.value for t in TaskType],
                      help='Only run tasks of these types')

    args = parser.parse_args()

    if args.region:
        settings.region = args.region
    if args.model_id:
        settings.model_id = args.model_id

    tasks = SAMPLE_TASKS
    if args.only:
        tasks = [task for task in SAMPLE_TASKS if task["task_type"].value in args.only]

    generator = BedrockImageGenerator(settings)

    try:
        output_paths = run_tasks(generator, tasks, args.input_dir, args.output_dir)
        print(f"\nAll tasks complete. {len(output_paths)} results saved to {args.output_dir}")
    except Exception as e:
        logger.error(f"Failed to generate image: {str(e)}")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
