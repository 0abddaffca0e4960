import os
import logging
from dataclasses import dataclass
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_REGION = "us-east-1"
DEFAULT_MODEL_ID = "amazon.nova-canvas-v1:0"
DEFAULT_READ_TIMEOUT = 300


@dataclass
class GeneratorSettings:
    """Settings for BedrockImageGenerator.

    Attributes:
        region (str): Region the default Bedrock client is bound to.
        model_id (str): Model used when a request does not name one.
        read_timeout (int): Read timeout in seconds for the Bedrock client.
    """

    region: str = DEFAULT_REGION
    model_id: str = DEFAULT_MODEL_ID
    read_timeout: int = DEFAULT_READ_TIMEOUT

    @classmethod
    def from_env(cls) -> "GeneratorSettings":
        """Build settings from environment variables, loading a .env file first."""
        load_dotenv()

        settings = cls(
            region=os.getenv('AWS_REGION', DEFAULT_REGION),
            model_id=os.getenv('NOVA_CANVAS_MODEL_ID', DEFAULT_MODEL_ID),
            read_timeout=int(os.getenv('BEDROCK_READ_TIMEOUT', DEFAULT_READ_TIMEOUT))
        )
        logger.debug(f"Loaded settings: {settings}")
        return settings
