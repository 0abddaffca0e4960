import boto3
import logging
import threading
from typing import Any, Callable, Dict, Optional
from botocore.config import Config

from bedrock_image.config import GeneratorSettings
from bedrock_image.errors import GenerationFailedError
from bedrock_image.image_types import GenerationRequest, GenerationResult
from bedrock_image.request_builder import build_request_body, serialize_request_body
from bedrock_image.response_decoder import decode_response

logger = logging.getLogger(__name__)


class BedrockImageGenerator:
    """Bedrock image generator for all Nova Canvas image tasks."""

    def __init__(
        self,
        settings: Optional[GeneratorSettings] = None,
        client_factory: Optional[Callable[[str], Any]] = None
    ):
        """Initialize the Bedrock image generator.

        Args:
            settings (Optional[GeneratorSettings]): Region, model and timeout settings.
                Defaults to GeneratorSettings() (us-east-1, amazon.nova-canvas-v1:0).
            client_factory (Optional[Callable[[str], Any]]): Builds a bedrock-runtime
                client for a region. Defaults to a boto3 client.
        """
        logger.info("Initializing BedrockImageGenerator...")

        self.settings = settings or GeneratorSettings()
        self.region = self.settings.region
        self.model_id = self.settings.model_id
        self._client_factory = client_factory or self._create_bedrock_client

        self.bedrock_runtime = self._client_factory(self.region)
        self._regional_clients: Dict[str, Any] = {}
        self._clients_lock = threading.Lock()

        logger.info(f"BedrockImageGenerator initialized successfully in {self.region}")

    def _create_bedrock_client(self, region: str):
        return boto3.client(
            service_name="bedrock-runtime",
            region_name=region,
            config=Config(read_timeout=self.settings.read_timeout)
        )

    def get_client(self, region: Optional[str] = None):
        """Return a bedrock-runtime client bound to the given region.

        The default client is only used for its own region; other regions get
        their own client, created on first use and kept for later calls.
        """
        if region is None or region == self.region:
            return self.bedrock_runtime

        with self._clients_lock:
            client = self._regional_clients.get(region)
            if client is None:
                logger.info(f"Creating Bedrock client for region {region}")
                client = self._client_factory(region)
                self._regional_clients[region] = client
        return client

    def _invoke_model(self, client, model_id: str, body: str) -> bytes:
        """Invoke the model and return the raw response body."""
        logger.info(f"Calling Bedrock API with model {model_id}...")
        response = client.invoke_model(
            body=body,
            modelId=model_id,
            accept="application/json",
            contentType="application/json"
        )

        response_body = response.get("body")
        if response_body is None:
            raise ValueError("No response body received from model")
        return response_body.read()

    def generate_image(self, request: GenerationRequest) -> GenerationResult:
        """Generate or edit an image with a single model call.

        Args:
            request (GenerationRequest): Task type, prompts, images and configuration

        Returns:
            GenerationResult: Raw bytes and base64 form of the first generated image

        Raises:
            InvalidTaskError: If the task type is not supported (nothing is sent)
            InvalidRequestError: If the request is incomplete or ambiguous (nothing is sent)
            GenerationFailedError: If invoking the model or decoding its response fails
        """
        model_id = request.model_id or self.model_id
        body = build_request_body(request)
        client = self.get_client(request.region)

        logger.info(f"Starting {body['taskType']} generation")
        logger.info(f"Configuration: {body['imageGenerationConfig']}")

        try:
            raw_body = self._invoke_model(client, model_id, serialize_request_body(body))
            return decode_response(raw_body, model_id)
        except Exception as e:
            logger.error(f"Failed to generate {body['taskType']}: {str(e)}", exc_info=True)
            raise GenerationFailedError(f"Image generation failed: {str(e) or repr(e)}") from e
