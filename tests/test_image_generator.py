"""Tests for :class:`bedrock_image.image_generator.BedrockImageGenerator`."""

from __future__ import annotations

import threading

import pytest
from botocore.exceptions import EndpointConnectionError

from bedrock_image.config import DEFAULT_MODEL_ID, GeneratorSettings
from bedrock_image.errors import GenerationFailedError, InvalidRequestError, InvalidTaskError
from bedrock_image.image_generator import BedrockImageGenerator
from bedrock_image.image_types import GenerationRequest, ImageConfig, TaskType

from conftest import KNOWN_BASE64, KNOWN_IMAGE_BYTES


def test_text_image_end_to_end(generator, fake_client) -> None:
    result = generator.generate_image(GenerationRequest(task_type="TEXT_IMAGE", prompt="A cat"))

    assert result.base64_image == KNOWN_BASE64
    assert result.image_bytes == KNOWN_IMAGE_BYTES
    assert result.model_id == DEFAULT_MODEL_ID

    call = fake_client.calls[0]
    assert call["modelId"] == DEFAULT_MODEL_ID
    assert call["contentType"] == "application/json"
    assert call["accept"] == "application/json"
    assert fake_client.sent_body() == {
        "taskType": "TEXT_IMAGE",
        "imageGenerationConfig": {"numberOfImages": 1, "quality": "premium", "cfgScale": 8.0},
        "textToImageParams": {"text": "A cat"},
    }


def test_request_model_id_is_passed_through(generator, fake_client) -> None:
    request = GenerationRequest(TaskType.TEXT_IMAGE, prompt="A cat", model_id="amazon.titan-image-generator-v2:0")

    result = generator.generate_image(request)

    assert fake_client.calls[0]["modelId"] == "amazon.titan-image-generator-v2:0"
    assert result.model_id == "amazon.titan-image-generator-v2:0"


def test_bogus_task_never_reaches_the_client(generator, fake_client) -> None:
    with pytest.raises(InvalidTaskError):
        generator.generate_image(GenerationRequest(task_type="BOGUS", prompt="A cat"))

    assert fake_client.calls == []


def test_mask_conflict_never_reaches_the_client(generator, fake_client) -> None:
    request = GenerationRequest(TaskType.INPAINTING, base64_image="aW1n", mask_image="bWFzaw==", mask_prompt="cat")

    with pytest.raises(InvalidRequestError):
        generator.generate_image(request)

    assert fake_client.calls == []


# Remote errors, empty results and transport failures all surface as
# GenerationFailedError; only the message text tells them apart.
def test_remote_error_is_wrapped(generator, fake_client) -> None:
    fake_client.response = {"error": "x"}

    with pytest.raises(GenerationFailedError, match="Image generation failed: Model error: x"):
        generator.generate_image(GenerationRequest(TaskType.TEXT_IMAGE, prompt="A cat"))


def test_empty_result_is_wrapped(generator, fake_client) -> None:
    fake_client.response = {"images": []}

    with pytest.raises(GenerationFailedError, match="No image returned from model"):
        generator.generate_image(GenerationRequest(TaskType.TEXT_IMAGE, prompt="A cat"))


def test_transport_error_is_wrapped(generator, fake_client) -> None:
    fake_client.error = EndpointConnectionError(endpoint_url="https://bedrock-runtime.us-east-1.amazonaws.com")

    with pytest.raises(GenerationFailedError, match="Could not connect to the endpoint URL"):
        generator.generate_image(GenerationRequest(TaskType.TEXT_IMAGE, prompt="A cat"))


def test_error_without_message_uses_its_repr(generator, fake_client) -> None:
    fake_client.error = RuntimeError()

    with pytest.raises(GenerationFailedError, match="RuntimeError"):
        generator.generate_image(GenerationRequest(TaskType.TEXT_IMAGE, prompt="A cat"))


def test_invalid_json_is_wrapped(generator, fake_client) -> None:
    fake_client.response = b"<html>busy</html>"

    with pytest.raises(GenerationFailedError, match="Image generation failed"):
        generator.generate_image(GenerationRequest(TaskType.TEXT_IMAGE, prompt="A cat"))


def test_missing_body_is_wrapped(generator, fake_client, monkeypatch) -> None:
    monkeypatch.setattr(fake_client, "invoke_model", lambda **kwargs: {})

    with pytest.raises(GenerationFailedError, match="No response body received from model"):
        generator.generate_image(GenerationRequest(TaskType.TEXT_IMAGE, prompt="A cat"))


def test_generation_config_is_sent(generator, fake_client) -> None:
    request = GenerationRequest(
        TaskType.TEXT_IMAGE, prompt="A cat", image_config=ImageConfig(width=512, height=512, seed=42)
    )

    generator.generate_image(request)

    assert fake_client.sent_body()["imageGenerationConfig"] == {
        "numberOfImages": 1,
        "quality": "premium",
        "cfgScale": 8.0,
        "seed": 42,
        "width": 512,
        "height": 512,
    }


def test_default_region_uses_default_client(generator, client_factory) -> None:
    assert generator.get_client() is generator.bedrock_runtime
    assert generator.get_client("us-east-1") is generator.bedrock_runtime
    assert [client.region for client in client_factory.clients] == ["us-east-1"]


def test_other_region_gets_its_own_client(generator, client_factory, fake_client) -> None:
    request = GenerationRequest(TaskType.TEXT_IMAGE, prompt="A cat", region="eu-west-1")

    generator.generate_image(request)
    generator.generate_image(request)

    regional = generator.get_client("eu-west-1")
    assert regional is not fake_client
    assert regional.region == "eu-west-1"
    assert len(regional.calls) == 2
    assert fake_client.calls == []
    assert [client.region for client in client_factory.clients] == ["us-east-1", "eu-west-1"]


def test_regional_clients_are_created_once_under_concurrency(generator, client_factory) -> None:
    clients = []

    def fetch() -> None:
        clients.append(generator.get_client("ap-northeast-1"))

    threads = [threading.Thread(target=fetch) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len({id(client) for client in clients}) == 1
    assert len(client_factory.clients) == 2


def test_settings_bind_region_and_model(client_factory) -> None:
    settings = GeneratorSettings(region="us-west-2", model_id="custom-model")
    generator = BedrockImageGenerator(settings, client_factory=client_factory)

    result = generator.generate_image(GenerationRequest(TaskType.TEXT_IMAGE, prompt="A cat"))

    assert generator.bedrock_runtime.region == "us-west-2"
    assert result.model_id == "custom-model"


def test_default_client_is_a_bedrock_runtime_client() -> None:
    generator = BedrockImageGenerator(GeneratorSettings(region="us-west-2", read_timeout=120))
    client = generator.bedrock_runtime

    assert client.meta.service_model.service_name == "bedrock-runtime"
    assert client.meta.region_name == "us-west-2"
    assert client.meta.config.read_timeout == 120



def test_regional_client_failure_is_not_wrapped(generator, monkeypatch) -> None:
    def failing_factory(region: str):
        raise RuntimeError(f"no client for {region}")

    monkeypatch.setattr(generator, "_client_factory", failing_factory)
    request = GenerationRequest(TaskType.TEXT_IMAGE, prompt="A cat", region="eu-west-1")

    with pytest.raises(RuntimeError, match="no client for eu-west-1"):
        generator.generate_image(request)
