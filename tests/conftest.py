"""Shared fixtures: a fake bedrock-runtime client that never touches the network."""

from __future__ import annotations

import base64
import io
import json

import pytest

from bedrock_image.config import GeneratorSettings
from bedrock_image.image_generator import BedrockImageGenerator

KNOWN_IMAGE_BYTES = b"\x89PNG\r\n\x1a\nfake-image-bytes"
KNOWN_BASE64 = base64.b64encode(KNOWN_IMAGE_BYTES).decode("utf8")


class FakeBedrockClient:
    """Records invoke_model calls and answers with a canned response body."""

    def __init__(self, region: str, response=None, error: Exception | None = None) -> None:
        self.region = region
        self.response = {"images": [KNOWN_BASE64]} if response is None else response
        self.error = error
        self.calls = []

    def invoke_model(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        body = self.response if isinstance(self.response, bytes) else json.dumps(self.response).encode("utf-8")
        return {"body": io.BytesIO(body)}

    def sent_body(self, index: int = -1) -> dict:
        return json.loads(self.calls[index]["body"])


class FakeClientFactory:
    def __init__(self) -> None:
        self.clients: list[FakeBedrockClient] = []

    def __call__(self, region: str) -> FakeBedrockClient:
        client = FakeBedrockClient(region)
        self.clients.append(client)
        return client


@pytest.fixture
def client_factory() -> FakeClientFactory:
    return FakeClientFactory()


@pytest.fixture
def generator(client_factory: FakeClientFactory) -> BedrockImageGenerator:
    return BedrockImageGenerator(GeneratorSettings(), client_factory=client_factory)


@pytest.fixture
def fake_client(generator: BedrockImageGenerator) -> FakeBedrockClient:
    return generator.bedrock_runtime
