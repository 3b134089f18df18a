import asyncio

import pytest

from agents.common.gemini_client import ApiKeyRotator, GeminiConfigError
from agents.common.image_client import extract_inline_image, generate_image
from fakes import FakeApiError, FakeGenAI, empty_image_response, image_response


def test_falls_back_to_next_model_and_key():
    rotator = ApiKeyRotator(["k1", "k2"])
    rotator.next_key()
    hub = FakeGenAI([FakeApiError(429), FakeApiError(500), image_response(b"PNG")])

    result = asyncio.run(
        generate_image("prompt", models=["m1", "m2"], rotator=rotator, client_factory=hub.factory)
    )

    assert hub.calls == [("k2", "m1"), ("k1", "m1"), ("k2", "m2")]
    assert result.success
    assert result.model == "m2"
    assert result.attempts == 3
    assert result.image_url == "data:image/png;base64,UE5H"


def test_moves_to_next_model_when_every_key_is_rate_limited():
    hub = FakeGenAI([FakeApiError(429), FakeApiError(429), image_response(b"PNG")])

    result = asyncio.run(
        generate_image("prompt", models=["m1", "m2"], rotator=ApiKeyRotator(["k1", "k2"]), client_factory=hub.factory)
    )

    assert hub.calls == [("k1", "m1"), ("k2", "m1"), ("k1", "m2")]
    assert result.success
    assert result.model == "m2"
    assert result.attempts == 3


def test_reports_structured_failure_when_everything_fails():
    hub = FakeGenAI([FakeApiError(429), empty_image_response()])

    result = asyncio.run(
        generate_image("prompt", models=["m1", "m2"], rotator=ApiKeyRotator(["k1"]), client_factory=hub.factory)
    )

    assert not result.success
    payload = result.to_dict()
    assert payload["success"] is False
    assert payload["error"]
    assert payload["attempts"] == 2
    assert [t["model"] for t in payload["tried"]] == ["m1", "m2"]


def test_requires_at_least_one_key():
    with pytest.raises(GeminiConfigError):
        asyncio.run(generate_image("prompt", models=["m1"], rotator=ApiKeyRotator([])))


def test_extract_inline_image_decodes_base64_strings():
    assert extract_inline_image(image_response("UE5H")) == ("image/png", b"PNG")
    assert extract_inline_image(empty_image_response()) is None
