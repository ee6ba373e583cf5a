import dataclasses

import pytest

from LLM_API.data_classes import (
    BaseResponse,
    ImageRequest,
    ImageResponse,
    ProviderConfig,
    create_grounded_request,
    create_json_request,
)


def _field_names(cls):
    return {f.name for f in dataclasses.fields(cls)}


def test_response_carries_only_what_the_service_reads():
    assert _field_names(BaseResponse) == {"text", "model_used", "citations", "error", "raw_response"}
    assert BaseResponse().success
    assert not BaseResponse(error="boom").success


def test_provider_config_lists_feature_flags_only():
    assert _field_names(ProviderConfig) == {
        "provider_name",
        "model_name",
        "image_model_name",
        "supports_grounding",
        "supports_json_mode",
        "supports_image_generation",
    }


def test_request_helpers_never_combine_grounding_with_json_mode():
    json_request = create_json_request("Bees", "gemini-2.5-flash")
    grounded = create_grounded_request("Bees", "gemini-2.5-flash")

    assert json_request.response_mime_type == "application/json"
    assert not json_request.use_grounding
    assert grounded.use_grounding
    assert grounded.response_mime_type is None


def test_image_request_requires_at_least_one_image():
    with pytest.raises(ValueError):
        ImageRequest(prompt="a bee", number_of_images=0)
    assert ImageResponse().first_image is None
