from types import SimpleNamespace

import pytest

pytest.importorskip("google.genai")

from LLM_API.data_classes import BaseRequest, ImageRequest, create_grounded_request, create_json_request
from LLM_API.exceptions import LLMAPIError, LLMAuthenticationError
from LLM_API.providers import gemini


class FakeModels:
    def __init__(self, text_response=None, image_response=None, error=None):
        self.text_response = text_response
        self.image_response = image_response
        self.error = error
        self.calls = []

    def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return self.text_response

    def generate_images(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return self.image_response


@pytest.fixture
def fake_models(monkeypatch):
    models = FakeModels()

    class FakeClient:
        def __init__(self, api_key=None):
            self.api_key = api_key
            self.models = models

    monkeypatch.setattr(gemini.genai, "Client", FakeClient)
    return models


def _grounded_reply(text):
    chunks = [
        SimpleNamespace(web=SimpleNamespace(uri="https://bees.example", title="Bees")),
        SimpleNamespace(web=None),
    ]
    candidate = SimpleNamespace(grounding_metadata=SimpleNamespace(grounding_chunks=chunks))
    return SimpleNamespace(text=text, candidates=[candidate])


def test_grounded_request_attaches_search_tool_and_citations(fake_models):
    fake_models.text_response = _grounded_reply('{"html_content": "x"}')
    model = gemini.GeminiModel(api_key="test-key")

    response = model.generate_content(create_grounded_request("Bees", "gemini-2.5-pro"))

    call = fake_models.calls[0]
    assert call["model"] == "gemini-2.5-pro"
    assert call["config"].tools[0].google_search is not None
    assert call["config"].response_mime_type is None
    assert response.success
    assert [(c.uri, c.title) for c in response.citations] == [("https://bees.example", "Bees")]


def test_json_request_sets_mime_type_and_skips_citations(fake_models):
    fake_models.text_response = _grounded_reply("{}")
    model = gemini.GeminiModel(api_key="test-key")

    response = model.generate_content(create_json_request("Bees"))

    call = fake_models.calls[0]
    assert call["model"] == gemini.DEFAULT_TEXT_MODEL
    assert call["config"].response_mime_type == "application/json"
    assert not call["config"].tools
    assert response.text == "{}"
    assert response.citations == []


def test_plain_request_sends_no_config(fake_models):
    fake_models.text_response = SimpleNamespace(text="Slide 1")
    model = gemini.GeminiModel(api_key="test-key")

    model.generate_content(BaseRequest(prompt="Outline this"))

    assert "config" not in fake_models.calls[0]


def test_provider_errors_are_reported_on_the_response(fake_models):
    fake_models.error = RuntimeError("503 UNAVAILABLE")
    model = gemini.GeminiModel(api_key="test-key")

    response = model.generate_content(create_json_request("Bees"))

    assert not response.success
    assert response.error == "503 UNAVAILABLE"
    assert response.text == ""


def test_empty_prompt_is_rejected_before_the_call(fake_models):
    model = gemini.GeminiModel(api_key="test-key")
    with pytest.raises(ValueError):
        model.generate_content(BaseRequest(prompt="  "))
    assert fake_models.calls == []


def test_generate_image_returns_raw_bytes(fake_models):
    fake_models.image_response = SimpleNamespace(
        generated_images=[
            SimpleNamespace(image=SimpleNamespace(image_bytes=b"\xff\xd8jpeg")),
            SimpleNamespace(image=None),
        ]
    )
    model = gemini.GeminiModel(api_key="test-key", image_model_name="imagen-test")

    response = model.generate_image(ImageRequest(prompt="a bee"))

    call = fake_models.calls[0]
    assert call["model"] == "imagen-test"
    assert call["config"].number_of_images == 1
    assert call["config"].output_mime_type == "image/jpeg"
    assert response.images == [b"\xff\xd8jpeg"]
    assert response.first_image == b"\xff\xd8jpeg"


def test_missing_api_key_raises_authentication_error(monkeypatch, fake_models):
    monkeypatch.setattr("LLM_API.providers._base_provider.load_dotenv", lambda *a, **k: False)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)

    with pytest.raises(LLMAuthenticationError) as excinfo:
        gemini.GeminiModel()

    assert excinfo.value.error_type == "missing_api_key"


def test_feature_flags(fake_models):
    model = gemini.GeminiModel(api_key="test-key")
    assert model.get_provider_name() == "Gemini"
    assert model.supports_feature("grounding")
    assert model.supports_feature("image_generation")
    assert not model.supports_feature("streaming")


def test_client_setup_failure_is_wrapped(monkeypatch):
    def broken_client(api_key=None):
        raise RuntimeError("bad transport")

    monkeypatch.setattr(gemini.genai, "Client", broken_client)

    with pytest.raises(LLMAPIError) as excinfo:
        gemini.GeminiModel(api_key="test-key")

    assert excinfo.value.error_type == "client_setup"
    assert isinstance(excinfo.value.original_error, RuntimeError)
