"""Request orchestration against the generative model."""

from __future__ import annotations

import base64
import dataclasses
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from LLM_API.base import CallModel
from LLM_API.data_classes import (
    BaseRequest,
    BaseResponse,
    ImageRequest,
    create_grounded_request,
    create_json_request,
)
from LLM_API.exceptions import LLMError
from LLM_API.providers.gemini import GeminiModel

from .config import DeckServiceConfig
from .errors import DeckServiceError, EmptyResponse, ServiceUnavailable, TransportFailure
from .extraction import extract_json_payload, strip_code_fence
from .models import (
    AvailableModel,
    EnhancedResponse,
    EnhancementRequest,
    GenerationRequest,
    ImageOutcome,
    InitialResponse,
)
from .placeholders import resolve_image_placeholders
from .prompts import (
    build_enhancement_prompt,
    build_initial_prompt,
    build_text_export_prompt,
)
from .validation import validate_enhanced_response, validate_initial_response

LOGGER = logging.getLogger(__name__)


class DeckService:
    """Build prompts, call the model and return validated responses.

    Failures are raised as :mod:`reveal_deck.errors` exceptions and never
    retried here; retry policy belongs to the caller.
    """

    def __init__(
        self,
        config: Optional[DeckServiceConfig] = None,
        *,
        llm_client: Optional[CallModel] = None,
    ) -> None:
        self.config = config or DeckServiceConfig()
        self.llm_client = llm_client if llm_client is not None else self._build_client(self.config)

    @classmethod
    def from_env(cls) -> "DeckService":
        return cls(DeckServiceConfig.from_env())

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def generate_initial(self, request: GenerationRequest) -> InitialResponse:
        """First generation step: content or topic to validated core markup."""

        prompt = build_initial_prompt(request)
        model_name = request.model.value
        if request.search_enabled:
            llm_request = create_grounded_request(prompt, model_name)
        else:
            llm_request = create_json_request(prompt, model_name)

        response = self._call(llm_request)
        payload = extract_json_payload(response.text)
        return validate_initial_response(payload, response.citations)

    def enhance(self, request: EnhancementRequest) -> EnhancedResponse:
        """Refine a deck with images and instructions; grounding is never used."""

        prompt = build_enhancement_prompt(request)
        response = self._call(create_json_request(prompt, request.model.value))
        payload = extract_json_payload(response.text)
        validated = validate_enhanced_response(payload, response.citations)

        markup = resolve_image_placeholders(validated.core_markup, request.image_inputs)
        return dataclasses.replace(validated, core_markup=markup)

    def export_plain_text(self, markup: str, model: Optional[AvailableModel] = None) -> str:
        """Slide-by-slide plain-text outline of ``markup``."""

        if not markup or not markup.strip():
            raise ValueError("markup must not be empty")
        model_name = (model or self.config.default_model).value
        response = self._call(BaseRequest(prompt=build_text_export_prompt(markup), model_name=model_name))
        text = strip_code_fence(response.text)
        if not text:
            raise EmptyResponse("AI failed to generate the plain text content. The response was empty.")
        return text

    def generate_image(self, prompt: str) -> str:
        """Generate exactly one image and return it as a data URI."""

        if not prompt or not prompt.strip():
            raise ValueError("prompt must not be empty")
        request = ImageRequest(
            prompt=prompt,
            model_name=self.config.image_model,
            number_of_images=1,
            output_mime_type=self.config.image_mime_type,
        )
        LOGGER.info("Generating image with model %s", request.model_name)
        try:
            response = self.llm_client.generate_image(request)
        except LLMError as exc:
            raise TransportFailure(f"Image generation API request failed: {exc}", original_error=exc) from exc

        if response.error:
            raise TransportFailure(f"Image generation API request failed: {response.error}")
        image = response.first_image
        if not image:
            raise TransportFailure("Image generation failed or returned no image data.")
        encoded = image if isinstance(image, str) else base64.b64encode(image).decode("ascii")
        return f"data:{response.mime_type or request.output_mime_type};base64,{encoded}"

    def generate_images(self, prompts: Sequence[str]) -> List[ImageOutcome]:
        """Run independent image requests concurrently.

        Outcomes keep the order of ``prompts``; one failure does not affect
        the others.
        """

        if not prompts:
            return []
        workers = min(self.config.max_image_workers, len(prompts))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(self.generate_image, prompt) for prompt in prompts]
            outcomes: List[ImageOutcome] = []
            for prompt, future in zip(prompts, futures):
                try:
                    outcomes.append(ImageOutcome(prompt=prompt, data_uri=future.result()))
                except (DeckServiceError, ValueError) as exc:
                    LOGGER.warning("Image generation failed for %r: %s", prompt[:80], exc)
                    outcomes.append(ImageOutcome(prompt=prompt, error=str(exc)))
        return outcomes

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _build_client(config: DeckServiceConfig) -> CallModel:
        if not config.has_credentials:
            raise ServiceUnavailable(
                "Gemini API key is not configured. Set GEMINI_API_KEY or pass api_key in the config."
            )
        try:
            return GeminiModel(
                api_key=config.api_key,
                model_name=config.default_model.value,
                image_model_name=config.image_model,
            )
        except (LLMError, ValueError) as exc:
            raise ServiceUnavailable(f"Gemini client could not be created: {exc}", original_error=exc) from exc

    def _call(self, request: BaseRequest) -> BaseResponse:
        LOGGER.info(
            "Generating content with model %s (grounding=%s, mime=%s)",
            request.model_name,
            request.use_grounding,
            request.response_mime_type or "N/A",
        )
        try:
            response = self.llm_client.generate_content(request)
        except LLMError as exc:
            raise TransportFailure(f"Gemini API request failed: {exc}", original_error=exc) from exc

        if response.error:
            raise TransportFailure(f"Gemini API request failed: {response.error}")
        if not (response.text or "").strip():
            raise EmptyResponse("AI returned an empty response string.")
        return response
