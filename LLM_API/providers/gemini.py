from typing import Optional
from google import genai
from ..data_classes import (
    BaseRequest, BaseResponse,
    ImageRequest, ImageResponse,
    ProviderConfig
)
from ..converters import GeminiConverter
from ..decorators import log_request
from ..exceptions import LLMAPIError
from ._base_provider import BaseProvider


DEFAULT_TEXT_MODEL = "gemini-2.5-flash"
DEFAULT_IMAGE_MODEL = "imagen-3.0-generate-002"


class GeminiModel(BaseProvider):
    """Gemini API implementation of CallModel using data classes"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: str = DEFAULT_TEXT_MODEL,
        image_model_name: str = DEFAULT_IMAGE_MODEL,
    ):
        self.image_model_name = image_model_name
        super().__init__(api_key=api_key, model_name=model_name)

    def _get_provider_config(self) -> ProviderConfig:
        """Get Gemini provider configuration"""
        return ProviderConfig(
            provider_name="Gemini",
            model_name=self.model_name or DEFAULT_TEXT_MODEL,
            image_model_name=self.image_model_name,
            supports_grounding=True,
            supports_json_mode=True,
            supports_image_generation=True,
        )

    def setup_client(self):
        """Setup Gemini client"""
        api_key = self._get_api_key('GEMINI_API_KEY')
        try:
            self.client = genai.Client(api_key=api_key)
        except Exception as e:
            raise LLMAPIError(
                message=f"Failed to create Gemini client: {e}",
                provider="Gemini",
                error_type="client_setup",
                original_error=e
            ) from e

    @log_request
    def generate_content(self, request: BaseRequest) -> BaseResponse:
        """Generate content; grounding citations are attached when present"""
        self._validate_request(request)
        model = request.model_name or self.model_name
        try:
            config = GeminiConverter.convert_generate_config(request)
            if config is None:
                response = self.client.models.generate_content(
                    model=model,
                    contents=request.prompt,
                )
            else:
                response = self.client.models.generate_content(
                    model=model,
                    contents=request.prompt,
                    config=config,
                )
            citations = (
                GeminiConverter.extract_citations(response)
                if request.use_grounding else []
            )
            return BaseResponse(
                text=getattr(response, 'text', '') or "",
                model_used=model,
                citations=citations,
                raw_response=response
            )
        except Exception as e:
            return BaseResponse(
                text="",
                model_used=model,
                error=str(e)
            )

    @log_request
    def generate_image(self, request: ImageRequest) -> ImageResponse:
        """Generate images; bytes are returned undecoded"""
        self._validate_request(request)
        model = request.model_name or self.image_model_name
        try:
            response = self.client.models.generate_images(
                model=model,
                prompt=request.prompt,
                config=GeminiConverter.convert_image_config(request),
            )
            return ImageResponse(
                images=GeminiConverter.extract_image_bytes(response),
                mime_type=request.output_mime_type,
                model_used=model,
                raw_response=response
            )
        except Exception as e:
            return ImageResponse(
                mime_type=request.output_mime_type,
                model_used=model,
                error=str(e)
            )
