"""
LLM API Package - Unified interface over the generative model provider
"""

from .base import CallModel
from .data_classes import (
    BaseRequest, BaseResponse,
    ImageRequest, ImageResponse,
    Citation, ProviderConfig,
    create_json_request, create_grounded_request,
)
from .exceptions import (
    LLMError, LLMAPIError, LLMAuthenticationError
)
from .providers.gemini import GeminiModel

__version__ = "1.0.0"
__all__ = [
    # Base
    'CallModel',
    # Data Classes
    'BaseRequest', 'BaseResponse',
    'ImageRequest', 'ImageResponse',
    'Citation', 'ProviderConfig',
    'create_json_request', 'create_grounded_request',
    # Exceptions
    'LLMError', 'LLMAPIError', 'LLMAuthenticationError',
    # Providers
    'GeminiModel',
]
