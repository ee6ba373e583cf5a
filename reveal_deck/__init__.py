"""High-level interfaces for Reveal.js deck generation workflows."""

from .config import DeckServiceConfig
from .errors import (
    DeckServiceError,
    EmptyResponse,
    GenerationFailed,
    MalformedJson,
    SchemaViolation,
    ServiceUnavailable,
    TransportFailure,
)
from .export import DeckFileWriter, render_standalone_html, split_slide_blocks
from .extraction import extract_json_payload
from .models import (
    TRANSITIONS,
    AiSuggestedImage,
    AvailableModel,
    EnhancedResponse,
    EnhancementRequest,
    ExistingSlideImage,
    GenerationMode,
    GenerationRequest,
    ImageInput,
    ImageOutcome,
    ImagePlacement,
    ImageSuggestion,
    InitialResponse,
    NewSlideImage,
    SearchCitation,
    Theme,
    images_from_suggestions,
)
from .placeholders import placeholder_token, resolve_image_placeholders
from .prompts import (
    SLIDE_BREAK,
    build_enhancement_prompt,
    build_initial_prompt,
    build_text_export_prompt,
)
from .service import DeckService
from .validation import (
    check_wrapper_envelope,
    validate_enhanced_response,
    validate_initial_response,
)

__all__ = [
    "DeckService",
    "DeckServiceConfig",
    "DeckServiceError",
    "ServiceUnavailable",
    "TransportFailure",
    "GenerationFailed",
    "EmptyResponse",
    "MalformedJson",
    "SchemaViolation",
    "GenerationMode",
    "AvailableModel",
    "Theme",
    "TRANSITIONS",
    "ImagePlacement",
    "GenerationRequest",
    "EnhancementRequest",
    "AiSuggestedImage",
    "ExistingSlideImage",
    "NewSlideImage",
    "ImageInput",
    "ImageSuggestion",
    "SearchCitation",
    "InitialResponse",
    "EnhancedResponse",
    "ImageOutcome",
    "images_from_suggestions",
    "build_initial_prompt",
    "build_enhancement_prompt",
    "build_text_export_prompt",
    "SLIDE_BREAK",
    "extract_json_payload",
    "check_wrapper_envelope",
    "validate_initial_response",
    "validate_enhanced_response",
    "placeholder_token",
    "resolve_image_placeholders",
    "render_standalone_html",
    "split_slide_blocks",
    "DeckFileWriter",
]
