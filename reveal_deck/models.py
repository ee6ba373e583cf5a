"""Value objects exchanged between the deck workflow and the model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

LOCAL_IMAGE_PREFIX = "data:image"

TRANSITIONS: Tuple[str, ...] = (
    "none",
    "fade",
    "slide",
    "convex",
    "concave",
    "zoom",
    "page",
    "cube",
    "coverflow",
    "concave-cube",
    "convex-cube",
    "fade-in-then-out",
    "fade-out-then-in",
)


class GenerationMode(Enum):
    """Whether ``content`` is source material or a topic phrase."""

    DATA = "data"
    TOPIC = "topic"


class AvailableModel(Enum):
    """Gemini text models offered to the user."""

    GEMINI_2_5_PRO = "gemini-2.5-pro"
    GEMINI_2_5_FLASH = "gemini-2.5-flash"
    GEMINI_2_5_FLASH_LITE = "gemini-2.5-flash-lite"


class Theme(Enum):
    """Reveal.js bundled themes."""

    BLACK = "black"
    WHITE = "white"
    LEAGUE = "league"
    BEIGE = "beige"
    SKY = "sky"
    NIGHT = "night"
    SERIF = "serif"
    SIMPLE = "simple"
    SOLARIZED = "solarized"
    BLOOD = "blood"
    MOON = "moon"

    @classmethod
    def coerce(cls, value: Any) -> Optional["Theme"]:
        """Return the matching theme or ``None`` for anything unrecognised."""

        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


DEFAULT_THEME = Theme.SKY


class ImagePlacement(Enum):
    INLINE = "inline"
    BACKGROUND = "background"


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class GenerationRequest:
    """A single submission of source content or a topic."""

    content: str
    min_slide_count: int
    mode: GenerationMode = GenerationMode.DATA
    model: AvailableModel = AvailableModel.GEMINI_2_5_FLASH
    use_search: bool = False

    def __post_init__(self) -> None:
        if not self.content or not self.content.strip():
            raise ValueError("content must not be empty")
        if self.min_slide_count < 1:
            raise ValueError("min_slide_count must be a positive integer")

    @property
    def search_enabled(self) -> bool:
        """Search grounding only applies to topic mode."""

        return self.mode is GenerationMode.TOPIC and self.use_search


@dataclass(frozen=True, slots=True)
class AiSuggestedImage:
    """Image for a spot the model proposed in ``image_suggestions``."""

    reference: str
    description: str
    source: str = ""

    @property
    def is_local(self) -> bool:
        return _is_local_source(self.source)


@dataclass(frozen=True, slots=True)
class ExistingSlideImage:
    """Image the user attaches to an existing slide (1-based)."""

    slide_number: int
    placement: ImagePlacement
    description: str
    source: str = ""

    def __post_init__(self) -> None:
        if self.slide_number < 1:
            raise ValueError("slide_number starts at 1")

    @property
    def is_local(self) -> bool:
        return _is_local_source(self.source)


@dataclass(frozen=True, slots=True)
class NewSlideImage:
    """Image placed on a new slide inserted after ``after_slide_number``.

    ``after_slide_number == 0`` prepends the slide.
    """

    after_slide_number: int
    placement: ImagePlacement
    description: str
    source: str = ""

    def __post_init__(self) -> None:
        if self.after_slide_number < 0:
            raise ValueError("after_slide_number must be 0 or greater")

    @property
    def is_local(self) -> bool:
        return _is_local_source(self.source)


ImageInput = Union[AiSuggestedImage, ExistingSlideImage, NewSlideImage]


@dataclass(frozen=True, slots=True)
class EnhancementRequest:
    """Refinement of a previously generated deck."""

    base_markup: str
    image_inputs: Tuple[ImageInput, ...] = ()
    instructions: str = ""
    model: AvailableModel = AvailableModel.GEMINI_2_5_FLASH

    def __post_init__(self) -> None:
        if not self.base_markup or not self.base_markup.strip():
            raise ValueError("base_markup must not be empty")
        # accept any sequence but store an immutable tuple
        object.__setattr__(self, "image_inputs", tuple(self.image_inputs))


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ImageSuggestion:
    slide_reference: str
    description: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "slide_reference": self.slide_reference,
            "description": self.description,
        }


@dataclass(frozen=True, slots=True)
class SearchCitation:
    uri: str
    title: str

    def to_dict(self) -> Dict[str, str]:
        return {"uri": self.uri, "title": self.title}


@dataclass(frozen=True, slots=True)
class InitialResponse:
    """Validated result of the first generation step."""

    core_markup: str
    theme: Theme = DEFAULT_THEME
    image_suggestions: Tuple[ImageSuggestion, ...] = ()
    enhancement_queries: str = ""
    citations: Tuple[SearchCitation, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "html_content": self.core_markup,
            "chosen_theme": self.theme.value,
            "image_suggestions": [item.to_dict() for item in self.image_suggestions],
            "enhancement_queries": self.enhancement_queries,
            "search_results": [item.to_dict() for item in self.citations],
        }


@dataclass(frozen=True, slots=True)
class EnhancedResponse:
    """Validated result of an enhancement step, placeholders resolved."""

    core_markup: str
    confirmation: str = ""
    citations: Tuple[SearchCitation, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "enhanced_html_content": self.core_markup,
            "ai_confirmation_or_further_queries": self.confirmation,
            "search_results": [item.to_dict() for item in self.citations],
        }


@dataclass(frozen=True, slots=True)
class ImageOutcome:
    """Result of one request issued by ``DeckService.generate_images``."""

    prompt: str
    data_uri: Optional[str] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None and self.data_uri is not None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def images_from_suggestions(
    suggestions: Sequence[ImageSuggestion],
) -> List[AiSuggestedImage]:
    """Turn model suggestions into editable image inputs with no source yet."""

    return [
        AiSuggestedImage(reference=item.slide_reference, description=item.description)
        for item in suggestions
    ]


def _is_local_source(source: str) -> bool:
    return bool(source) and source.startswith(LOCAL_IMAGE_PREFIX)
