from dataclasses import dataclass, field
from typing import Optional, List, Any


# ========== Base Classes ==========

@dataclass
class BaseRequest:
    """Text generation request shared by every provider"""
    prompt: str = ""
    model_name: Optional[str] = None
    response_mime_type: Optional[str] = None  # e.g. "application/json"
    use_grounding: bool = False  # attach the provider's search tool


@dataclass
class Citation:
    """Source reported by search grounding"""
    uri: str = ""
    title: Optional[str] = None


@dataclass
class BaseResponse:
    """Text generation response shared by every provider"""
    text: str = ""
    model_used: Optional[str] = None
    citations: List[Citation] = field(default_factory=list)
    error: Optional[str] = None
    raw_response: Optional[Any] = None

    @property
    def success(self) -> bool:
        """Whether the remote call succeeded"""
        return self.error is None


# ========== Image Generation ==========

@dataclass
class ImageRequest:
    """Image generation request"""
    prompt: str = ""
    model_name: Optional[str] = None
    number_of_images: int = 1
    output_mime_type: str = "image/jpeg"

    def __post_init__(self):
        if self.number_of_images < 1:
            raise ValueError("number_of_images must be at least 1")


@dataclass
class ImageResponse:
    """Image generation response; ``images`` holds raw bytes per image"""
    images: List[bytes] = field(default_factory=list)
    mime_type: str = "image/jpeg"
    model_used: Optional[str] = None
    error: Optional[str] = None
    raw_response: Optional[Any] = None

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def first_image(self) -> Optional[bytes]:
        return self.images[0] if self.images else None


# ========== Provider Configuration ==========

@dataclass
class ProviderConfig:
    """Provider specific capabilities"""
    provider_name: str = ""
    model_name: str = ""
    image_model_name: Optional[str] = None
    supports_grounding: bool = True
    supports_json_mode: bool = True
    supports_image_generation: bool = True


# ========== Utility Functions ==========

def create_json_request(prompt: str, model_name: Optional[str] = None) -> BaseRequest:
    """Request asking the model for a bare JSON body"""
    return BaseRequest(
        prompt=prompt,
        model_name=model_name,
        response_mime_type="application/json",
    )


def create_grounded_request(prompt: str, model_name: Optional[str] = None) -> BaseRequest:
    """Request with search grounding; JSON mode cannot be combined with tools"""
    return BaseRequest(prompt=prompt, model_name=model_name, use_grounding=True)
