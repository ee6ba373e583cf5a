from typing import Any, List, Optional

from google.genai import types

from .data_classes import BaseRequest, Citation, ImageRequest


class GeminiConverter:
    """Convert data classes to and from the google-genai types"""

    @staticmethod
    def convert_generate_config(request: BaseRequest) -> Optional[types.GenerateContentConfig]:
        """Build the GenerateContentConfig for a text request.

        Gemini rejects a JSON mime type together with tools, so grounding
        wins when both are requested.
        """
        if request.use_grounding:
            grounding_tool = types.Tool(google_search=types.GoogleSearch())
            return types.GenerateContentConfig(tools=[grounding_tool])
        if request.response_mime_type:
            return types.GenerateContentConfig(
                response_mime_type=request.response_mime_type
            )
        return None

    @staticmethod
    def convert_image_config(request: ImageRequest) -> types.GenerateImagesConfig:
        return types.GenerateImagesConfig(
            number_of_images=request.number_of_images,
            output_mime_type=request.output_mime_type,
        )

    @staticmethod
    def extract_citations(response: Any) -> List[Citation]:
        """Collect web grounding chunks from the first candidate"""
        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            return []
        metadata = getattr(candidates[0], "grounding_metadata", None)
        chunks = getattr(metadata, "grounding_chunks", None) or []
        citations: List[Citation] = []
        for chunk in chunks:
            web = getattr(chunk, "web", None)
            if web is None:
                continue
            citations.append(Citation(
                uri=getattr(web, "uri", "") or "",
                title=getattr(web, "title", None),
            ))
        return citations

    @staticmethod
    def extract_image_bytes(response: Any) -> List[bytes]:
        images: List[bytes] = []
        for generated in getattr(response, "generated_images", None) or []:
            image = getattr(generated, "image", None)
            data = getattr(image, "image_bytes", None)
            if data:
                images.append(data)
        return images
