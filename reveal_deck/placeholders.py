"""Round-trip tokens standing in for locally generated images.

Base64 payloads are far too large to embed in a prompt, so each local image
is sent as ``image-ref:<index>`` (its position in the image input list) and
swapped back into the returned markup afterwards.
"""

from __future__ import annotations

import re
from typing import Sequence

from .models import ImageInput

TOKEN_PREFIX = "image-ref:"


def placeholder_token(index: int) -> str:
    return f"{TOKEN_PREFIX}{index}"


def prompt_image_url(index: int, image: ImageInput) -> str:
    """Value sent to the model for ``image``: a token for local images."""

    if image.is_local:
        return placeholder_token(index)
    return image.source


def resolve_image_placeholders(markup: str, image_inputs: Sequence[ImageInput]) -> str:
    """Replace every token of a local image with its data URI.

    Handles ``src=``, ``data-background-image=`` and CSS ``url(...)`` forms
    with either quote style. Inputs with a public URL were never tokenised
    and are skipped, as are tokens with no matching input.
    """

    resolved = markup
    for index, image in enumerate(image_inputs):
        if not image.is_local:
            continue
        token = re.escape(placeholder_token(index))
        payload = image.source
        resolved = re.sub(
            rf"src=(['\"]){token}\1",
            lambda m: f"src={m.group(1)}{payload}{m.group(1)}",
            resolved,
        )
        resolved = re.sub(
            rf"data-background-image=(['\"]){token}\1",
            lambda m: f"data-background-image={m.group(1)}{payload}{m.group(1)}",
            resolved,
        )
        resolved = re.sub(
            rf"url\((['\"]?){token}\1\)",
            lambda m: f"url({m.group(1)}{payload}{m.group(1)})",
            resolved,
        )
    return resolved
