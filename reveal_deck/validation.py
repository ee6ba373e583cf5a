"""Schema checks for the JSON payloads returned by the model.

Markup is load-bearing and has to satisfy the wrapper envelope exactly;
advisory fields (theme, suggestions, follow-up text) fall back to defaults.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Sequence, Tuple

from LLM_API.data_classes import Citation

from .errors import MalformedJson, SchemaViolation
from .models import (
    DEFAULT_THEME,
    EnhancedResponse,
    ImageSuggestion,
    InitialResponse,
    SearchCitation,
    Theme,
)

LOGGER = logging.getLogger(__name__)

INITIAL_MARKUP_FIELD = "html_content"
ENHANCED_MARKUP_FIELD = "enhanced_html_content"

DEFAULT_ENHANCEMENT_QUERIES = "No specific enhancement queries provided by AI."
DEFAULT_CONFIRMATION = "Enhanced presentation generated."

ENVELOPE_START = re.compile(
    r"^<div\s+class=(['\"])reveal\1>\s*<div\s+class=(['\"])slides\2[^>]*>",
    re.IGNORECASE,
)
ENVELOPE_END = "</div></div>"
SECTION_TAG = re.compile(r"<\s*/?\s*section\b[^>]*>", re.IGNORECASE)

DIAGNOSTIC_CHARS = 200


def parse_payload(text: str) -> Dict[str, Any]:
    """Decode ``text`` into a JSON object or raise :class:`MalformedJson`."""

    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as exc:
        snippet = (text or "")[:DIAGNOSTIC_CHARS]
        raise MalformedJson(
            f"AI returned malformed JSON. Parser error: {exc}. "
            f"(Raw string start: {snippet}...)",
            snippet=snippet,
            original_error=exc,
        ) from exc
    if not isinstance(data, dict):
        raise SchemaViolation(
            "<root>",
            SchemaViolation.WRONG_TYPE,
            f"expected a JSON object, got {type(data).__name__}.",
        )
    return data


def check_wrapper_envelope(value: Any, field: str) -> str:
    """Return the trimmed markup in ``value`` or raise :class:`SchemaViolation`.

    Checks run in order (presence, type, opening tags, closing tags, section
    tag) and stop at the first failure.
    """

    if value is None:
        raise SchemaViolation(field, SchemaViolation.MISSING, "field is absent or null.")
    if not isinstance(value, str):
        raise SchemaViolation(
            field,
            SchemaViolation.WRONG_TYPE,
            f"expected a string, got {type(value).__name__}.",
        )
    markup = value.strip()
    if not markup:
        raise SchemaViolation(field, SchemaViolation.MISSING, "field is empty after trimming.")

    if not ENVELOPE_START.match(markup):
        _raise_envelope(
            field,
            SchemaViolation.INVALID_START,
            "does not start with the expected <div class='reveal'><div class='slides' ...> structure.",
            markup,
        )
    if not markup.endswith(ENVELOPE_END):
        _raise_envelope(
            field,
            SchemaViolation.INVALID_END,
            f"does not end with '{ENVELOPE_END}'.",
            markup,
        )
    if not SECTION_TAG.search(markup):
        _raise_envelope(
            field,
            SchemaViolation.NO_SECTION_TAG,
            "does not contain a <section> or </section> tag.",
            markup,
        )
    return markup


def validate_initial_response(
    text: str,
    grounding_citations: Sequence[Citation] = (),
) -> InitialResponse:
    payload = parse_payload(text)
    markup = check_wrapper_envelope(payload.get(INITIAL_MARKUP_FIELD), INITIAL_MARKUP_FIELD)

    theme = Theme.coerce(payload.get("chosen_theme"))
    if theme is None:
        LOGGER.warning(
            "chosen_theme missing or invalid (%r); defaulting to %s",
            payload.get("chosen_theme"),
            DEFAULT_THEME.value,
        )
        theme = DEFAULT_THEME

    queries = payload.get("enhancement_queries")
    if not isinstance(queries, str) or not queries.strip():
        LOGGER.warning("enhancement_queries missing or not a string; using placeholder")
        queries = DEFAULT_ENHANCEMENT_QUERIES

    return InitialResponse(
        core_markup=markup,
        theme=theme,
        image_suggestions=_parse_suggestions(payload.get("image_suggestions")),
        enhancement_queries=queries,
        citations=collect_citations(grounding_citations, payload.get("search_results")),
    )


def validate_enhanced_response(
    text: str,
    grounding_citations: Sequence[Citation] = (),
) -> EnhancedResponse:
    payload = parse_payload(text)
    markup = check_wrapper_envelope(payload.get(ENHANCED_MARKUP_FIELD), ENHANCED_MARKUP_FIELD)

    confirmation = payload.get("ai_confirmation_or_further_queries")
    if not isinstance(confirmation, str) or not confirmation.strip():
        LOGGER.warning("ai_confirmation_or_further_queries missing or not a string")
        confirmation = DEFAULT_CONFIRMATION

    return EnhancedResponse(
        core_markup=markup,
        confirmation=confirmation,
        citations=collect_citations(grounding_citations, payload.get("search_results")),
    )


def collect_citations(
    grounding_citations: Sequence[Citation],
    declared: Any = None,
) -> Tuple[SearchCitation, ...]:
    """Merge citation sources, preferring grounding metadata.

    The JSON ``search_results`` field is only consulted when grounding
    produced no chunks at all. Entries without a URI are dropped and a
    missing title falls back to the URI.
    """

    if grounding_citations:
        return tuple(
            SearchCitation(uri=item.uri, title=item.title or item.uri)
            for item in grounding_citations
            if item.uri
        )
    if declared is None:
        return ()
    if not isinstance(declared, list):
        LOGGER.warning("search_results was not an array; ignoring it")
        return ()
    citations: List[SearchCitation] = []
    for entry in declared:
        if not isinstance(entry, dict):
            continue
        uri = entry.get("uri")
        if not isinstance(uri, str) or not uri:
            continue
        title = entry.get("title")
        citations.append(SearchCitation(uri=uri, title=title if isinstance(title, str) and title else uri))
    return tuple(citations)


# ---------------------------------------------------------------------------
# internal helpers
# ---------------------------------------------------------------------------


def _parse_suggestions(raw: Any) -> Tuple[ImageSuggestion, ...]:
    if not isinstance(raw, list):
        if raw is not None:
            LOGGER.warning("image_suggestions is not an array; proceeding without suggestions")
        else:
            LOGGER.warning("image_suggestions missing; proceeding without suggestions")
        return ()
    suggestions: List[ImageSuggestion] = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        description = entry.get("description")
        if not isinstance(description, str) or not description.strip():
            continue
        reference = entry.get("slide_reference")
        suggestions.append(
            ImageSuggestion(
                slide_reference=reference if isinstance(reference, str) else "",
                description=description.strip(),
            )
        )
    return tuple(suggestions)


def _raise_envelope(field: str, violation: str, detail: str, markup: str) -> None:
    start, end = _diagnostic_slices(markup)
    LOGGER.error("%s validation failed: %s", field, detail)
    LOGGER.error("%s (start): %s", field, start)
    if end:
        LOGGER.error("%s (end): %s", field, end)
    raise SchemaViolation(field, violation, detail, markup_start=start, markup_end=end)


def _diagnostic_slices(markup: str) -> Tuple[str, str]:
    if len(markup) > DIAGNOSTIC_CHARS:
        return markup[:DIAGNOSTIC_CHARS] + "...", "..." + markup[-DIAGNOSTIC_CHARS:]
    return markup, ""
