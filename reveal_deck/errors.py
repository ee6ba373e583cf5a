"""Failures surfaced by :class:`reveal_deck.service.DeckService`.

``str(error)`` is meant to be shown to the user verbatim. None of these are
retried by the service.
"""

from __future__ import annotations

from typing import Optional


class DeckServiceError(Exception):
    """Base class for every failure raised by the deck service."""

    kind = "error"

    def __init__(self, reason: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.original_error = original_error

    def __str__(self) -> str:
        return self.reason


class ServiceUnavailable(DeckServiceError):
    """The model client could not be constructed (e.g. missing credential)."""

    kind = "service_unavailable"


class TransportFailure(DeckServiceError):
    """The remote call was rejected or failed at the network level."""

    kind = "transport_failure"


class GenerationFailed(DeckServiceError):
    """The remote call succeeded but its output is unusable."""

    kind = "generation_failed"


class EmptyResponse(GenerationFailed):
    kind = "empty_response"


class MalformedJson(GenerationFailed):
    """The extracted payload is not valid JSON."""

    kind = "malformed_json"

    def __init__(self, reason: str, snippet: str = "", original_error: Optional[Exception] = None) -> None:
        super().__init__(reason, original_error=original_error)
        self.snippet = snippet


class SchemaViolation(GenerationFailed):
    """A required field is missing or the markup breaks the wrapper envelope.

    ``violation`` is one of ``missing``, ``wrong_type``, ``invalid_start``,
    ``invalid_end`` or ``no_section_tag``.
    """

    kind = "schema_violation"

    MISSING = "missing"
    WRONG_TYPE = "wrong_type"
    INVALID_START = "invalid_start"
    INVALID_END = "invalid_end"
    NO_SECTION_TAG = "no_section_tag"

    def __init__(
        self,
        field: str,
        violation: str,
        detail: str,
        *,
        markup_start: str = "",
        markup_end: str = "",
    ) -> None:
        reason = f"[{violation}] {field}: {detail}"
        if markup_start:
            reason += f" Received (start): '{markup_start}'"
        if markup_end:
            reason += f" Received (end): '{markup_end}'"
        super().__init__(reason)
        self.field = field
        self.violation = violation
        self.detail = detail
        self.markup_start = markup_start
        self.markup_end = markup_end
