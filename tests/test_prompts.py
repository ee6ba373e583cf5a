import json
import re

import pytest

from reveal_deck.models import (
    TRANSITIONS,
    AiSuggestedImage,
    EnhancementRequest,
    ExistingSlideImage,
    GenerationMode,
    GenerationRequest,
    ImagePlacement,
    NewSlideImage,
)
from reveal_deck.prompts import (
    DEFAULT_ENHANCEMENT_INSTRUCTIONS,
    SLIDE_BREAK,
    build_enhancement_prompt,
    build_initial_prompt,
    build_text_export_prompt,
    serialize_image_inputs,
)

from tests.llm_stubs import VALID_MARKUP

DATA_URI = "data:image/jpeg;base64,AAAA"


def test_topic_prompt_without_search_forbids_grounding():
    request = GenerationRequest(
        content="Topic: Bees", min_slide_count=3, mode=GenerationMode.TOPIC, use_search=False
    )

    prompt = build_initial_prompt(request)

    assert "at least 3 slides" in prompt
    assert '"Topic: Bees"' in prompt
    assert "Do NOT use Google Search" in prompt
    assert "gather relevant information" not in prompt
    assert "search_results" not in prompt
    assert "without markdown fences" in prompt


def test_topic_prompt_with_search_requests_citations():
    request = GenerationRequest(
        content="Bees", min_slide_count=5, mode=GenerationMode.TOPIC, use_search=True
    )

    prompt = build_initial_prompt(request)

    assert "Use Google Search to gather relevant information" in prompt
    assert '"search_results"' in prompt
    assert "MAY wrap it in a ```json fence" in prompt


def test_search_flag_is_ignored_in_data_mode():
    request = GenerationRequest(
        content="Quarterly numbers", min_slide_count=4, mode=GenerationMode.DATA, use_search=True
    )

    prompt = build_initial_prompt(request)

    assert not request.search_enabled
    assert "--- START DATA ---\nQuarterly numbers\n--- END DATA ---" in prompt
    assert "search_results" not in prompt
    assert "Google Search" not in prompt


def test_initial_prompt_states_structural_rules():
    prompt = build_initial_prompt(GenerationRequest(content="x", min_slide_count=2))

    assert "<div class='reveal'><div class='slides'>" in prompt
    assert "data-transition" in prompt
    for name in TRANSITIONS:
        assert f"'{name}'" in prompt
    assert "<!DOCTYPE html>" in prompt
    assert "citation markers" in prompt
    assert "SINGLE QUOTES for ALL HTML attribute values" in prompt
    for field in ("html_content", "chosen_theme", "image_suggestions", "enhancement_queries"):
        assert f'"{field}"' in prompt


def test_initial_prompt_is_deterministic():
    request = GenerationRequest(content="Bees", min_slide_count=3, mode=GenerationMode.TOPIC)
    assert build_initial_prompt(request) == build_initial_prompt(request)


def test_serialized_images_use_tokens_for_local_payloads():
    images = [
        AiSuggestedImage(reference="Slide 1, Title", description="Bee", source=DATA_URI),
        ExistingSlideImage(
            slide_number=2,
            placement=ImagePlacement.BACKGROUND,
            description="Hive",
            source="https://example.com/hive.png",
        ),
        NewSlideImage(
            after_slide_number=0,
            placement=ImagePlacement.INLINE,
            description="Honey",
            source=DATA_URI,
        ),
    ]

    entries = serialize_image_inputs(images)

    assert entries[0] == {
        "url": "image-ref:0",
        "description": "Bee",
        "type": "ai_suggested",
        "suggestion_reference": "Slide 1, Title",
    }
    assert entries[1] == {
        "url": "https://example.com/hive.png",
        "description": "Hive",
        "type": "user_defined_existing_slide",
        "slide_number": 2,
        "placement": "background",
    }
    assert entries[2] == {
        "url": "image-ref:2",
        "description": "Honey",
        "type": "user_defined_new_slide",
        "after_slide_number": 0,
        "placement": "inline",
    }


def test_serialize_rejects_unknown_variants():
    with pytest.raises(TypeError):
        serialize_image_inputs([object()])


def test_enhancement_prompt_embeds_markup_images_and_instructions():
    request = EnhancementRequest(
        base_markup=VALID_MARKUP,
        image_inputs=[AiSuggestedImage(reference="Slide 1", description="Bee", source=DATA_URI)],
        instructions="Use a dark palette.",
    )

    prompt = build_enhancement_prompt(request)

    assert VALID_MARKUP in prompt
    assert DATA_URI not in prompt
    assert '"url": "image-ref:0"' in prompt
    assert "Use a dark palette." in prompt
    assert DEFAULT_ENHANCEMENT_INSTRUCTIONS not in prompt
    assert '"enhanced_html_content"' in prompt
    assert '"ai_confirmation_or_further_queries"' in prompt
    assert "Google Search" not in prompt


def test_enhancement_prompt_defaults_to_diversifying_visuals():
    request = EnhancementRequest(base_markup=VALID_MARKUP, instructions="   ")
    prompt = build_enhancement_prompt(request)
    assert DEFAULT_ENHANCEMENT_INSTRUCTIONS in prompt
    assert json.dumps([], indent=2) in prompt


def test_text_export_prompt_carries_template_and_delimiter():
    prompt = build_text_export_prompt(VALID_MARKUP)

    assert VALID_MARKUP in prompt
    assert f"exactly {SLIDE_BREAK}" in prompt
    for label in ("Slide N", "Transition:", "Heading:", "Content:", "Notes:", "Image:", "Background Image:"):
        assert label in prompt
    assert len(re.findall(re.escape(SLIDE_BREAK), prompt)) >= 2


def test_serialize_rejects_look_alike_variants_before_reading_them():
    class LookAlikeImage:
        description = "Bee"
        source = DATA_URI
        is_local = True

    images = [AiSuggestedImage(reference="Slide 1", description="Bee"), LookAlikeImage()]
    with pytest.raises(TypeError, match="LookAlikeImage"):
        serialize_image_inputs(images)
