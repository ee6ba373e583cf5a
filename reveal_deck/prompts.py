"""Instruction text for the three request kinds sent to the model.

Every builder is a pure function of its input: identical requests yield
identical prompts.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Sequence

from .models import (
    TRANSITIONS,
    AiSuggestedImage,
    EnhancementRequest,
    ExistingSlideImage,
    GenerationMode,
    GenerationRequest,
    ImageInput,
    NewSlideImage,
    Theme,
)
from .placeholders import TOKEN_PREFIX, prompt_image_url

SLIDE_BREAK = "---SLIDE BREAK---"

DEFAULT_ENHANCEMENT_INSTRUCTIONS = (
    "IMPORTANT: The user has not asked for anything beyond image integration. "
    "Make this presentation visually DISTINCT and engaging. Build on the "
    "existing content creatively: experiment with typography, vary slide "
    "layouts, use different fragment styles and consider CSS animations. It "
    "must not feel like a generic template; introduce noticeable visual "
    "variation and polish directly in the slide HTML."
)

IMAGE_TYPE_AI_SUGGESTED = "ai_suggested"
IMAGE_TYPE_EXISTING_SLIDE = "user_defined_existing_slide"
IMAGE_TYPE_NEW_SLIDE = "user_defined_new_slide"

_TRANSITION_LIST = ", ".join(f"'{name}'" for name in TRANSITIONS)
_THEME_LIST = ", ".join(f"'{theme.value}'" for theme in Theme)

_ESCAPING_RULES = [
    "1. SINGLE QUOTES for ALL HTML attribute values, including the wrapper divs. "
    "Correct: <img src='a.jpg' alt='x'>. Incorrect: <img src=\"a.jpg\" alt=\"x\">.",
    "2. A double quote inside text content must be escaped as \\\".",
    "3. A literal backslash must be escaped as \\\\.",
    "4. Literal newlines are forbidden inside the string; write \\n instead.",
    "5. Tabs, carriage returns, form feeds and backspaces must be escaped as "
    "\\t, \\r, \\f and \\b.",
]


# ---------------------------------------------------------------------------
# Initial generation
# ---------------------------------------------------------------------------


def build_initial_prompt(request: GenerationRequest) -> str:
    """Prompt asking for the first version of the deck as JSON."""

    n = request.min_slide_count
    search = request.search_enabled

    sections: List[str] = [
        "Act as an expert HTML and Reveal.js developer. Generate the core slide "
        f"structure and content for a presentation of at least {n} slides.",
        "",
        "[Input]",
        _input_section(request),
        "",
        "[Content rules]",
        "- Use only the information in the input"
        + (" or in the search results" if search else "")
        + ". Do NOT include reference numbers, citations or citation markers in the slides.",
        f"- Distribute the key information across at least {n} slides. Long slides "
        "are fine; the viewer scrolls them. Do not shrink fonts to fit.",
        "- Use headings (h1, h2), paragraphs, lists, speaker notes "
        "(<aside class='notes'>...</aside>) and fragments (<p class='fragment'>).",
        "- Focus on structure, accuracy and transitions; visual enhancements "
        "come in a later step.",
        "",
        "[Markup rules for \"html_content\"]",
        "- Output ONLY the core Reveal.js structure: start with "
        "<div class='reveal'><div class='slides'>, contain one or more lowercase "
        "<section>...</section> slides and end with </div></div>.",
        "- The slides div may carry Reveal.js data attributes that apply to all "
        "slides, single-quoted.",
        "- Do NOT include <!DOCTYPE html>, <html>, <head>, <body>, <style> or "
        "<script> tags.",
        "- Every <section> MUST carry a data-transition attribute chosen from: "
        f"{_TRANSITION_LIST}. Vary transitions between slides, e.g. "
        "<section data-transition='zoom'>.",
        "",
        "[JSON fields]",
        "- \"html_content\": string with the core slide markup described above.",
        f"- \"chosen_theme\": one of {_THEME_LIST}.",
        "- \"image_suggestions\": array of {\"slide_reference\": \"e.g. Slide 2, "
        "Concept X\", \"description\": \"descriptive text usable as an image "
        "generation prompt\"}.",
        "- \"enhancement_queries\": string asking the user about visual style and "
        "animations for the next step.",
    ]
    if search:
        sections.append(
            "- \"search_results\": array of {\"uri\": \"URL\", \"title\": \"Page "
            "Title\"} for sources used; may be empty."
        )

    example: Dict[str, Any] = {
        "html_content": (
            "<div class='reveal'><div class='slides'><section data-transition='zoom'>"
            "<h1>Title</h1><p>A \"quoted\" phrase.</p><aside class='notes'>Note.</aside>"
            "</section><section data-transition='fade'><h2>Next</h2></section></div></div>"
        ),
        "chosen_theme": "sky",
        "image_suggestions": [
            {
                "slide_reference": "Slide 1, Title Visual",
                "description": "A dynamic visual representing the core concept.",
            }
        ],
        "enhancement_queries": "Which visual style or animations would you like?",
    }
    if search:
        example["search_results"] = []

    sections.extend(
        [
            "",
            "[Output format]",
            *_json_output_rules(search),
            "",
            "[String escaping for \"html_content\"]",
            *_ESCAPING_RULES,
            "",
            "Example:",
            json.dumps(example, indent=2),
            "",
            "Double-check single-quoted attributes and the data-transition on every "
            "section before answering. Output ONLY the JSON.",
        ]
    )
    return "\n".join(sections)


def _input_section(request: GenerationRequest) -> str:
    if request.mode is GenerationMode.TOPIC:
        topic = f"The user wants a presentation on the topic: \"{request.content}\"."
        if request.search_enabled:
            return (
                f"{topic} Use Google Search to gather relevant information and build "
                "the content from the search results. Source URLs are collected "
                "automatically."
            )
        return (
            f"{topic} Generate the content from your existing knowledge. Do NOT use "
            "Google Search for this request."
        )
    return f"--- START DATA ---\n{request.content}\n--- END DATA ---"


def _json_output_rules(search: bool) -> List[str]:
    rules = ["Your entire response MUST be a single valid JSON object."]
    if search:
        rules.append(
            "You MAY wrap it in a ```json fence; the fenced content must still be a "
            "single valid JSON object."
        )
    else:
        rules.append("Output the JSON directly, without markdown fences.")
    rules.append("There must be NO other text or explanation.")
    return rules


# ---------------------------------------------------------------------------
# Enhancement
# ---------------------------------------------------------------------------


def serialize_image_inputs(image_inputs: Sequence[ImageInput]) -> List[Dict[str, Any]]:
    """Describe each image for the prompt, tokenising local payloads."""

    entries: List[Dict[str, Any]] = []
    for index, image in enumerate(image_inputs):
        if isinstance(image, AiSuggestedImage):
            variant: Dict[str, Any] = {
                "type": IMAGE_TYPE_AI_SUGGESTED,
                "suggestion_reference": image.reference,
            }
        elif isinstance(image, ExistingSlideImage):
            variant = {
                "type": IMAGE_TYPE_EXISTING_SLIDE,
                "slide_number": image.slide_number,
                "placement": image.placement.value,
            }
        elif isinstance(image, NewSlideImage):
            variant = {
                "type": IMAGE_TYPE_NEW_SLIDE,
                "after_slide_number": image.after_slide_number,
                "placement": image.placement.value,
            }
        else:
            raise TypeError(f"Unsupported image input: {type(image).__name__}")
        entry: Dict[str, Any] = {
            "url": prompt_image_url(index, image),
            "description": image.description,
        }
        entry.update(variant)
        entries.append(entry)
    return entries


def build_enhancement_prompt(request: EnhancementRequest) -> str:
    """Prompt asking the model to integrate images and refine the deck."""

    images_json = json.dumps(serialize_image_inputs(request.image_inputs), indent=2)
    instructions = request.instructions.strip() or DEFAULT_ENHANCEMENT_INSTRUCTIONS
    token = f"{TOKEN_PREFIX}INDEX"

    example = {
        "enhanced_html_content": (
            "<div class='reveal'><div class='slides'>"
            f"<section data-transition='cube' data-background-image='{TOKEN_PREFIX}0'>"
            "<h1>Updated Slide 1</h1><img src='https://i.imgur.com/example.png' "
            "alt='user description'></section><section data-transition='slide'>"
            f"<img src='{TOKEN_PREFIX}1' alt='description of image 1'></section>"
            "</div></div>"
        ),
        "ai_confirmation_or_further_queries": "Images integrated and transitions refreshed. Anything else?",
    }

    sections = [
        "Act as an expert presentation designer and front-end developer. Enhance "
        "the core Reveal.js slides below by integrating the user's images and "
        "applying their refinements. Aim for a visually distinct, engaging deck "
        "with varied per-slide transitions.",
        "",
        "[Base core HTML]",
        "```html",
        request.base_markup,
        "```",
        "",
        "[User image inputs]",
        f"'description' is the user's final description; use it as alt text. 'url' "
        f"is either a public URL or a placeholder '{token}'.",
        "```json",
        images_json,
        "```",
        "",
        "[Image rules]",
        "- A public http(s) url is used directly as an <img> src or as "
        "data-background-image.",
        f"- A placeholder like '{TOKEN_PREFIX}0' stands for an AI-generated image the "
        "application substitutes later. Use the exact placeholder string as the value "
        f"of src='{TOKEN_PREFIX}0', data-background-image='{TOKEN_PREFIX}0' or "
        f"url({TOKEN_PREFIX}0) and never alter it.",
        f"- '{IMAGE_TYPE_AI_SUGGESTED}': place the image where it fits the "
        "'suggestion_reference'; choose inline or background from the slide content.",
        f"- '{IMAGE_TYPE_EXISTING_SLIDE}': add the image to slide 'slide_number' "
        "(1-based). 'background' means data-background-image on that section; "
        "'inline' means an <img> tag inside it.",
        f"- '{IMAGE_TYPE_NEW_SLIDE}': create a new <section> for the image, inserted "
        "after slide 'after_slide_number' (0 means before the first slide), using "
        "data-background-image for 'background' or an <img> for 'inline'.",
        "- Every image gets a meaningful alt attribute taken from its description.",
        "",
        "[User enhancement requests]",
        "--- START USER ENHANCEMENTS ---",
        instructions,
        "--- END USER ENHANCEMENTS ---",
        "",
        "[Markup rules for \"enhanced_html_content\"]",
        "- Output ONLY the updated core structure starting with "
        "<div class='reveal'><div class='slides' ...> and ending with </div></div>, "
        "with lowercase <section> tags.",
        "- Do NOT include <!DOCTYPE html>, <html>, <head>, <body>, global <style> or "
        "<script> tags.",
        "- Review the data-transition attribute on every <section>, choosing from: "
        f"{_TRANSITION_LIST}. Keep existing values where appropriate and vary them.",
        "- Refine typography, layout and colour, use fragments; legibility comes first.",
        "- No citation markers or reference numbers.",
        "",
        "[JSON fields]",
        "- \"enhanced_html_content\": string with the updated core slide markup.",
        "- \"ai_confirmation_or_further_queries\": string confirming the changes and "
        "asking any further questions.",
        "",
        "[Output format]",
        *_json_output_rules(False),
        "",
        "[String escaping for \"enhanced_html_content\"]",
        *_ESCAPING_RULES,
        "",
        "Example:",
        json.dumps(example, indent=2),
        "",
        "Output ONLY the JSON.",
    ]
    return "\n".join(sections)


# ---------------------------------------------------------------------------
# Plain-text export
# ---------------------------------------------------------------------------


def build_text_export_prompt(markup: str) -> str:
    """Prompt converting final markup into a slide-by-slide text outline."""

    sections = [
        "Below is the core HTML of a Reveal.js presentation: a reveal/slides "
        "container holding one <section> per slide. Convert it into plain text "
        "suitable for building a PowerPoint deck by hand.",
        "",
        "```html",
        markup,
        "```",
        "",
        "[Instructions]",
        "1. Walk through each top-level <section> in order; each one is a slide.",
        "2. For every slide write, in this order:",
        "   a. \"Slide N\" where N starts at 1.",
        "   b. \"Transition: <value>\" when the section has data-transition; omit otherwise.",
        "   c. \"Heading: <text>\" for the main heading (h1, h2) when present.",
        "   d. \"Content:\" followed by the text of paragraphs, lists and other text "
        "elements, keeping list items as \"- item\" lines.",
        "   e. \"Notes:\" followed by the speaker notes from <aside class='notes'> when present.",
        "   f. For each <img>: \"Image: [URL - <src>] - Alt: <alt>\", or for a "
        f"placeholder src \"Image: [AI-Generated Image Placeholder (was: {TOKEN_PREFIX}N)] "
        "- Alt: <alt>\". Embedded data: URIs are written as "
        "\"Image: [Embedded image] - Alt: <alt>\".",
        "   g. For data-background-image: \"Background Image: [URL - <value>]\", or "
        f"\"Background Image: [AI-Generated Image Placeholder (was: {TOKEN_PREFIX}N)]\", "
        "or \"Background Image: [Embedded image]\".",
        f"3. Separate slides with a line containing exactly {SLIDE_BREAK}",
        "4. Output plain text only: no JSON, no HTML tags, no markdown fences.",
        "",
        "Example:",
        "",
        "Slide 1",
        "Transition: zoom",
        "Heading: Introduction to AI",
        "Content:",
        "Artificial Intelligence is a rapidly growing field.",
        "- Application 1",
        "- Application 2",
        "Notes:",
        "Remember to define AI clearly.",
        "",
        SLIDE_BREAK,
        "",
        "Slide 2",
        "Transition: fade",
        "Content:",
        "This slide discusses future trends.",
        "Background Image: [URL - https://example.com/diagram.png]",
        "",
        "Output ONLY the plain text.",
    ]
    return "\n".join(sections)
