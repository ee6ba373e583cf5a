from reveal_deck.extraction import extract_json_payload


def test_strips_language_tagged_fence():
    assert extract_json_payload('```json\n{"a":1}\n```') == '{"a":1}'


def test_strips_bare_fence_and_surrounding_whitespace():
    raw = '  \n```\n{"html_content": "x"}\n```\n  '
    assert extract_json_payload(raw) == '{"html_content": "x"}'


def test_unfenced_text_is_trimmed_only():
    assert extract_json_payload('   {"a": 1}  \n') == '{"a": 1}'


def test_fence_in_the_middle_of_text_is_not_stripped():
    raw = 'Here you go:\n```json\n{"a":1}\n```'
    assert extract_json_payload(raw) == raw.strip()


def test_empty_and_none_inputs_yield_empty_string():
    assert extract_json_payload("") == ""
    assert extract_json_payload(None) == ""


def test_empty_fence_yields_empty_payload():
    assert extract_json_payload("```\n```") == ""
    assert extract_json_payload("```json\n```") == ""
    assert extract_json_payload("```json\n   \n```") == ""


def test_single_line_fence_keeps_its_body():
    assert extract_json_payload('```{"a": 1}```') == '{"a": 1}'
