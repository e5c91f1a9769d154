from __future__ import annotations

import pytest

from genai_failover.base.errors import ErrorCode, GenerationError
from genai_failover.base.utils import parse_ai_response_json, strip_code_fences
from genai_failover.resilient import decode_response


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ('{"a": 1}', {"a": 1}),
        ("```json\n{\"a\": 1}\n```", {"a": 1}),
        ("```\n[1, 2, 3]\n```", [1, 2, 3]),
        ('Sure! Here is the data: {"a": {"b": 2}} Hope it helps.', {"a": {"b": 2}}),
        ('{"a": [1, 2,],}', {"a": [1, 2]}),
        ("{'name': \"x\"}", {"name": "x"}),
        ("{\u201cq\u201d: \u201cv\u201d}", {"q": "v"}),
        ('{"path": "C:\\dir"}', {"path": "C:dir"}),
        ('{"a": "unterminated', {"a": "unterminated"}),
        ('{"a": [1, {"b": 2', {"a": [1, {"b": 2}]}),
    ],
)
def test_repairs(text, expected):
    assert parse_ai_response_json(text) == expected  # nosec B101


@pytest.mark.parametrize("text", ["", "   ", "no json here at all"])
def test_unrecoverable_raises(text):
    with pytest.raises(ValueError):
        parse_ai_response_json(text)


def test_strip_code_fences():
    assert strip_code_fences("```JSON\n{}\n```") == "{}"  # nosec B101


def test_decode_failure_keeps_truncated_text():
    text = "not json " * 100
    with pytest.raises(GenerationError) as ei:
        decode_response(text, "gemini-2.5-flash")
    err = ei.value
    assert err.code is ErrorCode.VALIDATION and err.model == "gemini-2.5-flash"  # nosec B101
    assert isinstance(err.raw, str) and err.raw == text[:500]  # nosec B101
