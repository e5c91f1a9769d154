"""Tolerant JSON decoding for model output.

JSON mode usually yields clean JSON, but fallback models occasionally wrap the
payload in Markdown fences, add commentary, or leave trailing commas. The
parser tries progressively more invasive cleanups and returns the first
successful decode.

Strategies (in order):
    1. Direct decode of the trimmed text.
    2. Decode after removing code fences and normalizing smart quotes.
    3. Decode the outermost ``{...}`` / ``[...]`` envelope.
    4. Drop trailing commas and quote single-quoted keys.
    5. Remove invalid backslash escapes.
    6. Collapse newlines.
    7. Balance unterminated strings, braces and brackets.

``ValueError`` is raised when every strategy fails.
"""
from __future__ import annotations

import json
import re
from typing import Any, Callable, Iterator, List

_FENCE_OPEN = re.compile(r"```(?:json)?\s*", re.IGNORECASE)
_TRAILING_COMMA = re.compile(r",\s*([}\]])")
_SINGLE_QUOTED_KEY = re.compile(r"(\s*?)'(\w+)'(\s*?):")
_INVALID_ESCAPE = re.compile(r'(?<!\\)\\([^"\\/nrtbfu])')
_SMART_QUOTES = str.maketrans({"‘": "'", "’": "'", "“": '"', "”": '"'})


def strip_code_fences(text: str) -> str:
    """Remove Markdown code fences (```json ... ``` or ``` ... ```) and trim."""
    return _FENCE_OPEN.sub("", text).strip()


def _envelope(text: str) -> str:
    """Return the outermost object/array span, or ``""`` when none exists."""
    first_brace, last_brace = text.find("{"), text.rfind("}")
    first_bracket, last_bracket = text.find("["), text.rfind("]")
    if first_bracket != -1 and last_bracket != -1 and (first_brace == -1 or first_bracket < first_brace):
        return text[first_bracket : last_bracket + 1]
    if first_brace != -1 and last_brace != -1:
        return text[first_brace : last_brace + 1]
    return ""


def _fix_commas_and_keys(text: str) -> str:
    text = _TRAILING_COMMA.sub(r"\1", text)
    return _SINGLE_QUOTED_KEY.sub(r'\1"\2"\3:', text)


def _fix_escapes(text: str) -> str:
    return _INVALID_ESCAPE.sub(r"\1", text.replace("\\'", "'"))


def _single_line(text: str) -> str:
    return re.sub(r"\s+", " ", " ".join(text.split("\n")))


def _balance(text: str) -> str:
    """Close an unterminated string and any unbalanced braces/brackets."""
    start = min((i for i in (text.find("{"), text.find("[")) if i != -1), default=0)
    text = _TRAILING_COMMA.sub(r"\1", text[start:])
    stack: List[str] = []
    in_str = False
    escaped = False
    for ch in text:
        if in_str:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_str = False
            continue
        if ch == '"':
            in_str = True
        elif ch in "{[":
            stack.append("}" if ch == "{" else "]")
        elif ch in "}]" and stack and stack[-1] == ch:
            stack.pop()
    if in_str:
        text += '"'
    text += "".join(reversed(stack))
    return _TRAILING_COMMA.sub(r"\1", text)


def _candidates(text: str) -> Iterator[str]:
    trimmed = text.strip()
    yield trimmed
    cleaned = strip_code_fences(trimmed).translate(_SMART_QUOTES)
    yield cleaned
    envelope = _envelope(cleaned)
    if envelope:
        fixes: List[Callable[[str], str]] = [_fix_commas_and_keys, _fix_escapes, _single_line]
        candidate = envelope
        yield candidate
        for fix in fixes:
            candidate = fix(candidate)
            yield candidate
    yield _balance(cleaned)


def parse_ai_response_json(text: str) -> Any:
    """Decode possibly malformed JSON returned by a model.

    Parameters
    ----------
    text: str
        Raw response text.

    Returns
    -------
    Any
        The decoded JSON value.

    Raises
    ------
    ValueError
        If ``text`` is empty or no strategy yields valid JSON.
    """
    if not isinstance(text, str) or not text.strip():
        raise ValueError("empty JSON text")
    seen = set()
    for candidate in _candidates(text):
        if not candidate or candidate in seen:
            continue
        seen.add(candidate)
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            continue
    raise ValueError("no JSON value could be decoded from model output")


__all__ = ["parse_ai_response_json", "strip_code_fences"]
