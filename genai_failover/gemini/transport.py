"""Gemini transport.

Uses google-genai (google-genai>=1.0) in JSON mode: every attempt requests
``application/json`` output and, when the request carries one, passes the
response schema through unchanged.

Each attempt builds its own ``genai.Client`` bound to that attempt's key, so no
SDK state is shared between calls and requests on different threads (or with
different keys) run concurrently.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from google import genai  # type: ignore
from google.genai import types  # type: ignore

from ..base.constants import JSON_MIME_TYPE
from ..base.logging import get_logger


class GeminiTransport:
    """One JSON-mode ``generate_content`` call per attempt."""

    def __init__(self) -> None:
        self._logger = get_logger("gemini")

    @property
    def provider_name(self) -> str:
        return "gemini"

    def _generation_config(
        self, temperature: float, response_schema: Optional[Any], timeout: Optional[float]
    ):
        """Build the SDK ``GenerateContentConfig`` for JSON output."""
        kwargs: Dict[str, Any] = {
            "temperature": temperature,
            "response_mime_type": JSON_MIME_TYPE,
        }
        if response_schema is not None:
            kwargs["response_schema"] = response_schema
        if timeout is not None:
            # HttpOptions.timeout is in milliseconds
            kwargs["http_options"] = types.HttpOptions(timeout=int(timeout * 1000))
        return types.GenerateContentConfig(**kwargs)

    def generate(
        self,
        *,
        credential: str,
        model: str,
        prompt: str,
        temperature: float,
        response_schema: Optional[Any] = None,
        timeout: Optional[float] = None,
    ) -> str:
        """Issue one call and return the response text (``""`` when absent).

        SDK exceptions (``google.genai.errors.APIError`` and friends) propagate
        unchanged; their ``code`` attribute carries the HTTP status used for
        classification.
        """
        client = genai.Client(api_key=credential)
        resp = client.models.generate_content(
            model=model,
            contents=prompt,
            config=self._generation_config(temperature, response_schema, timeout),
        )
        return self._extract_text_from_response(resp)

    def _extract_text_from_response(self, resp) -> str:
        """Extract final text from a Gemini response.

        ``resp.text`` is ``None`` (or raises on older SDK builds) when the
        candidate was blocked or carries no parts; that is reported as empty
        text, not an error.
        """
        try:
            return resp.text or ""  # type: ignore[attr-defined]
        except (AttributeError, TypeError, ValueError):
            return ""


__all__ = ["GeminiTransport"]
