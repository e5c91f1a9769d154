"""Small pure helpers shared across the package."""

from .json_parsing import parse_ai_response_json, strip_code_fences

__all__ = ["parse_ai_response_json", "strip_code_fences"]
