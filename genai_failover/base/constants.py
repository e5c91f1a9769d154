"""Base shared constants for the generation layer.

Central location for user-facing failure messages so the client, service and
CLI report identical strings.

# pragma: allowlist secret
"""
from __future__ import annotations

# Terminal failure when no credential survives filtering
NO_CREDENTIALS_ERROR = "No API keys configured."  # pragma: allowlist secret - message text, not a secret

# Attempt failure when the provider returns a success envelope without text
EMPTY_RESPONSE_ERROR = "Empty response from AI"

# Attempt failure when the text cannot be decoded as JSON
INVALID_JSON_ERROR = "AI response is not valid JSON"

# Terminal failure when the matrix is exhausted without a recorded error
ALL_ATTEMPTS_FAILED_ERROR = "All AI attempts failed."

# Terminal failure when the caller cancels or the deadline passes
CANCELLED_ERROR = "Generation cancelled"

# Response MIME type requested from the provider for every attempt
JSON_MIME_TYPE = "application/json"

__all__ = [
    "NO_CREDENTIALS_ERROR",
    "EMPTY_RESPONSE_ERROR",
    "INVALID_JSON_ERROR",
    "ALL_ATTEMPTS_FAILED_ERROR",
    "CANCELLED_ERROR",
    "JSON_MIME_TYPE",
]
