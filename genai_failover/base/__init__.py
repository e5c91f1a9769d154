"""Shared building blocks: models, errors, logging, cancellation, timeouts."""
