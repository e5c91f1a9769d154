"""Credential x model failover for structured generation."""
from .client import ResilientGenerationClient, decode_response
from .credentials import CredentialSet, build_credential_set
from .failover import FailoverAction, next_action

__all__ = [
    "ResilientGenerationClient",
    "decode_response",
    "CredentialSet",
    "build_credential_set",
    "FailoverAction",
    "next_action",
]
