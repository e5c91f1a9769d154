"""genai_failover package

Resilient structured (JSON) generation against Google Gemini with
credential x model failover.

Public API (re-exported):
    - Version: ``__version__``
    - Client: :class:`ResilientGenerationClient`, :func:`build_default_client`
    - Request/result types: :class:`GenerationRequest`,
      :class:`GenerationSuccess`, :class:`GenerationFailure`
    - Registry: :class:`ModelRegistry`, :class:`ModelNotFoundError`
    - Errors: :class:`ErrorCode`
    - Cancellation: :class:`CancellationToken`
"""

from .base.cancellation import CancellationToken
from .base.errors import ErrorCode
from .base.models import GenerationFailure, GenerationRequest, GenerationResult, GenerationSuccess
from .factory import build_default_client, create_transport
from .registry import ModelNotFoundError, ModelRegistry, RegistryConfigError
from .resilient import ResilientGenerationClient

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ResilientGenerationClient",
    "build_default_client",
    "create_transport",
    "GenerationRequest",
    "GenerationResult",
    "GenerationSuccess",
    "GenerationFailure",
    "ModelRegistry",
    "ModelNotFoundError",
    "RegistryConfigError",
    "ErrorCode",
    "CancellationToken",
]
