from .transport import GeminiTransport

__all__ = ["GeminiTransport"]
