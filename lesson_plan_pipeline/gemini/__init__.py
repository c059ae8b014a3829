from .client import GeminiHttpClient, GenerationClient, GenerationError

__all__ = ["GeminiHttpClient", "GenerationClient", "GenerationError"]
