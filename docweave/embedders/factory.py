from loguru import logger

from docweave.config import Settings
from docweave.embedders.base import EmbeddingCapability
from docweave.embedders.openai_embedder import OpenAIEmbedder
from docweave.embedders.voyage_embedder import VoyageEmbedder


def build_embedder(settings: Settings) -> EmbeddingCapability | None:
    """Create the embedding capability selected in settings.

    Args:
        settings: Application settings

    Returns:
        Embedder for the configured provider, or None when no provider is
        configured or its API key is missing
    """
    if settings.embedding_provider == "voyage":
        if not settings.voyage_ai_api_key:
            logger.warning("Voyage embeddings selected but no API key set, semantic analysis off")
            return None
        return VoyageEmbedder(api_key=settings.voyage_ai_api_key, model=settings.voyage_model)

    if settings.embedding_provider == "openai":
        if not settings.openai_api_key:
            logger.warning("OpenAI embeddings selected but no API key set, semantic analysis off")
            return None
        return OpenAIEmbedder(
            api_key=settings.openai_api_key, model=settings.openai_embedding_model
        )

    return None
