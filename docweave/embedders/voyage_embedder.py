import numpy as np
import voyageai
from voyageai.error import VoyageError

from docweave.embedders.base import EmbeddingError


class VoyageEmbedder:
    def __init__(self, api_key: str, model: str = "voyage-3"):
        self.client = voyageai.AsyncClient(api_key=api_key)
        self.model = model

    async def embed_text(self, text: str) -> np.ndarray:
        try:
            result = await self.client.embed(texts=[text], model=self.model, input_type="document")
        except VoyageError as e:
            raise EmbeddingError(f"Voyage embedding failed: {e}") from e
        embedding = result.embeddings[0]
        return np.array(embedding, dtype=np.float32)
