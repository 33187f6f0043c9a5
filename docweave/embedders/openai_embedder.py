import numpy as np
from openai import AsyncOpenAI, OpenAIError

from docweave.embedders.base import EmbeddingError


class OpenAIEmbedder:
    def __init__(self, api_key: str, model: str = "text-embedding-3-large"):
        self.openai_client = AsyncOpenAI(api_key=api_key)
        self.model = model

    async def embed_text(self, text: str) -> np.ndarray:
        try:
            response = await self.openai_client.embeddings.create(input=text, model=self.model)
        except OpenAIError as e:
            raise EmbeddingError(f"OpenAI embedding failed: {e}") from e
        return np.array(response.data[0].embedding, dtype=np.float32)
