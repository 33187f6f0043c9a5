from typing import Protocol

import numpy as np


class EmbeddingError(Exception):
    """Raised when an embedding provider fails to embed a text."""


class EmbeddingCapability(Protocol):
    async def embed_text(self, text: str) -> np.ndarray: ...
