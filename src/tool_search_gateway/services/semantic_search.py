# Semantic tool search
# Ranks tools by cosine similarity between static text embeddings

import logging
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from ..models.tool import Tool
from .embeddings import TextEmbedder
from .search_store import SearchIndex, SearchStore
from .vector_math import Vector, cosine_similarity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmbeddingIndex(SearchIndex):
    """Tools plus one embedding row per tool, in catalog order."""

    embeddings: NDArray[np.float32] = field(
        default_factory=lambda: np.zeros((0, 0), dtype=np.float32)
    )

    def embedding_for(self, name: str) -> Vector | None:
        for tool, row in zip(self.tools, self.embeddings):
            if tool.name == name:
                return row
        return None


class SemanticSearchStore(SearchStore[EmbeddingIndex]):
    """Embedding search over a small catalog with a linear scan."""

    strategy = "semantic"

    def __init__(self, embedder: TextEmbedder) -> None:
        self.embedder = embedder
        super().__init__()

    def _empty_index(self) -> EmbeddingIndex:
        return EmbeddingIndex(
            embeddings=np.zeros((0, self.embedder.dimension), dtype=np.float32)
        )

    def _build_index(self, tools: tuple[Tool, ...]) -> EmbeddingIndex:
        if not tools:
            return self._empty_index()

        embeddings = np.vstack([self.embedder.generate(tool.search_text()) for tool in tools])
        embeddings.setflags(write=False)
        return EmbeddingIndex(tools=tools, embeddings=embeddings)

    def _search_index(self, index: EmbeddingIndex, query: str, top_k: int) -> list[Tool]:
        query_embedding = self.embedder.generate(query)

        scores = np.array(
            [cosine_similarity(query_embedding, row) for row in index.embeddings]
        )
        # Stable sort keeps catalog order among equal scores
        order = np.argsort(-scores, kind="stable")
        return [index.tools[i] for i in order[:top_k]]
