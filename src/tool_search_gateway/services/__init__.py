# Services package
# Tool relevance search strategies and their building blocks

from .embeddings import EMBEDDING_PRESETS, StaticEmbeddingModel
from .factory import create_search_store
from .lexical_search import LexicalSearchStore
from .rankers import CLIToolRanker, ToolRanker
from .rerank_search import RerankSearchStore
from .search_store import SearchStore
from .semantic_search import SemanticSearchStore

__all__ = [
    "EMBEDDING_PRESETS",
    "CLIToolRanker",
    "LexicalSearchStore",
    "RerankSearchStore",
    "SearchStore",
    "SemanticSearchStore",
    "StaticEmbeddingModel",
    "ToolRanker",
    "create_search_store",
]
