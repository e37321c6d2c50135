# Search store factory
# Picks the configured strategy once, at startup

import logging
import threading
from typing import Optional

from ..config import Settings
from .embeddings import StaticEmbeddingModel
from .errors import ConfigurationError
from .lexical_search import LexicalSearchStore
from .rankers import ToolRanker, claude_ranker, codex_ranker
from .rerank_search import RerankSearchStore
from .search_store import SearchStore
from .semantic_search import SemanticSearchStore

logger = logging.getLogger(__name__)


def create_search_store(
    settings: Settings,
    *,
    ranker: Optional[ToolRanker] = None,
    cancel_event: Optional[threading.Event] = None,
) -> SearchStore:
    """Create the search store selected by settings.search_provider.

    The semantic provider loads (and if needed downloads) its embedding model
    here, so a missing model fails at startup rather than on the first query.
    An explicit ranker overrides the CLI ranker of the claude/codex providers.
    """
    provider = settings.search_provider
    logger.info(f"Creating search store for provider: {provider}")

    if provider == "lexical":
        return LexicalSearchStore()

    if provider == "semantic":
        model = StaticEmbeddingModel(
            settings.embedding_model,
            settings.embedding_cache_dir,
            timeout=settings.embedding_download_timeout,
            cancel_event=cancel_event,
        )
        return SemanticSearchStore(model)

    if provider == "claude":
        return RerankSearchStore(ranker or claude_ranker(settings.claude_model, settings.ranker_timeout))

    if provider == "codex":
        return RerankSearchStore(ranker or codex_ranker(settings.ranker_timeout))

    raise ConfigurationError(
        f"Unknown search provider: {provider}",
        {"provider": provider, "available": ["lexical", "semantic", "claude", "codex"]},
    )
