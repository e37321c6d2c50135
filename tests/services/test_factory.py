# Test cases for search store selection

import pytest

from tool_search_gateway.config import Settings
from tool_search_gateway.services.errors import ConfigurationError
from tool_search_gateway.services.factory import create_search_store
from tool_search_gateway.services.lexical_search import LexicalSearchStore
from tool_search_gateway.services.rankers import CLIToolRanker
from tool_search_gateway.services.rerank_search import RerankSearchStore
from tool_search_gateway.services.semantic_search import SemanticSearchStore


class TestCreateSearchStore:
    def test_lexical(self):
        store = create_search_store(Settings(search_provider="lexical"))
        assert isinstance(store, LexicalSearchStore)
        assert store.strategy == "lexical"

    def test_semantic_loads_model_at_construction(self, glove_cache):
        settings = Settings(search_provider="semantic", embedding_cache_dir=glove_cache)

        store = create_search_store(settings)

        assert isinstance(store, SemanticSearchStore)
        assert store.embedder.dimension == 50
        assert store.embedder.vocabulary_size > 0

    def test_semantic_with_unknown_model_fails_fast(self, tmp_path):
        settings = Settings(
            search_provider="semantic", embedding_model="nope", embedding_cache_dir=tmp_path
        )

        with pytest.raises(ConfigurationError):
            create_search_store(settings)

    def test_claude_uses_cli_ranker(self):
        store = create_search_store(Settings(search_provider="claude", claude_model="sonnet", ranker_timeout=20))

        assert isinstance(store, RerankSearchStore)
        assert isinstance(store.ranker, CLIToolRanker)
        assert store.ranker.command == ["claude", "-p", "--model", "sonnet"]
        assert store.ranker.timeout == 20

    def test_codex_uses_cli_ranker(self):
        store = create_search_store(Settings(search_provider="codex"))
        assert store.ranker.command == ["codex", "exec", "-"]

    def test_explicit_ranker_overrides_cli(self):
        ranker = object()
        store = create_search_store(Settings(search_provider="claude"), ranker=ranker)
        assert store.ranker is ranker

    def test_unknown_provider(self):
        settings = Settings.model_construct(search_provider="elastic")

        with pytest.raises(ConfigurationError) as exc_info:
            create_search_store(settings)

        assert exc_info.value.details["provider"] == "elastic"
