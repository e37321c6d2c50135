# Test cases for the semantic search store
# Uses the real static embedding model over a tiny cached vector table

import threading

import numpy as np
import pytest

from tool_search_gateway.models.tool import Tool
from tool_search_gateway.services.embeddings import StaticEmbeddingModel
from tool_search_gateway.services.semantic_search import SemanticSearchStore


@pytest.fixture
def embedder(glove_cache):
    return StaticEmbeddingModel("6B.50d", glove_cache)


@pytest.fixture
def store(embedder, sample_tools):
    store = SemanticSearchStore(embedder)
    store.build_from_tools(sample_tools)
    return store


class TestSemanticSearchStore:
    def test_unbuilt_store_returns_empty(self, embedder):
        store = SemanticSearchStore(embedder)
        assert store.get_tool_count() == 0
        assert store.search("deploy", 3) == []

    def test_empty_catalog(self, embedder):
        store = SemanticSearchStore(embedder)
        store.build_from_tools([])
        assert store.get_tool_count() == 0
        assert store.search("deploy", 3) == []

    @pytest.mark.parametrize(
        "query,expected",
        [
            ("deployment to a cluster", "k8s_deploy"),
            ("web query", "web_search"),
            ("read filesystem", "read_file"),
            ("calculate math", "calculator"),
        ],
    )
    def test_most_similar_tool_ranks_first(self, store, query, expected):
        results = store.search(query, 1)
        assert [t.name for t in results] == [expected]

    def test_ranks_every_tool(self, store, sample_tools):
        results = store.search("search", 10)
        assert len(results) == len(sample_tools)
        assert results[0].name == "web_search"

    def test_tools_without_known_words_sort_last(self, embedder):
        # Arrange
        store = SemanticSearchStore(embedder)
        store.build_from_tools([
            Tool(name="zz", description="the a is"),
            Tool(name="searcher", description="search"),
        ])

        # Act
        results = store.search("search", 2)

        # Assert
        assert [t.name for t in results] == ["searcher", "zz"]

    def test_identical_text_gives_identical_embeddings(self, embedder):
        # Arrange
        store = SemanticSearchStore(embedder)
        store.build_from_tools([
            Tool(name="first", category="fs", description="read a file"),
            Tool(name="math", category="", description="calculate"),
            Tool(name="first", category="fs", description="read a file"),
        ])
        index = store._index

        # Assert
        assert np.array_equal(index.embeddings[0], index.embeddings[2])
        # Equal scores keep catalog order
        results = store.search("read file", 3)
        assert results[0] is index.tools[0]
        assert results[1] is index.tools[2]

    def test_embedding_lookup_by_name(self, store, embedder):
        index = store._index
        assert np.array_equal(
            index.embedding_for("read_file"),
            embedder.generate("read_file filesystem Read a file from the local filesystem"),
        )
        assert index.embedding_for("missing") is None

    def test_query_without_known_words(self, store, sample_tools):
        # All similarities are zero, so catalog order decides
        results = store.search("the a is", 2)
        assert results == sample_tools[:2]

    @pytest.mark.parametrize("top_k", [0, -3])
    def test_non_positive_top_k_returns_empty(self, store, top_k):
        assert store.search("search", top_k) == []


class GatedEmbedder:
    """Wraps an embedder and holds generate() for selected texts until released."""

    def __init__(self, inner, gated_texts):
        self.inner = inner
        self.gated_texts = set(gated_texts)
        self.started = threading.Event()
        self.release = threading.Event()

    @property
    def dimension(self):
        return self.inner.dimension

    def generate(self, text):
        if text in self.gated_texts:
            self.started.set()
            self.release.wait(timeout=10)
        return self.inner.generate(text)


class TestSnapshotSwap:
    def test_searches_use_old_catalog_until_rebuild_finishes(self, embedder, sample_tools):
        # Arrange
        replacement = [Tool(name="calculator_v2", category="math", description="calculate math")]
        gated = GatedEmbedder(embedder, [t.search_text() for t in replacement])
        store = SemanticSearchStore(gated)
        store.build_from_tools(sample_tools)

        builder = threading.Thread(target=store.build_from_tools, args=(replacement,))
        builder.start()
        try:
            assert gated.started.wait(timeout=10)

            # Act / Assert: the rebuild is blocked mid-way
            assert store.get_tool_count() == len(sample_tools)
            assert [t.name for t in store.search("calculate math", 1)] == ["calculator"]
        finally:
            gated.release.set()
            builder.join(timeout=10)

        # Assert: the new snapshot replaced the old one as a whole
        assert not builder.is_alive()
        assert store.get_tool_count() == 1
        assert [t.name for t in store.search("calculate math", 5)] == ["calculator_v2"]
