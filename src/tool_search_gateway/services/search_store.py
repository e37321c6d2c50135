"""Common contract for tool search strategies.

Every strategy builds an immutable index snapshot from the full catalog and
publishes it with a single attribute assignment. Searches read whichever
snapshot is current when they start, so a rebuild never exposes a half-built
index. Builds are serialized with a lock; searches take no lock.
"""

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, Iterable, TypeVar

from ..models.tool import Tool

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchIndex:
    """Snapshot of the catalog a strategy searches over."""

    tools: tuple[Tool, ...] = ()


IndexT = TypeVar("IndexT", bound=SearchIndex)


class SearchStore(ABC, Generic[IndexT]):
    """Interface every tool search strategy implements."""

    strategy: str = "base"

    def __init__(self) -> None:
        self._index: IndexT = self._empty_index()
        self._build_lock = threading.Lock()

    def build_from_tools(self, tools: Iterable[Tool]) -> None:
        """Replace the current index with one built from the full catalog.

        Raises:
            IndexBuildError: If the index cannot be constructed. The previous
                index stays in place.
        """
        catalog = tuple(tools)
        with self._build_lock:
            logger.info(f"Building {self.strategy} search index ({len(catalog)} tools)")
            index = self._build_index(catalog)
            self._index = index
        logger.info(f"{self.strategy} search index built ({len(catalog)} tools)")

    def search(self, query: str, top_k: int) -> list[Tool]:
        """Return at most top_k tools, most relevant first."""
        index = self._index
        if top_k <= 0 or not index.tools:
            return []

        results = self._search_index(index, query, top_k)[:top_k]
        logger.debug(
            f"{self.strategy} search completed: query={query!r} requested={top_k} returned={len(results)}"
        )
        return results

    def get_tool_count(self) -> int:
        """Number of tools in the current index."""
        return len(self._index.tools)

    @abstractmethod
    def _empty_index(self) -> IndexT:
        """Index used before the first successful build."""

    @abstractmethod
    def _build_index(self, tools: tuple[Tool, ...]) -> IndexT:
        """Construct a new index snapshot. Must not touch self._index."""

    @abstractmethod
    def _search_index(self, index: IndexT, query: str, top_k: int) -> list[Tool]:
        """Rank tools of a non-empty index against the query."""
