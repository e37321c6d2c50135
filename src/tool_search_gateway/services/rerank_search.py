# Rerank tool search
# Delegates ranking of the full catalog to an external reasoning process

import json
import logging
from dataclasses import dataclass

from ..models.tool import Tool, ToolMetadata
from .errors import IndexBuildError, RankerError, SearchError
from .rankers import ToolRanker
from .search_store import SearchIndex, SearchStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RerankIndex(SearchIndex):
    """Tools plus the serialized catalog sent to the ranker."""

    payload: bytes = b"[]"


def serialize_catalog(tools: tuple[Tool, ...]) -> bytes:
    """Serialize tool metadata, including schemas that are string-keyed mappings."""
    metadata = [ToolMetadata.from_tool(tool).to_payload() for tool in tools]
    try:
        return json.dumps(metadata, ensure_ascii=False, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise IndexBuildError(f"Failed to serialize tool schemas: {e}") from e


class RerankSearchStore(SearchStore[RerankIndex]):
    """Search store that trusts an external ranker's ordering."""

    strategy = "rerank"

    def __init__(self, ranker: ToolRanker) -> None:
        self.ranker = ranker
        super().__init__()

    def _empty_index(self) -> RerankIndex:
        return RerankIndex()

    def _build_index(self, tools: tuple[Tool, ...]) -> RerankIndex:
        payload = serialize_catalog(tools)
        logger.info(f"Serialized tool catalog: {len(tools)} tools, {len(payload) // 1024} KB")
        return RerankIndex(tools=tools, payload=payload)

    def _search_index(self, index: RerankIndex, query: str, top_k: int) -> list[Tool]:
        try:
            names = self.ranker.rank(query, index.payload, top_k)
        except RankerError as e:
            raise SearchError(f"Rerank search failed: {e.message}", e.details) from e

        tool_map = {tool.name: tool for tool in index.tools}

        results: list[Tool] = []
        seen: set[str] = set()
        dropped: list[str] = []
        for name in names:
            tool = tool_map.get(name)
            if tool is None:
                dropped.append(name)
            elif name not in seen:
                seen.add(name)
                results.append(tool)

        if dropped:
            logger.warning(f"Ranker returned {len(dropped)} unknown tool names: {dropped}")

        return results[:top_k]
