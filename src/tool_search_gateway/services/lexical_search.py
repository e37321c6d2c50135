# Lexical tool search
# Weighted substring matching over tool name, description and category

from ..models.tool import Tool
from .search_store import SearchIndex, SearchStore
from .text import query_words

NAME_WEIGHT = 3
DESCRIPTION_WEIGHT = 2
CATEGORY_WEIGHT = 1


def lexical_score(tool: Tool, words: list[str]) -> int:
    """Sum of field weights for every query word found in each field."""
    name = tool.name.lower()
    description = tool.description.lower()
    category = tool.category.lower()

    score = 0
    for word in words:
        if word in name:
            score += NAME_WEIGHT
        if word in description:
            score += DESCRIPTION_WEIGHT
        if word in category:
            score += CATEGORY_WEIGHT
    return score


class LexicalSearchStore(SearchStore[SearchIndex]):
    """Keyword search that needs no model or external process.

    The empty query matches every tool with score 0. Equal scores keep
    catalog order.
    """

    strategy = "lexical"

    def _empty_index(self) -> SearchIndex:
        return SearchIndex()

    def _build_index(self, tools: tuple[Tool, ...]) -> SearchIndex:
        return SearchIndex(tools=tools)

    def _search_index(self, index: SearchIndex, query: str, top_k: int) -> list[Tool]:
        words = query_words(query)

        scored = []
        for tool in index.tools:
            score = lexical_score(tool, words)
            if score > 0 or query == "":
                scored.append((score, tool))

        # sorted() is stable, so ties stay in catalog order
        scored = sorted(scored, key=lambda item: item[0], reverse=True)
        return [tool for _, tool in scored[:top_k]]
