# Tool search API
# Catalog rebuilds and per-query tool selection for the aggregator

import logging
import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Request

from ..config import Settings, get_config
from ..services.errors import IndexBuildError, SearchError
from ..services.search_store import SearchStore
from .models import (
    CatalogRequest,
    CatalogResponse,
    ToolCountResponse,
    ToolSearchRequest,
    ToolSearchResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tools", tags=["tools"])


def get_search_store(request: Request) -> SearchStore:
    """Get the search store created during app startup."""
    store = getattr(request.app.state, "search_store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Search store not initialized")
    return store


@router.put("/catalog", response_model=CatalogResponse, operation_id="build_catalog")
def build_catalog(
    request: CatalogRequest,
    store: SearchStore = Depends(get_search_store),  # noqa: B008
) -> CatalogResponse:
    """Replace the search index with the given catalog."""
    try:
        store.build_from_tools(request.tools)
    except IndexBuildError as e:
        logger.error(f"Catalog rebuild failed: {e.message}")
        raise HTTPException(status_code=422, detail=e.message) from e

    return CatalogResponse(status="success", tool_count=store.get_tool_count())


@router.post("/search", response_model=ToolSearchResponse, operation_id="search_tools")
def search_tools(
    request: ToolSearchRequest,
    store: SearchStore = Depends(get_search_store),  # noqa: B008
    config: Settings = Depends(get_config),  # noqa: B008
) -> ToolSearchResponse:
    """Return the tools most relevant to the query."""
    limit = request.limit if request.limit is not None else config.search_result_limit

    try:
        tools = store.search(request.query, limit)
    except SearchError as e:
        logger.error(f"Tool search failed: {e.message}")
        raise HTTPException(status_code=502, detail=e.message) from e

    return ToolSearchResponse(
        tools=tools,
        strategy=store.strategy,
        query_id=str(uuid.uuid4()),
        timestamp=datetime.now(),
    )


@router.get("/count", response_model=ToolCountResponse, operation_id="count_tools")
async def count_tools(
    store: SearchStore = Depends(get_search_store),  # noqa: B008
) -> ToolCountResponse:
    """Number of tools in the current index."""
    return ToolCountResponse(tool_count=store.get_tool_count(), strategy=store.strategy)
