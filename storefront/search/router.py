"""
Module containing FastAPI router for search functionality.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Optional

from ..config import Settings, get_settings
from ..database import get_db
from ..exceptions import SearchFailedError
from ..logging_config import log_endpoint_access, log_search_request
from ..schemas import SearchResponse
from .repository import SqlCategoryRepository, SqlProductRepository
from .service import SearchService

search_router = APIRouter()

def get_search_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
) -> SearchService:
    """Get a search service bound to the request's database session."""
    return SearchService(
        products=SqlProductRepository(db),
        categories=SqlCategoryRepository(db),
        timeout=settings.SEARCH_TIMEOUT_SECONDS,
        max_query_length=settings.MAX_QUERY_LENGTH
    )

@search_router.get("", response_model=SearchResponse)
@log_search_request
@log_endpoint_access
async def search_products(
    q: Optional[str] = Query(None, description="Free-text query, e.g. 'gold ring under 5000'"),
    service: SearchService = Depends(get_search_service),
    settings: Settings = Depends(get_settings)
):
    """
    Search products with a natural-language query.

    Price phrases ("under 5000", "between 2000 and 8000"), materials and
    product types are recognised and turned into filters; results are
    ranked by material relevance, then price.
    """
    try:
        return await service.search(q)
    except SearchFailedError as e:
        if settings.is_production:
            raise HTTPException(status_code=500, detail="Error performing search") from e
        raise
