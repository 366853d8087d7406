"""
Module containing the natural-language product search pipeline.
"""

import asyncio
from typing import Any, NamedTuple, Optional, Sequence, Tuple

from structlog import get_logger

from ..exceptions import (
    AppBaseException,
    InvalidQueryError,
    SearchCancelledError,
    SearchFailedError,
)
from ..logging_config import error_log
from ..schemas import SearchParams, SearchResponse, SearchResult
from .criteria import build_search_criteria, with_category_restriction
from .extractors import extract_materials, extract_price_range, extract_product_types
from .ranking import rank_products
from .repository import CategoryRepository, ProductRepository

logger = get_logger(__name__)

FOUND_MESSAGE = "Products found successfully"
NOT_FOUND_MESSAGE = "No products found matching your criteria"


class CategoryLookup(NamedTuple):
    """Outcome of the category lookup: matched ids, or the error that stopped it."""
    ids: Tuple[int, ...] = ()
    error: Optional[Exception] = None


class SearchService:
    """
    Keyword search over the product catalogue.

    A search runs these steps in order:
    1. Extract the price range, materials and product types from the text
    2. Build the criteria tree
    3. Restrict to matching categories when product types were found
    4. Query the product repository
    5. Rank the results by material relevance
    """

    def __init__(
        self,
        products: ProductRepository,
        categories: CategoryRepository,
        timeout: Optional[float] = None,
        max_query_length: Optional[int] = None
    ):
        """
        Initialize the search service.

        Args:
            products (ProductRepository): Product store to query
            categories (CategoryRepository): Category store used to narrow product types
            timeout (Optional[float]): Seconds before the search is cancelled, None to wait forever
            max_query_length (Optional[int]): Longest accepted query, None for no limit
        """
        self.products = products
        self.categories = categories
        self.timeout = timeout
        self.max_query_length = max_query_length

    async def search(self, query_text: Optional[str]) -> SearchResponse:
        """
        Run a free-text search and return the ranked response.

        Raises:
            InvalidQueryError: If the query is empty or too long
            RepositoryUnavailableError: If the product store cannot be reached
            SearchCancelledError: If the search does not finish within the timeout
            SearchFailedError: For any other failure
        """
        query = (query_text or "").strip()
        if not query:
            raise InvalidQueryError()
        if self.max_query_length and len(query) > self.max_query_length:
            raise InvalidQueryError(
                f"Search query must be at most {self.max_query_length} characters"
            )

        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.timeout if self.timeout else None

        try:
            return await self._run(query, deadline)
        except AppBaseException:
            raise
        except Exception as e:
            error_log(e, {"context": "search_execution", "query": query})
            raise SearchFailedError(str(e)) from e

    async def _call(self, repository: Any, method: str, deadline: Optional[float], *args):
        """
        Run a blocking repository method on the executor before the deadline.

        On expiry the repository is interrupted when it supports it, and the
        worker is waited for so nothing keeps using the repository's session
        once the search has returned.
        """
        loop = asyncio.get_running_loop()
        pending = loop.run_in_executor(None, getattr(repository, method), *args)
        remaining = None if deadline is None else max(deadline - loop.time(), 0)

        done, _ = await asyncio.wait({pending}, timeout=remaining)
        if pending in done:
            return pending.result()

        interrupt = getattr(repository, "interrupt", None)
        if callable(interrupt):
            interrupt()
        await asyncio.wait({pending})
        error = pending.exception()
        logger.warning(
            "search_call_interrupted",
            method=method,
            timeout=self.timeout,
            error=str(error) if error else None
        )
        raise SearchCancelledError(f"no response within {self.timeout}s")

    async def _run(self, query: str, deadline: Optional[float]) -> SearchResponse:
        price_range = extract_price_range(query)
        materials = extract_materials(query)
        product_types = extract_product_types(query)
        logger.info(
            "search_parameters_extracted",
            query=query,
            price_range=price_range.model_dump() if price_range else None,
            materials=materials,
            product_types=product_types
        )

        criteria = build_search_criteria(query, price_range, materials, product_types)

        if product_types:
            lookup = await self._lookup_categories(product_types, deadline)
            if lookup.error is not None:
                logger.warning(
                    "category_restriction_skipped",
                    product_types=list(product_types),
                    error=str(lookup.error)
                )
            criteria = with_category_restriction(criteria, lookup.ids)

        logger.debug("search_criteria_built", criteria=criteria.to_dict())

        products = await self._call(self.products, "find", deadline, criteria, True)
        ranked = rank_products(products, materials)

        logger.info("search_completed", query=query, count=len(ranked))

        return SearchResponse(
            success=True,
            message=FOUND_MESSAGE if ranked else NOT_FOUND_MESSAGE,
            count=len(ranked),
            search_params=SearchParams(
                query=query,
                price_range=price_range,
                materials=list(materials),
                product_types=list(product_types)
            ),
            products=[
                SearchResult(
                    id=item.product.id,
                    name=item.product.name,
                    description=item.product.description,
                    price=item.product.price,
                    category=item.product.category_name,
                    images=list(item.product.images),
                    stock=item.product.stock,
                    relevance=item.score
                )
                for item in ranked
            ]
        )

    async def _lookup_categories(
        self, product_types: Sequence[str], deadline: Optional[float]
    ) -> CategoryLookup:
        """Find category ids for the product types; failures mean no restriction."""
        try:
            refs = await self._call(
                self.categories, "find_by_name_substrings", deadline, list(product_types)
            )
        except SearchCancelledError:
            raise
        except Exception as e:
            error_log(e, {"context": "category_lookup", "product_types": list(product_types)})
            return CategoryLookup(error=e)

        if not refs:
            logger.info("no_matching_categories", product_types=list(product_types))
        return CategoryLookup(ids=tuple(ref.id for ref in refs))
