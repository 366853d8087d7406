"""
Search package for the storefront backend.

This package handles the keyword-based product search:
- Lexicon tables for price words, materials and product types
- Extraction of price ranges, materials and product types from free text
- Criteria building and category narrowing
- Relevance ranking of the matched products
"""

from .router import search_router
from .service import SearchService

__all__ = ['search_router', 'SearchService']
