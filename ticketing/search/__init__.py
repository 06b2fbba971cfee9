"""
Bus Search Module

Composes schedules and fares into priced, bookable bus options.

Key Components:
- service.py: onward/return search and the look-ahead search over upcoming days
- validation.py: request validation ahead of the search
- router.py: FastAPI endpoints for bus search
- schemas.py: Pydantic models for request/response structures
"""

from .router import router
from .service import FareSearchService, format_duration, leg_times
from .validation import SearchValidator
from .schemas import (
    BusSearchRequest, BusSearchResponse, UpcomingSearchRequest, UpcomingSearchResponse,
    PricedOption, SearchResult, SearchValidationError
)

__all__ = [
    "router",
    "FareSearchService",
    "format_duration",
    "leg_times",
    "SearchValidator",
    "BusSearchRequest",
    "BusSearchResponse",
    "UpcomingSearchRequest",
    "UpcomingSearchResponse",
    "PricedOption",
    "SearchResult",
    "SearchValidationError"
]
