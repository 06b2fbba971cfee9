"""
Fares Module

Prices ticket-type rows for the Bus Ticketing API.
It includes:

- Currency conversion for fares departing from Ukrainian cities
- Time-bounded route discounts (percentage decrease/increase or fixed amount)
- A generic price adjuster over arbitrary named price columns
- Ticket-type lookups by route and reachable destinations by city

Key Components:
- currency.py: exchange rate lookup with a neutral default of 1
- discounts.py: active discount resolution (latest record wins)
- adjuster.py: conversion, discount and rounding of price columns
- service.py: ticket-type row lookup, onward/return aware
- router.py: FastAPI endpoints for ticket types and destinations
- schemas.py: Pydantic models for request/response structures
"""

from .router import router
from .adjuster import adjust, PriceAdjustment, DiscountType
from .currency import CurrencyResolver
from .discounts import DiscountResolver
from .service import TicketTypeService, RouteNotFoundError, leg_cities
from .schemas import (
    LegDirection, TicketTypeRequest, TicketTypePrice, RouteTicketTypes,
    TicketTypeResponse, DestinationsResponse
)

__all__ = [
    "router",
    "adjust",
    "PriceAdjustment",
    "DiscountType",
    "CurrencyResolver",
    "DiscountResolver",
    "TicketTypeService",
    "RouteNotFoundError",
    "leg_cities",
    "LegDirection",
    "TicketTypeRequest",
    "TicketTypePrice",
    "RouteTicketTypes",
    "TicketTypeResponse",
    "DestinationsResponse"
]
