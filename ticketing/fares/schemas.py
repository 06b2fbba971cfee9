from pydantic import BaseModel
from typing import Any, Dict, List, Optional
from datetime import date
from decimal import Decimal
from enum import Enum

from ticketing.schedules.schemas import CityInfo, RouteInfo, DiscountInfo

BASE_PRICE_COLUMN = "Baseprice"

class LegDirection(str, Enum):
    """Which way a leg runs relative to the requested pickup/dropoff pair"""
    ONWARD = "onward"
    RETURN = "return"

class TicketTypeRequest(BaseModel):
    """Request schema for ticket types of a route"""
    route_id: int
    pickup_point: Optional[int] = None
    dropoff_point: Optional[int] = None
    travel_date: Optional[date] = None  # Discount date, defaults to today

class TicketTypePrice(BaseModel):
    """One price row with currency and discount applied"""
    id: int
    route_id: int
    start_city: Optional[CityInfo] = None
    end_city: Optional[CityInfo] = None
    base_price: Dict[str, Any]
    updated_base_price: Dict[str, Any]

class RouteTicketTypes(BaseModel):
    """All priced rows of a route"""
    route: RouteInfo
    exchange_rate: Decimal
    discount: Optional[DiscountInfo] = None
    price_columns: List[str]
    ticket_types: List[TicketTypePrice]

class TicketTypeResponse(BaseModel):
    success: bool = True
    message: str
    data: RouteTicketTypes

class DestinationsResponse(BaseModel):
    success: bool = True
    message: str
    cities: List[CityInfo]
