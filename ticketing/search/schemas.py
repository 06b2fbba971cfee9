from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from datetime import date
from decimal import Decimal

from ticketing.schedules.schemas import RouteInfo, BusInfo, StopInfo, DiscountInfo

class BusSearchRequest(BaseModel):
    """Request schema for bus search"""
    pickup_point: int
    dropoff_point: int
    travel_date: date
    return_date: Optional[date] = None

class UpcomingSearchRequest(BaseModel):
    """Request schema for the look-ahead search over the next few days"""
    pickup_point: int
    dropoff_point: int
    travel_date: date
    days: Optional[int] = Field(None, ge=1, le=14)
    limit: Optional[int] = Field(None, ge=1, le=50)

class PricedOption(BaseModel):
    """A bookable bus on one leg with its fares"""
    schedule_id: int
    recurrence_pattern: str
    route: RouteInfo
    bus: Optional[BusInfo] = None
    travel_date: str  # DD-MM-YYYY
    departure_time: str  # DD-MM-YYYY HH:mm
    arrival_time: str  # DD-MM-YYYY HH:mm
    duration: str
    exchange_rate: Decimal
    discount: Optional[DiscountInfo] = None
    base_price: Dict[str, Any]  # After currency conversion only
    updated_base_price: Dict[str, Any]  # After conversion and discount
    route_stops: List[StopInfo]
    pickup_stop: StopInfo
    dropoff_stop: StopInfo
    total_booked_seats: int
    available_seats: Optional[int] = None

class SearchResult(BaseModel):
    """Onward and return options of a search"""
    onward: List[PricedOption] = Field(default_factory=list)
    return_: List[PricedOption] = Field(default_factory=list, alias="return")

    class Config:
        populate_by_name = True

class BusSearchResponse(SearchResult):
    success: bool = True
    message: str

class UpcomingSearchResponse(BaseModel):
    success: bool = True
    message: str
    buses: List[PricedOption]

class SearchValidationError(BaseModel):
    """Search validation error details"""
    error_code: str
    error_message: str
    field: Optional[str] = None
