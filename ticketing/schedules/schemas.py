from pydantic import BaseModel
from typing import Optional
from datetime import date
from decimal import Decimal

from ticketing.models import Bus, City, Route, RouteDiscount, RouteStop

class CityInfo(BaseModel):
    """City as shown in search results"""
    id: int
    name: str
    country: Optional[str] = None
    from_ukraine: bool = False

class RouteInfo(BaseModel):
    id: int
    title: str

class BusInfo(BaseModel):
    id: int
    name: str
    registration_number: Optional[str] = None
    total_seats: Optional[int] = None

class StopInfo(BaseModel):
    """Stop along a route with its timetable"""
    id: int
    stop_order: int
    city: Optional[CityInfo] = None
    departure_time: Optional[str] = None  # HH:mm
    arrival_time: Optional[str] = None  # HH:mm

class DiscountInfo(BaseModel):
    """Route discount applied to a price set"""
    id: int
    discount_type: str
    discount_value: Optional[Decimal] = None
    from_date: date
    to_date: date

def city_info(city: Optional[City]) -> Optional[CityInfo]:
    if city is None:
        return None
    return CityInfo(
        id=city.id,
        name=city.name,
        country=city.country,
        from_ukraine=bool(city.from_ukraine)
    )

def route_info(route: Route) -> RouteInfo:
    return RouteInfo(id=route.id, title=route.title)

def bus_info(bus: Optional[Bus]) -> Optional[BusInfo]:
    if bus is None:
        return None
    return BusInfo(
        id=bus.id,
        name=bus.name,
        registration_number=bus.registration_number,
        total_seats=bus.total_seats
    )

def stop_info(stop: RouteStop) -> StopInfo:
    return StopInfo(
        id=stop.id,
        stop_order=stop.stop_order,
        city=city_info(stop.city),
        departure_time=stop.departure_time,
        arrival_time=stop.arrival_time
    )

def discount_info(discount: Optional[RouteDiscount]) -> Optional[DiscountInfo]:
    if discount is None:
        return None
    return DiscountInfo(
        id=discount.id,
        discount_type=discount.discount_type,
        discount_value=discount.discount_value,
        from_date=discount.from_date,
        to_date=discount.to_date
    )
