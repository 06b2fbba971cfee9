"""
Schedules Module

Decides which bus schedules run on a given date and resolves the stop
timetable and seat occupancy of a leg.

Key Components:
- availability.py: validity window, recurrence, route closures and departure cut-off
- stops.py: route stop lookup and HH:mm time parsing
- occupancy.py: booked seat counting per route, leg and date
- schemas.py: Pydantic models for cities, routes, buses, stops and discounts
"""

from .availability import ScheduleAvailabilityFilter, RecurrencePattern, runs_on, within_validity_window, is_closed
from .stops import StopResolver, parse_stop_time
from .occupancy import SeatOccupancyCounter
from .schemas import CityInfo, RouteInfo, BusInfo, StopInfo, DiscountInfo

__all__ = [
    "ScheduleAvailabilityFilter",
    "RecurrencePattern",
    "runs_on",
    "within_validity_window",
    "is_closed",
    "StopResolver",
    "parse_stop_time",
    "SeatOccupancyCounter",
    "CityInfo",
    "RouteInfo",
    "BusInfo",
    "StopInfo",
    "DiscountInfo"
]
