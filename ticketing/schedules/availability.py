from typing import Dict, Iterable, List, Optional, Set
from datetime import date, datetime, time
from enum import Enum
from sqlalchemy.orm import Session

from ticketing.logging_config import logger
from ticketing.models import BusSchedule, RouteClosure
from ticketing.schedules.stops import StopResolver

# Locale independent, matches Python's date.weekday() numbering
WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

class RecurrencePattern(str, Enum):
    """Recurrence rules a bus schedule may use"""
    DAILY = "Daily"
    WEEKLY = "Weekly"
    CUSTOM = "Custom"

def weekday_name(travel_date: date) -> str:
    return WEEKDAY_NAMES[travel_date.weekday()]

def schedule_weekdays(schedule: BusSchedule) -> Set[str]:
    """Normalised weekday names of a schedule (stored as a list or a comma separated string)"""
    days = schedule.days_of_week or []
    if isinstance(days, str):
        days = days.split(",")
    return {str(day).strip().lower() for day in days if str(day).strip()}

def within_validity_window(schedule: BusSchedule, travel_date: date) -> bool:
    """
    Schedules flagged ``available`` run regardless of their window. Otherwise
    a window with both bounds set must contain the date (inclusive); with
    either bound missing the schedule is unbounded.
    """
    if schedule.available:
        return True
    if schedule.valid_from and schedule.valid_to:
        return schedule.valid_from <= travel_date <= schedule.valid_to
    return True

def runs_on(schedule: BusSchedule, travel_date: date) -> bool:
    """Recurrence check; unrecognised patterns never run"""
    pattern = schedule.recurrence_pattern
    if pattern == RecurrencePattern.DAILY.value:
        return True
    if pattern in (RecurrencePattern.WEEKLY.value, RecurrencePattern.CUSTOM.value):
        return weekday_name(travel_date).lower() in schedule_weekdays(schedule)

    logger.warning(f"Schedule {schedule.id} has unknown recurrence pattern '{pattern}'")
    return False

def is_closed(closures: Iterable[RouteClosure], travel_date: date) -> bool:
    return any(closure.from_date <= travel_date <= closure.to_date for closure in closures)

class ScheduleAvailabilityFilter:
    """Decides whether a bus schedule can be booked for a date"""

    def __init__(self, db: Session, stop_resolver: Optional[StopResolver] = None):
        self.db = db
        self.stop_resolver = stop_resolver or StopResolver(db)
        self._closures_cache: Dict[int, List[RouteClosure]] = {}

    def closures_for(self, route_id: int) -> List[RouteClosure]:
        if route_id not in self._closures_cache:
            self._closures_cache[route_id] = self.db.query(RouteClosure).filter(
                RouteClosure.route_id == route_id
            ).all()
        return self._closures_cache[route_id]

    def is_available(
        self,
        schedule: BusSchedule,
        travel_date: date,
        now: datetime,
        departure_time: Optional[time] = None
    ) -> bool:
        """
        Apply, in order: route/schedule status, validity window, recurrence,
        route closures and, for today's date, the departure cut-off.

        ``departure_time`` defaults to the route's first stop departure.
        """
        route = schedule.route
        if route is None or route.is_deleted:
            logger.warning(f"Schedule {schedule.id} references a missing or deleted route, skipping")
            return False

        if not schedule.is_active or schedule.is_deleted:
            return False

        if not within_validity_window(schedule, travel_date):
            return False

        if not runs_on(schedule, travel_date):
            return False

        if is_closed(self.closures_for(route.id), travel_date):
            logger.debug(f"Route {route.id} closed on {travel_date}")
            return False

        if travel_date == now.date():
            if departure_time is None:
                departure_time = self.stop_resolver.first_departure(route.id)
            if departure_time is None:
                logger.warning(f"Route {route.id} has no valid first departure time, skipping schedule {schedule.id}")
                return False
            if datetime.combine(travel_date, departure_time) <= now:
                return False

        return True
