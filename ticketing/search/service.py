from typing import Dict, List, Optional
from datetime import date, datetime, timedelta
from sqlalchemy.orm import Session, joinedload

from ticketing.config import settings
from ticketing.logging_config import logger
from ticketing.models import BusSchedule, TicketType
from ticketing.fares.adjuster import adjust
from ticketing.fares.currency import CurrencyResolver
from ticketing.fares.discounts import DiscountResolver
from ticketing.fares.schemas import LegDirection
from ticketing.fares.service import TicketTypeService, leg_cities
from ticketing.schedules.availability import ScheduleAvailabilityFilter
from ticketing.schedules.occupancy import SeatOccupancyCounter
from ticketing.schedules.schemas import bus_info, discount_info, route_info, stop_info
from ticketing.schedules.stops import StopResolver, parse_stop_time
from ticketing.search.schemas import PricedOption, SearchResult

DATE_FORMAT = "%d-%m-%Y"
DATETIME_FORMAT = "%d-%m-%Y %H:%M"

def format_duration(duration: timedelta) -> str:
    """Render a leg duration as whole hours and remaining minutes"""
    total_minutes = int(duration.total_seconds()) // 60
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours} hours {minutes} minutes"

def leg_times(travel_date: date, departure_clock, arrival_clock):
    """Departure and arrival datetimes; an arrival before departure lands the next day"""
    departure = datetime.combine(travel_date, departure_clock)
    arrival = datetime.combine(travel_date, arrival_clock)
    if arrival < departure:
        arrival += timedelta(days=1)
    return departure, arrival

class FareSearchService:
    """Service for finding priced, bookable buses between two cities"""

    def __init__(self, db: Session, now: Optional[datetime] = None):
        self.db = db
        self.now = now or datetime.now()
        self.stop_resolver = StopResolver(db)
        self.currency_resolver = CurrencyResolver(db)
        self.discount_resolver = DiscountResolver(db)
        self.availability = ScheduleAvailabilityFilter(db, self.stop_resolver)
        self.occupancy = SeatOccupancyCounter(db)
        self.ticket_types = TicketTypeService(
            db,
            currency_resolver=self.currency_resolver,
            discount_resolver=self.discount_resolver,
            stop_resolver=self.stop_resolver
        )

    def search(
        self,
        pickup_city_id: int,
        dropoff_city_id: int,
        travel_date: date,
        return_date: Optional[date] = None
    ) -> SearchResult:
        """Onward options for travel_date and, when asked, return options for return_date"""
        onward = self.search_leg(pickup_city_id, dropoff_city_id, travel_date, LegDirection.ONWARD)

        returns: List[PricedOption] = []
        if return_date:
            returns = self.search_leg(pickup_city_id, dropoff_city_id, return_date, LegDirection.RETURN)

        logger.info(
            f"Search {pickup_city_id}->{dropoff_city_id} on {travel_date} (return {return_date}): "
            f"{len(onward)} onward, {len(returns)} return"
        )
        return SearchResult(onward=onward, return_=returns)

    def search_upcoming(
        self,
        pickup_city_id: int,
        dropoff_city_id: int,
        travel_date: date,
        days: Optional[int] = None,
        limit: Optional[int] = None
    ) -> List[PricedOption]:
        """Onward options for travel_date and the following days, stopping at limit"""
        days = days or settings.SEARCH_LOOKAHEAD_DAYS
        limit = limit or settings.SEARCH_RESULT_LIMIT

        options: List[PricedOption] = []
        for offset in range(days):
            current_date = travel_date + timedelta(days=offset)
            for option in self.search_leg(pickup_city_id, dropoff_city_id, current_date, LegDirection.ONWARD):
                options.append(option)
                if len(options) >= limit:
                    return options

        return options

    def search_leg(
        self,
        pickup_city_id: int,
        dropoff_city_id: int,
        travel_date: date,
        direction: LegDirection = LegDirection.ONWARD
    ) -> List[PricedOption]:
        """Priced options for one leg; RETURN travels dropoff -> pickup"""
        from_city_id, to_city_id = leg_cities(pickup_city_id, dropoff_city_id, direction)

        rows = self.ticket_types.price_rows(pickup_city_id, dropoff_city_id, direction)
        if not rows:
            logger.info(f"No routes/lines available for {from_city_id}->{to_city_id}")
            return []

        # First row wins if a route has several for the same pair
        rows_by_route: Dict[int, TicketType] = {}
        for row in rows:
            rows_by_route.setdefault(row.route_id, row)

        schedules = self.db.query(BusSchedule).options(
            joinedload(BusSchedule.route),
            joinedload(BusSchedule.bus)
        ).filter(
            BusSchedule.route_id.in_(list(rows_by_route.keys()))
        ).order_by(BusSchedule.id.asc()).all()

        options = []
        for schedule in schedules:
            option = self._price_schedule(
                schedule, rows_by_route[schedule.route_id], from_city_id, to_city_id, travel_date
            )
            if option is not None:
                options.append(option)

        return options

    def _price_schedule(
        self,
        schedule: BusSchedule,
        price_row: TicketType,
        from_city_id: int,
        to_city_id: int,
        travel_date: date
    ) -> Optional[PricedOption]:
        """Build the priced option for a schedule, or None when it cannot be offered"""
        if not self.availability.is_available(schedule, travel_date, self.now):
            return None

        route_id = schedule.route_id
        pickup_stop = self.stop_resolver.stop_for(route_id, from_city_id)
        dropoff_stop = self.stop_resolver.stop_for(route_id, to_city_id)
        if not pickup_stop or not dropoff_stop:
            logger.warning(
                f"Route {route_id} has prices for {from_city_id}->{to_city_id} but is missing a stop, "
                f"skipping schedule {schedule.id}"
            )
            return None

        departure_clock = parse_stop_time(pickup_stop.departure_time)
        arrival_clock = parse_stop_time(dropoff_stop.arrival_time)
        if departure_clock is None or arrival_clock is None:
            logger.warning(
                f"Route {route_id} has malformed stop times "
                f"('{pickup_stop.departure_time}', '{dropoff_stop.arrival_time}'), skipping schedule {schedule.id}"
            )
            return None

        departure, arrival = leg_times(travel_date, departure_clock, arrival_clock)
        if travel_date == self.now.date() and departure <= self.now:
            return None

        exchange_rate = self.currency_resolver.rate_for_city(pickup_stop.city)
        discount = self.discount_resolver.active_discount(route_id, travel_date)
        adjustment = adjust(price_row.prices or {}, exchange_rate, discount)

        booked_seats = self.occupancy.booked_seats(route_id, from_city_id, to_city_id, travel_date)
        available_seats = None
        if schedule.bus is not None and schedule.bus.total_seats is not None:
            available_seats = max(schedule.bus.total_seats - booked_seats, 0)

        return PricedOption(
            schedule_id=schedule.id,
            recurrence_pattern=schedule.recurrence_pattern,
            route=route_info(schedule.route),
            bus=bus_info(schedule.bus),
            travel_date=travel_date.strftime(DATE_FORMAT),
            departure_time=departure.strftime(DATETIME_FORMAT),
            arrival_time=arrival.strftime(DATETIME_FORMAT),
            duration=format_duration(arrival - departure),
            exchange_rate=exchange_rate,
            discount=discount_info(discount),
            base_price=adjustment.base_price,
            updated_base_price=adjustment.updated_base_price,
            route_stops=[stop_info(stop) for stop in self.stop_resolver.all_stops(route_id)],
            pickup_stop=stop_info(pickup_stop),
            dropoff_stop=stop_info(dropoff_stop),
            total_booked_seats=booked_seats,
            available_seats=available_seats
        )
