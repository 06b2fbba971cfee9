from typing import Iterable, List, Optional, Tuple
from datetime import date
from sqlalchemy.orm import Session, joinedload

from ticketing.logging_config import logger
from ticketing.models import City, Route, TicketType
from ticketing.fares.adjuster import adjust
from ticketing.fares.currency import CurrencyResolver
from ticketing.fares.discounts import DiscountResolver
from ticketing.fares.schemas import (
    BASE_PRICE_COLUMN, LegDirection, RouteTicketTypes, TicketTypePrice
)
from ticketing.schedules.schemas import city_info, discount_info, route_info
from ticketing.schedules.stops import StopResolver

class RouteNotFoundError(ValueError):
    """Raised when a route does not exist or has been deleted"""

def leg_cities(pickup_city_id: int, dropoff_city_id: int, direction: LegDirection) -> Tuple[int, int]:
    """(from, to) city ids actually travelled for a leg"""
    if direction == LegDirection.RETURN:
        return dropoff_city_id, pickup_city_id
    return pickup_city_id, dropoff_city_id

def is_priced(row: TicketType) -> bool:
    return (row.prices or {}).get(BASE_PRICE_COLUMN) is not None

class TicketTypeService:
    """Service for reading ticket-type price rows and pricing them"""

    def __init__(
        self,
        db: Session,
        currency_resolver: Optional[CurrencyResolver] = None,
        discount_resolver: Optional[DiscountResolver] = None,
        stop_resolver: Optional[StopResolver] = None
    ):
        self.db = db
        self.currency_resolver = currency_resolver or CurrencyResolver(db)
        self.discount_resolver = discount_resolver or DiscountResolver(db)
        self.stop_resolver = stop_resolver or StopResolver(db)

    def price_rows(
        self,
        pickup_city_id: int,
        dropoff_city_id: int,
        direction: LegDirection = LegDirection.ONWARD,
        route_ids: Optional[Iterable[int]] = None
    ) -> List[TicketType]:
        """Active, priced rows for the leg; RETURN swaps the pickup/dropoff pair"""
        start_city_id, end_city_id = leg_cities(pickup_city_id, dropoff_city_id, direction)

        query = self.db.query(TicketType).filter(
            TicketType.start_city_id == start_city_id,
            TicketType.end_city_id == end_city_id,
            TicketType.is_active == True,
            TicketType.is_deleted == False
        )
        if route_ids is not None:
            query = query.filter(TicketType.route_id.in_(list(route_ids)))

        rows = [row for row in query.order_by(TicketType.id.asc()).all() if is_priced(row)]
        logger.debug(f"{len(rows)} priced rows for {start_city_id}->{end_city_id} ({direction.value})")
        return rows

    def ticket_types_for_route(
        self,
        route_id: int,
        pickup_city_id: Optional[int] = None,
        dropoff_city_id: Optional[int] = None,
        on_date: Optional[date] = None
    ) -> RouteTicketTypes:
        """Price rows of a route, converted and discounted for on_date"""
        route = self.db.query(Route).filter(
            Route.id == route_id,
            Route.is_deleted == False
        ).first()
        if not route:
            raise RouteNotFoundError(f"Route with ID {route_id} not found")

        on_date = on_date or date.today()

        exchange_rate = self.currency_resolver.rate_for_city(None)
        if pickup_city_id:
            pickup_stop = self.stop_resolver.stop_for(route.id, pickup_city_id)
            exchange_rate = self.currency_resolver.rate_for_city(pickup_stop.city if pickup_stop else None)

        discount = self.discount_resolver.active_discount(route.id, on_date)

        query = self.db.query(TicketType).options(
            joinedload(TicketType.start_city),
            joinedload(TicketType.end_city)
        ).filter(
            TicketType.route_id == route.id,
            TicketType.is_active == True,
            TicketType.is_deleted == False
        )
        # Both ends are needed to narrow the rows down
        if pickup_city_id and dropoff_city_id:
            query = query.filter(
                TicketType.start_city_id == pickup_city_id,
                TicketType.end_city_id == dropoff_city_id
            )
        rows = query.order_by(TicketType.start_city_id.asc(), TicketType.end_city_id.asc()).all()

        price_columns: List[str] = []
        ticket_types = []
        for row in rows:
            prices = row.prices or {}
            for column in prices:
                if column not in price_columns:
                    price_columns.append(column)

            adjustment = adjust(prices, exchange_rate, discount)
            ticket_types.append(TicketTypePrice(
                id=row.id,
                route_id=row.route_id,
                start_city=city_info(row.start_city),
                end_city=city_info(row.end_city),
                base_price=adjustment.base_price,
                updated_base_price=adjustment.updated_base_price
            ))

        return RouteTicketTypes(
            route=route_info(route),
            exchange_rate=exchange_rate,
            discount=discount_info(discount),
            price_columns=price_columns,
            ticket_types=ticket_types
        )

    def destinations_from(self, city_id: int) -> List[City]:
        """Unique live destinations reachable with a priced ticket from city_id"""
        rows = self.db.query(TicketType).options(
            joinedload(TicketType.end_city)
        ).filter(
            TicketType.start_city_id == city_id,
            TicketType.is_deleted == False
        ).order_by(TicketType.id.asc()).all()

        destinations = []
        seen = set()
        for row in rows:
            city = row.end_city
            if not is_priced(row) or city is None or city.is_deleted:
                continue
            if city.id in seen:
                continue
            seen.add(city.id)
            destinations.append(city)

        return destinations
