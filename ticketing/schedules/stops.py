from typing import Dict, List, Optional
from datetime import datetime, time
from sqlalchemy.orm import Session, joinedload
import re

from ticketing.models import Route, RouteStop

STOP_TIME_PATTERN = re.compile(r"\d{2}:\d{2}")

def parse_stop_time(value: Optional[str]) -> Optional[time]:
    """Parse an HH:mm stop time, returning None when malformed"""
    if not isinstance(value, str) or not STOP_TIME_PATTERN.fullmatch(value):
        return None
    try:
        return datetime.strptime(value, "%H:%M").time()
    except ValueError:
        return None

class StopResolver:
    """Resolves the live stops of a route"""
    
    def __init__(self, db: Session):
        self.db = db
        self._stops_cache: Dict[int, List[RouteStop]] = {}
    
    def all_stops(self, route_id: int) -> List[RouteStop]:
        """Active stops of a non-deleted route ordered by stop_order"""
        if route_id not in self._stops_cache:
            self._stops_cache[route_id] = self.db.query(RouteStop).options(
                joinedload(RouteStop.city)
            ).join(Route, Route.id == RouteStop.route_id).filter(
                RouteStop.route_id == route_id,
                Route.is_deleted == False,
                RouteStop.is_deleted == False,
                RouteStop.is_active == True
            ).order_by(RouteStop.stop_order.asc()).all()
        return self._stops_cache[route_id]
    
    def stop_for(self, route_id: int, city_id: int) -> Optional[RouteStop]:
        """Stop of the route serving the given city, if any"""
        for stop in self.all_stops(route_id):
            if stop.city_id == city_id:
                return stop
        return None
    
    def first_departure(self, route_id: int) -> Optional[time]:
        stops = self.all_stops(route_id)
        if not stops:
            return None
        return parse_stop_time(stops[0].departure_time)
