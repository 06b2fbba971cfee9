from datetime import date
from sqlalchemy import func
from sqlalchemy.orm import Session

from ticketing.models import Booking, BookingPassenger

class SeatOccupancyCounter:
    """Counts seats already taken on a leg"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def booked_seats(
        self,
        route_id: int,
        from_city_id: int,
        to_city_id: int,
        travel_date: date
    ) -> int:
        """Passengers with an assigned seat on live bookings for the route, leg and date"""
        count = self.db.query(func.count(BookingPassenger.id)).join(
            Booking, Booking.id == BookingPassenger.booking_id
        ).filter(
            Booking.route_id == route_id,
            Booking.from_city_id == from_city_id,
            Booking.to_city_id == to_city_id,
            Booking.travel_date == travel_date,
            Booking.is_deleted == False,
            BookingPassenger.selected_seat.isnot(None)
        ).scalar()
        return count or 0
