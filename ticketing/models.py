from sqlalchemy import Column, Integer, String, Boolean, DateTime, Date, ForeignKey, Numeric, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ticketing.database import Base

# ================================
# Cities
# ================================
class City(Base):
    __tablename__ = "cities"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    country = Column(String(100))
    from_ukraine = Column(Boolean, default=False)
    is_deleted = Column(Boolean, default=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    route_stops = relationship("RouteStop", back_populates="city")

# ================================
# Routes & Stops
# ================================
class Route(Base):
    __tablename__ = "routes"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    pickup_city_id = Column(Integer, ForeignKey("cities.id"))
    dropoff_city_id = Column(Integer, ForeignKey("cities.id"))
    is_deleted = Column(Boolean, default=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    pickup_city = relationship("City", foreign_keys=[pickup_city_id])
    dropoff_city = relationship("City", foreign_keys=[dropoff_city_id])
    stops = relationship("RouteStop", back_populates="route", order_by="RouteStop.stop_order")
    schedules = relationship("BusSchedule", back_populates="route")
    closures = relationship("RouteClosure", back_populates="route")
    discounts = relationship("RouteDiscount", back_populates="route")
    ticket_types = relationship("TicketType", back_populates="route")

class RouteStop(Base):
    __tablename__ = "route_stops"

    id = Column(Integer, primary_key=True, index=True)
    route_id = Column(Integer, ForeignKey("routes.id"), nullable=False, index=True)
    city_id = Column(Integer, ForeignKey("cities.id"), nullable=False, index=True)
    stop_order = Column(Integer, nullable=False)
    departure_time = Column(String(5))  # HH:mm
    arrival_time = Column(String(5))  # HH:mm
    is_active = Column(Boolean, default=True)
    is_deleted = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    route = relationship("Route", back_populates="stops")
    city = relationship("City", back_populates="route_stops")

# ================================
# Buses & Schedules
# ================================
class Bus(Base):
    __tablename__ = "buses"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    registration_number = Column(String(50))
    total_seats = Column(Integer, default=50)
    is_deleted = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    schedules = relationship("BusSchedule", back_populates="bus")

class BusSchedule(Base):
    __tablename__ = "bus_schedules"

    id = Column(Integer, primary_key=True, index=True)
    route_id = Column(Integer, ForeignKey("routes.id"), nullable=False, index=True)
    bus_id = Column(Integer, ForeignKey("buses.id"))
    recurrence_pattern = Column(String(20), nullable=False, default="Daily")  # Daily, Weekly, Custom
    days_of_week = Column(JSON, default=list)  # ["Monday", "Friday", ...]
    valid_from = Column(Date)
    valid_to = Column(Date)
    available = Column(Boolean, default=False)  # ignores the validity window when set
    is_active = Column(Boolean, default=True, index=True)
    is_deleted = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    route = relationship("Route", back_populates="schedules")
    bus = relationship("Bus", back_populates="schedules")

class RouteClosure(Base):
    __tablename__ = "route_closures"

    id = Column(Integer, primary_key=True, index=True)
    route_id = Column(Integer, ForeignKey("routes.id"), nullable=False, index=True)
    from_date = Column(Date, nullable=False)
    to_date = Column(Date, nullable=False)
    reason = Column(String(255))
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    route = relationship("Route", back_populates="closures")

# ================================
# Pricing
# ================================
class RouteDiscount(Base):
    __tablename__ = "route_discounts"

    id = Column(Integer, primary_key=True, index=True)
    route_id = Column(Integer, ForeignKey("routes.id", ondelete="CASCADE"), nullable=False, index=True)
    from_date = Column(Date, nullable=False)
    to_date = Column(Date, nullable=False)
    discount_type = Column(String(20), nullable=False)  # decrease, increase, amount
    discount_value = Column(Numeric(10, 2))
    is_deleted = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    route = relationship("Route", back_populates="discounts")

class TicketType(Base):
    __tablename__ = "ticket_types"

    id = Column(Integer, primary_key=True, index=True)
    route_id = Column(Integer, ForeignKey("routes.id"), nullable=False, index=True)
    start_city_id = Column(Integer, ForeignKey("cities.id"), nullable=False, index=True)
    end_city_id = Column(Integer, ForeignKey("cities.id"), nullable=False, index=True)
    prices = Column(JSON, default=dict)  # {"Baseprice": "100.00", "Child": "50.00", ...}
    is_active = Column(Boolean, default=True)
    is_deleted = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    route = relationship("Route", back_populates="ticket_types")
    start_city = relationship("City", foreign_keys=[start_city_id])
    end_city = relationship("City", foreign_keys=[end_city_id])

class CurrencyExchangeRate(Base):
    __tablename__ = "currency_exchange_rates"

    id = Column(Integer, primary_key=True, index=True)
    from_currency = Column(String(10), nullable=False)
    to_currency = Column(String(10), nullable=False)
    rate = Column(Numeric(10, 4), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

# ================================
# Bookings (read-only here)
# ================================
class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    route_id = Column(Integer, ForeignKey("routes.id"), nullable=False, index=True)
    from_city_id = Column(Integer, ForeignKey("cities.id"), nullable=False)
    to_city_id = Column(Integer, ForeignKey("cities.id"), nullable=False)
    travel_date = Column(Date, nullable=False, index=True)
    is_deleted = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    passengers = relationship("BookingPassenger", back_populates="booking")

class BookingPassenger(Base):
    __tablename__ = "booking_passengers"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id"), nullable=False, index=True)
    full_name = Column(String(255))
    selected_seat = Column(String(10))  # null until a seat is assigned
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    booking = relationship("Booking", back_populates="passengers")
