from datetime import date, datetime
from decimal import Decimal
from types import SimpleNamespace
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from ticketing.database import Base, get_db
from ticketing.models import (
    City, Route, RouteStop, Bus, BusSchedule, RouteClosure, RouteDiscount,
    TicketType, CurrencyExchangeRate, Booking, BookingPassenger
)

# Monday 7 January 2030, noon
NOW = datetime(2030, 1, 7, 12, 0)
TODAY = NOW.date()
TUESDAY = date(2030, 1, 8)

@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()

@pytest.fixture
def db(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()

@pytest.fixture
def client(db):
    from ticketing.main import app

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

@pytest.fixture
def make_city(db):
    def _make_city(name, from_ukraine=False, **kwargs):
        city = City(name=name, from_ukraine=from_ukraine, **kwargs)
        db.add(city)
        db.flush()
        return city
    return _make_city

@pytest.fixture
def make_route(db):
    """Route with stops given as (city, departure_time, arrival_time) in travel order"""
    def _make_route(stops, title="Test route", **kwargs):
        route = Route(title=title, **kwargs)
        db.add(route)
        db.flush()
        for order, (city, departure_time, arrival_time) in enumerate(stops, start=1):
            db.add(RouteStop(
                route=route,
                city=city,
                stop_order=order,
                departure_time=departure_time,
                arrival_time=arrival_time
            ))
        db.flush()
        return route
    return _make_route

@pytest.fixture
def make_schedule(db):
    def _make_schedule(route, total_seats=50, **kwargs):
        kwargs.setdefault("recurrence_pattern", "Daily")
        kwargs.setdefault("available", True)
        bus = Bus(name=f"Bus for {route.title}", registration_number="AA0001BB", total_seats=total_seats)
        schedule = BusSchedule(route=route, bus=bus, **kwargs)
        db.add_all([bus, schedule])
        db.flush()
        return schedule
    return _make_schedule

@pytest.fixture
def make_ticket_type(db):
    def _make_ticket_type(route, start_city, end_city, prices, **kwargs):
        row = TicketType(route=route, start_city=start_city, end_city=end_city, prices=prices, **kwargs)
        db.add(row)
        db.flush()
        return row
    return _make_ticket_type

@pytest.fixture
def make_discount(db):
    def _make_discount(route, discount_type, discount_value, from_date=TODAY, to_date=TUESDAY, **kwargs):
        discount = RouteDiscount(
            route=route,
            discount_type=discount_type,
            discount_value=Decimal(str(discount_value)),
            from_date=from_date,
            to_date=to_date,
            **kwargs
        )
        db.add(discount)
        db.flush()
        return discount
    return _make_discount

@pytest.fixture
def make_closure(db):
    def _make_closure(route, from_date, to_date):
        closure = RouteClosure(route=route, from_date=from_date, to_date=to_date)
        db.add(closure)
        db.flush()
        return closure
    return _make_closure

@pytest.fixture
def make_rate(db):
    def _make_rate(rate, from_currency="EUR", to_currency="UAH"):
        record = CurrencyExchangeRate(from_currency=from_currency, to_currency=to_currency, rate=Decimal(str(rate)))
        db.add(record)
        db.flush()
        return record
    return _make_rate

@pytest.fixture
def make_booking(db):
    """Booking with one passenger per entry in seats (None for an unseated passenger)"""
    def _make_booking(route, from_city, to_city, travel_date, seats, is_deleted=False):
        booking = Booking(
            route_id=route.id,
            from_city_id=from_city.id,
            to_city_id=to_city.id,
            travel_date=travel_date,
            is_deleted=is_deleted
        )
        db.add(booking)
        db.flush()
        for index, seat in enumerate(seats):
            db.add(BookingPassenger(booking_id=booking.id, full_name=f"Passenger {index}", selected_seat=seat))
        db.flush()
        return booking
    return _make_booking

@pytest.fixture
def network(make_city, make_route, make_schedule, make_ticket_type):
    """Warsaw -> Lodz -> Prague, one daily schedule, priced Warsaw -> Prague"""
    warsaw = make_city("Warsaw", country="Poland")
    lodz = make_city("Lodz", country="Poland")
    prague = make_city("Prague", country="Czechia")
    route = make_route(
        [(warsaw, "08:00", "07:50"), (lodz, "10:30", "10:15"), (prague, "14:10", "14:00")],
        title="Warsaw - Prague"
    )
    schedule = make_schedule(route)
    ticket_type = make_ticket_type(route, warsaw, prague, {"Baseprice": "100", "Child": "50", "Note": None})

    return SimpleNamespace(
        warsaw=warsaw,
        lodz=lodz,
        prague=prague,
        route=route,
        schedule=schedule,
        ticket_type=ticket_type
    )
