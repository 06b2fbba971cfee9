#!/usr/bin/env python3

from datetime import date, timedelta
from decimal import Decimal

from ticketing.database import Base, SessionLocal, engine
from ticketing.models import (
    City, Route, RouteStop, Bus, BusSchedule, RouteClosure, RouteDiscount,
    TicketType, CurrencyExchangeRate, Booking, BookingPassenger
)

def create_seed_data():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    
    try:
        print("🚀 Creating seed data for the bus ticketing system...")
        
        # Clear existing data (in reverse dependency order)
        print("Clearing existing data...")
        db.query(BookingPassenger).delete()
        db.query(Booking).delete()
        db.query(TicketType).delete()
        db.query(RouteDiscount).delete()
        db.query(RouteClosure).delete()
        db.query(BusSchedule).delete()
        db.query(RouteStop).delete()
        db.query(Route).delete()
        db.query(Bus).delete()
        db.query(City).delete()
        db.query(CurrencyExchangeRate).delete()
        
        # 1. Create Cities
        print("Creating cities...")
        kyiv = City(name="Kyiv", country="Ukraine", from_ukraine=True)
        lviv = City(name="Lviv", country="Ukraine", from_ukraine=True)
        krakow = City(name="Krakow", country="Poland")
        berlin = City(name="Berlin", country="Germany")
        db.add_all([kyiv, lviv, krakow, berlin])
        db.flush()
        
        # 2. Create Buses
        print("Creating buses...")
        setra = Bus(name="Setra S 516 HD", registration_number="AA1234KT", total_seats=49)
        neoplan = Bus(name="Neoplan Cityliner", registration_number="BC5678AO", total_seats=57)
        db.add_all([setra, neoplan])
        db.flush()
        
        # 3. Create Routes with stops
        print("Creating routes...")
        westbound = Route(title="Kyiv - Berlin", pickup_city_id=kyiv.id, dropoff_city_id=berlin.id)
        eastbound = Route(title="Berlin - Kyiv", pickup_city_id=berlin.id, dropoff_city_id=kyiv.id)
        db.add_all([westbound, eastbound])
        db.flush()
        
        stops_data = [
            (westbound, kyiv, 1, "18:00", "17:45"),
            (westbound, lviv, 2, "23:30", "23:00"),
            (westbound, krakow, 3, "06:15", "06:00"),
            (westbound, berlin, 4, "14:00", "13:30"),
            (eastbound, berlin, 1, "08:00", "07:45"),
            (eastbound, krakow, 2, "15:30", "15:00"),
            (eastbound, lviv, 3, "22:15", "21:45"),
            (eastbound, kyiv, 4, "05:00", "04:30"),
        ]
        for route, city, order, departure, arrival in stops_data:
            db.add(RouteStop(
                route_id=route.id,
                city_id=city.id,
                stop_order=order,
                departure_time=departure,
                arrival_time=arrival
            ))
        
        # 4. Create Schedules
        print("Creating schedules...")
        db.add_all([
            BusSchedule(route_id=westbound.id, bus_id=setra.id, recurrence_pattern="Daily", available=True),
            BusSchedule(
                route_id=eastbound.id,
                bus_id=neoplan.id,
                recurrence_pattern="Weekly",
                days_of_week=["Monday", "Wednesday", "Friday", "Sunday"],
                valid_from=date.today(),
                valid_to=date.today() + timedelta(days=180)
            ),
        ])
        
        # 5. Create Ticket Types
        print("Creating ticket types...")
        ticket_types_data = [
            (westbound, kyiv, berlin, {"Baseprice": "95.00", "Adult": "95.00", "Child": "70.00"}),
            (westbound, lviv, krakow, {"Baseprice": "30.00", "Adult": "30.00", "Child": "20.00"}),
            (westbound, kyiv, krakow, {"Baseprice": "55.00", "Adult": "55.00", "Child": "40.00"}),
            (eastbound, berlin, kyiv, {"Baseprice": "95.00", "Adult": "95.00", "Child": "70.00"}),
            (eastbound, krakow, lviv, {"Baseprice": "30.00", "Adult": "30.00", "Child": None}),
        ]
        for route, start, end, prices in ticket_types_data:
            db.add(TicketType(route_id=route.id, start_city_id=start.id, end_city_id=end.id, prices=prices))
        
        # 6. Closures, discounts and exchange rates
        print("Creating closures, discounts and exchange rates...")
        db.add(RouteClosure(
            route_id=eastbound.id,
            from_date=date.today() + timedelta(days=30),
            to_date=date.today() + timedelta(days=32),
            reason="Border maintenance"
        ))
        db.add(RouteDiscount(
            route_id=westbound.id,
            from_date=date.today(),
            to_date=date.today() + timedelta(days=14),
            discount_type="decrease",
            discount_value=Decimal("10.00")
        ))
        db.add(CurrencyExchangeRate(from_currency="EUR", to_currency="UAH", rate=Decimal("44.5000")))
        
        db.commit()
        print("✅ Seed data created successfully!")
        
    except Exception as e:
        print(f"❌ Error creating seed data: {e}")
        db.rollback()
        raise
    finally:
        db.close()

if __name__ == "__main__":
    create_seed_data()
