from datetime import date, datetime, time
import logging
import pytest

from ticketing.models import BusSchedule
from ticketing.schedules.availability import (
    ScheduleAvailabilityFilter, runs_on, within_validity_window, weekday_name
)
from ticketing.schedules.occupancy import SeatOccupancyCounter
from ticketing.schedules.stops import StopResolver, parse_stop_time
from tests.conftest import NOW, TODAY, TUESDAY

def test_weekday_name():
    assert weekday_name(TODAY) == "Monday"
    assert weekday_name(TUESDAY) == "Tuesday"

@pytest.mark.parametrize("days", [[], ["Sunday"], ["Monday", "Tuesday"], None])
def test_daily_ignores_weekdays(days):
    schedule = BusSchedule(recurrence_pattern="Daily", days_of_week=days)

    assert runs_on(schedule, TUESDAY)
    assert runs_on(schedule, TODAY)

@pytest.mark.parametrize("pattern", ["Weekly", "Custom"])
def test_weekday_patterns_follow_weekday_set(pattern):
    schedule = BusSchedule(recurrence_pattern=pattern, days_of_week=["Monday", "Friday"])

    assert runs_on(schedule, TODAY)
    assert not runs_on(schedule, TUESDAY)

def test_weekday_set_stored_as_string():
    schedule = BusSchedule(recurrence_pattern="Weekly", days_of_week="monday, Tuesday")

    assert runs_on(schedule, TUESDAY)

def test_unknown_pattern_never_runs():
    schedule = BusSchedule(recurrence_pattern="Monthly", days_of_week=["Monday"])

    assert not runs_on(schedule, TODAY)

def test_validity_window():
    bounded = BusSchedule(available=False, valid_from=TODAY, valid_to=TUESDAY)
    assert within_validity_window(bounded, TODAY)
    assert within_validity_window(bounded, TUESDAY)
    assert not within_validity_window(bounded, date(2030, 1, 9))

    always = BusSchedule(available=True, valid_from=date(2029, 1, 1), valid_to=date(2029, 1, 2))
    assert within_validity_window(always, TUESDAY)

    unbounded = BusSchedule(available=False)
    assert within_validity_window(unbounded, TUESDAY)

def test_validity_window_needs_both_bounds():
    from_only = BusSchedule(available=False, valid_from=date(2030, 2, 1))
    assert within_validity_window(from_only, TUESDAY)

    to_only = BusSchedule(available=False, valid_to=date(2030, 1, 1))
    assert within_validity_window(to_only, TUESDAY)

def test_available_schedule(db, network):
    assert ScheduleAvailabilityFilter(db).is_available(network.schedule, TUESDAY, NOW)

def test_deleted_route_is_unavailable(db, network, caplog):
    caplog.set_level(logging.WARNING, logger="ticketing")
    network.route.is_deleted = True
    db.flush()

    assert not ScheduleAvailabilityFilter(db).is_available(network.schedule, TUESDAY, NOW)
    assert "missing or deleted route" in caplog.text

def test_bad_first_departure_today_is_unavailable(db, network, caplog):
    caplog.set_level(logging.WARNING, logger="ticketing")
    network.route.stops[0].departure_time = "bad"
    db.flush()
    early = datetime(2030, 1, 7, 6, 0)

    assert not ScheduleAvailabilityFilter(db).is_available(network.schedule, TODAY, early)
    assert f"Route {network.route.id} has no valid first departure time" in caplog.text

@pytest.mark.parametrize("field, value", [("is_active", False), ("is_deleted", True)])
def test_inactive_or_deleted_schedule_is_unavailable(db, network, field, value):
    setattr(network.schedule, field, value)
    db.flush()

    assert not ScheduleAvailabilityFilter(db).is_available(network.schedule, TUESDAY, NOW)

def test_closure_overrides_recurrence(db, network, make_closure):
    make_closure(network.route, TUESDAY, date(2030, 1, 10))

    availability = ScheduleAvailabilityFilter(db)

    assert not availability.is_available(network.schedule, TUESDAY, NOW)
    assert availability.is_available(network.schedule, date(2030, 1, 11), NOW)

def test_today_after_first_departure_is_unavailable(db, network):
    # First stop departs 08:00, now is 12:00
    assert not ScheduleAvailabilityFilter(db).is_available(network.schedule, TODAY, NOW)

def test_today_before_departure_is_available(db, network):
    early = datetime(2030, 1, 7, 7, 59)

    assert ScheduleAvailabilityFilter(db).is_available(network.schedule, TODAY, early)

def test_departure_exactly_now_is_unavailable(db, network):
    assert not ScheduleAvailabilityFilter(db).is_available(
        network.schedule, TODAY, NOW, departure_time=time(12, 0)
    )

def test_explicit_departure_time(db, network):
    assert ScheduleAvailabilityFilter(db).is_available(
        network.schedule, TODAY, NOW, departure_time=time(18, 30)
    )

@pytest.mark.parametrize("value, expected", [
    ("08:05", time(8, 5)),
    ("00:00", time(0, 0)),
    ("23:59", time(23, 59)),
    ("8:05", None),
    ("25:00", None),
    ("12:60", None),
    ("08:05\n", None),
    ("", None),
    (None, None),
])
def test_parse_stop_time(value, expected):
    assert parse_stop_time(value) == expected

def test_stops_are_ordered(db, make_city, make_route):
    first, second, third = make_city("A"), make_city("B"), make_city("C")
    route = make_route([(first, "08:00", "08:00"), (second, "09:00", "09:00"), (third, "10:00", "10:00")])
    # Flip orders so insertion order differs from stop order
    route.stops[0].stop_order = 5
    db.flush()

    stops = StopResolver(db).all_stops(route.id)

    assert [stop.city_id for stop in stops] == [second.id, third.id, first.id]

def test_stop_for_ignores_deleted_and_inactive_stops(db, network):
    network.route.stops[1].is_deleted = True
    network.route.stops[2].is_active = False
    db.flush()

    resolver = StopResolver(db)

    assert resolver.stop_for(network.route.id, network.warsaw.id) is not None
    assert resolver.stop_for(network.route.id, network.lodz.id) is None
    assert resolver.stop_for(network.route.id, network.prague.id) is None

def test_stops_of_deleted_route_are_hidden(db, network):
    network.route.is_deleted = True
    db.flush()

    assert StopResolver(db).all_stops(network.route.id) == []

def test_booked_seats_counts_seated_passengers_only(db, network, make_booking):
    make_booking(network.route, network.warsaw, network.prague, TUESDAY, ["1A", "1B", None])
    make_booking(network.route, network.warsaw, network.prague, TUESDAY, ["2A"])
    # Not counted: deleted booking, other date, other leg
    make_booking(network.route, network.warsaw, network.prague, TUESDAY, ["3A"], is_deleted=True)
    make_booking(network.route, network.warsaw, network.prague, TODAY, ["4A"])
    make_booking(network.route, network.lodz, network.prague, TUESDAY, ["5A"])

    counter = SeatOccupancyCounter(db)

    assert counter.booked_seats(network.route.id, network.warsaw.id, network.prague.id, TUESDAY) == 3
    assert counter.booked_seats(network.route.id, network.prague.id, network.warsaw.id, TUESDAY) == 0
