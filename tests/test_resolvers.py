from datetime import date
from decimal import Decimal

from ticketing.fares.currency import CurrencyResolver
from ticketing.fares.discounts import DiscountResolver
from tests.conftest import TODAY, TUESDAY

def test_missing_rate_defaults_to_one(db):
    assert CurrencyResolver(db).rate("EUR", "UAH") == Decimal("1")

def test_rate_for_exact_pair(db, make_rate):
    make_rate("40")
    make_rate("0.025", from_currency="UAH", to_currency="EUR")

    resolver = CurrencyResolver(db)

    assert resolver.rate("EUR", "UAH") == Decimal("40")
    assert resolver.rate("UAH", "EUR") == Decimal("0.025")
    assert resolver.rate("EUR", "PLN") == Decimal("1")

def test_zero_rate_is_treated_as_missing(db, make_rate):
    make_rate("0")

    assert CurrencyResolver(db).rate("EUR", "UAH") == Decimal("1")

def test_rate_only_applies_to_ukrainian_pickup(db, make_rate, make_city):
    make_rate("40")
    kyiv = make_city("Kyiv", from_ukraine=True)
    warsaw = make_city("Warsaw")

    resolver = CurrencyResolver(db)

    assert resolver.rate_for_city(kyiv) == Decimal("40")
    assert resolver.rate_for_city(warsaw) == Decimal("1")
    assert resolver.rate_for_city(None) == Decimal("1")

def test_discount_range_is_inclusive(db, network, make_discount):
    discount = make_discount(network.route, "decrease", 10, from_date=TODAY, to_date=TUESDAY)

    resolver = DiscountResolver(db)

    assert resolver.active_discount(network.route.id, TODAY) is discount
    assert resolver.active_discount(network.route.id, TUESDAY) is discount
    assert resolver.active_discount(network.route.id, date(2030, 1, 6)) is None
    assert resolver.active_discount(network.route.id, date(2030, 1, 9)) is None

def test_deleted_discount_is_ignored(db, network, make_discount):
    make_discount(network.route, "decrease", 10, is_deleted=True)

    assert DiscountResolver(db).active_discount(network.route.id, TODAY) is None

def test_overlapping_discounts_latest_wins(db, network, make_discount):
    make_discount(network.route, "decrease", 10, from_date=date(2030, 1, 1), to_date=date(2030, 1, 31))
    latest = make_discount(network.route, "increase", 5, from_date=TODAY, to_date=TODAY)

    resolver = DiscountResolver(db)

    assert resolver.active_discount(network.route.id, TODAY) is latest
    assert resolver.active_discount(network.route.id, TUESDAY).discount_type == "decrease"

def test_discount_is_route_specific(db, network, make_route, make_discount):
    other_route = make_route([(network.warsaw, "09:00", "09:00")], title="Other")
    make_discount(other_route, "decrease", 10)

    assert DiscountResolver(db).active_discount(network.route.id, TODAY) is None
