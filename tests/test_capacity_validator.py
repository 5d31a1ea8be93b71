"""
Tests für die Zulassungsprüfung neuer Reservierungen.

Feste Daten im Jahr 2030, `now` wird explizit übergeben.
"""
import pytest
from datetime import datetime, time
from uuid import uuid4

from raumbuchung.core.errors import ErrorKind, ServiceError
from raumbuchung.models import Reservation, ReservationStatus
from raumbuchung.repositories.reservation_store import ReservationStore
from raumbuchung.repositories.restaurant_store import RestaurantStore
from raumbuchung.services import capacity_validator
from tests.conftest import add_reservation

NOW = datetime(2030, 1, 1, 12, 0)


def dt(hour, minute=0, day=15):
    return datetime(2030, 1, day, hour, minute)


def candidate(restaurant, space, start, end, party_size, **overrides):
    fields = dict(
        restaurant_id=restaurant.id,
        space_id=space.id,
        customer_email="neu@test.de",
        start_time=start,
        end_time=end,
        party_size=party_size,
        status=ReservationStatus.CONFIRMED,
    )
    fields.update(overrides)
    return Reservation(**fields)


def run_validate(db, reservation, **kwargs):
    kwargs.setdefault("now", NOW)
    return capacity_validator.validate(
        reservation, RestaurantStore(db), ReservationStore(db), **kwargs
    )


def expect_kind(kind, db, reservation, **kwargs):
    with pytest.raises(ServiceError) as exc_info:
        run_validate(db, reservation, **kwargs)
    assert exc_info.value.kind == kind
    return exc_info.value


class TestRequiredFields:

    @pytest.mark.parametrize("field", list(capacity_validator.REQUIRED_FIELDS))
    def test_missing_field_is_invalid(self, db, restaurant, space, field):
        reservation = candidate(restaurant, space, dt(19), dt(20), **{"party_size": 4, field: None})
        error = expect_kind(ErrorKind.INVALID_RESERVATION, db, reservation)
        assert field in error.message


class TestTimeSpan:

    def test_start_in_past_is_invalid(self, db, restaurant, space):
        reservation = candidate(restaurant, space, datetime(2030, 1, 1, 11, 0), dt(13, day=1), 4)
        expect_kind(ErrorKind.INVALID_RESERVATION, db, reservation)

    def test_start_equal_now_is_invalid(self, db, restaurant, space):
        reservation = candidate(restaurant, space, NOW, dt(13, day=1), 4)
        expect_kind(ErrorKind.INVALID_RESERVATION, db, reservation)

    def test_past_start_allowed_when_policy_disabled(self, db, restaurant, space):
        reservation = candidate(restaurant, space, dt(19), dt(20), 4)
        returned = run_validate(db, reservation, now=datetime(2031, 1, 1), enforce_future_start=False)
        assert returned.id == space.id

    def test_end_before_start_is_invalid(self, db, restaurant, space):
        reservation = candidate(restaurant, space, dt(20), dt(19), 4)
        expect_kind(ErrorKind.INVALID_RESERVATION, db, reservation)

    def test_zero_duration_is_invalid(self, db, restaurant, space):
        reservation = candidate(restaurant, space, dt(19), dt(19), 4)
        expect_kind(ErrorKind.INVALID_RESERVATION, db, reservation)

    def test_longer_than_24_hours_is_invalid(self, db, restaurant, space):
        reservation = candidate(restaurant, space, dt(19), dt(19, 30, day=16), 4)
        expect_kind(ErrorKind.INVALID_RESERVATION, db, reservation)

    @pytest.mark.parametrize("start,end", [
        ((19, 15), (20, 0)),
        ((19, 0), (20, 10)),
        ((19, 45), (20, 45)),
    ])
    def test_not_block_aligned_is_invalid(self, db, restaurant, space, start, end):
        reservation = candidate(restaurant, space, dt(*start), dt(*end), 4)
        expect_kind(ErrorKind.INVALID_RESERVATION, db, reservation)


class TestExistence:

    def test_unknown_restaurant(self, db, restaurant, space):
        reservation = candidate(restaurant, space, dt(19), dt(20), 4, restaurant_id=uuid4())
        expect_kind(ErrorKind.RESTAURANT_NOT_FOUND, db, reservation)

    def test_unknown_space(self, db, restaurant, space):
        reservation = candidate(restaurant, space, dt(19), dt(20), 4, space_id=uuid4())
        error = expect_kind(ErrorKind.SPACE_NOT_FOUND, db, reservation)
        assert error.context["restaurant_id"] == restaurant.id

    def test_space_of_other_restaurant(self, db, restaurant, night_restaurant):
        other_space = night_restaurant.spaces[0]
        reservation = candidate(restaurant, other_space, dt(19), dt(20), 4)
        expect_kind(ErrorKind.SPACE_NOT_FOUND, db, reservation)


class TestOperatingHours:

    def test_same_day_hours_accepted(self, db, restaurant, space):
        run_validate(db, candidate(restaurant, space, dt(10), dt(23), 4))

    def test_before_opening_rejected(self, db, restaurant, space):
        reservation = candidate(restaurant, space, dt(9, 30), dt(11), 4)
        error = expect_kind(ErrorKind.INVALID_RESERVATION, db, reservation)
        assert error.context["restaurant_start"] == time(10, 0)

    def test_after_closing_rejected(self, db, restaurant, space):
        reservation = candidate(restaurant, space, dt(22), dt(23, 30), 4)
        expect_kind(ErrorKind.INVALID_RESERVATION, db, reservation)

    def test_same_day_hours_reject_two_days(self, db, restaurant, space):
        reservation = candidate(restaurant, space, dt(22), dt(10, day=16), 4)
        expect_kind(ErrorKind.INVALID_RESERVATION, db, reservation)

    def test_overnight_within_hours_accepted(self, db, night_restaurant):
        """18:00 - 02:00, Reservierung 23:00 - 01:00 → ok"""
        lounge = night_restaurant.spaces[0]
        run_validate(db, candidate(night_restaurant, lounge, dt(23), dt(1, day=16), 4))

    def test_overnight_past_closing_rejected(self, db, night_restaurant):
        """18:00 - 02:00, Reservierung 23:00 - 03:00 → abgelehnt"""
        lounge = night_restaurant.spaces[0]
        reservation = candidate(night_restaurant, lounge, dt(23), dt(3, day=16), 4)
        expect_kind(ErrorKind.INVALID_RESERVATION, db, reservation)

    def test_overnight_after_midnight_uses_previous_day(self, db, night_restaurant):
        """00:30 - 01:30 gehört zur Öffnung vom Vortag"""
        lounge = night_restaurant.spaces[0]
        run_validate(db, candidate(night_restaurant, lounge, dt(0, 30, day=16), dt(1, 30, day=16), 4))

    def test_overnight_gap_rejected(self, db, night_restaurant):
        """Zwischen 02:00 und 18:00 geschlossen"""
        lounge = night_restaurant.spaces[0]
        reservation = candidate(night_restaurant, lounge, dt(12), dt(13), 4)
        expect_kind(ErrorKind.INVALID_RESERVATION, db, reservation)


class TestCapacity:

    def test_exceeds_max_with_existing(self, db, restaurant, space):
        """6 Gäste 19:00-20:00, neu 3 Gäste 19:30-20:30 → 9 > 8 im Block 19:30"""
        add_reservation(db, restaurant, space, dt(19), dt(20), 6)
        reservation = candidate(restaurant, space, dt(19, 30), dt(20, 30), 3)
        error = expect_kind(ErrorKind.RESERVATION_CONFLICT, db, reservation)
        assert error.context["block_start"] == dt(19, 30)
        assert error.context["proposed_capacity"] == 9
        assert error.context["max_capacity"] == 8

    def test_below_min_without_existing(self, db, restaurant, space):
        """1 Gast bei min 2 → abgelehnt, Block = eigener Start"""
        reservation = candidate(restaurant, space, dt(19), dt(20), 1)
        error = expect_kind(ErrorKind.RESERVATION_CONFLICT, db, reservation)
        assert error.context["block_start"] == dt(19)
        assert error.context["proposed_capacity"] == 1

    def test_above_max_without_existing(self, db, restaurant, space):
        reservation = candidate(restaurant, space, dt(19), dt(20), 9)
        expect_kind(ErrorKind.RESERVATION_CONFLICT, db, reservation)

    def test_fills_space_exactly(self, db, restaurant, space):
        add_reservation(db, restaurant, space, dt(19), dt(20), 6)
        run_validate(db, candidate(restaurant, space, dt(19), dt(20), 2))

    def test_adjacent_reservation_not_counted(self, db, restaurant, space):
        add_reservation(db, restaurant, space, dt(18), dt(19), 8)
        run_validate(db, candidate(restaurant, space, dt(19), dt(20), 8))

    def test_cancelled_reservation_not_counted(self, db, restaurant, space):
        add_reservation(db, restaurant, space, dt(19), dt(20), 8, status=ReservationStatus.CANCELLED)
        run_validate(db, candidate(restaurant, space, dt(19), dt(20), 8))

    def test_other_space_not_counted(self, db, two_space_restaurant):
        saal_a, saal_b = two_space_restaurant.spaces
        add_reservation(db, two_space_restaurant, saal_a, dt(19), dt(20), 100)
        run_validate(db, candidate(two_space_restaurant, saal_b, dt(19), dt(20), 300))

    def test_every_block_checked(self, db, restaurant, space):
        """Erste Blöcke frei, Konflikt erst im letzten Block 21:30"""
        add_reservation(db, restaurant, space, dt(21, 30), dt(22), 7)
        reservation = candidate(restaurant, space, dt(19), dt(22), 2)
        error = expect_kind(ErrorKind.RESERVATION_CONFLICT, db, reservation)
        assert error.context["block_start"] == dt(21, 30)

    def test_existing_counted_per_block(self, db, restaurant, space):
        """Zwei nicht überlappende Bestandsreservierungen addieren sich nicht"""
        add_reservation(db, restaurant, space, dt(19), dt(19, 30), 5)
        add_reservation(db, restaurant, space, dt(19, 30), dt(20), 5)
        run_validate(db, candidate(restaurant, space, dt(19), dt(20), 3))
