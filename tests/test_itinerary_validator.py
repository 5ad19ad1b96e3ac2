from datetime import date, datetime, timedelta, timezone

import pytest

from tripdesk.core.exceptions import ValidationError
from tripdesk.services.custom_inquiry import ItineraryValidator, ensure_future_start, reindex

TRIP = {"startDate": "2030-03-01T00:00:00Z", "travellers": 2, "totalDays": 5, "totalNights": 4}


def stop(place="p1", day=1, time_of_day="day", nights=1, **extra):
    return {"place": place, "day": day, "timeOfDay": time_of_day, "nights": nights, **extra}


@pytest.fixture
def validator():
    return ItineraryValidator()


def test_valid_itinerary_is_ordered_by_position(validator):
    raw = [stop("p3", day=3), stop("p1", day=1), stop("p2", day=2, time_of_day="night")]

    result = validator.validate(TRIP, raw)

    assert [item["order"] for item in result.value] == [1, 2, 3]
    assert [item["place"] for item in result.value] == ["p3", "p1", "p2"]
    assert [item["day"] for item in result.value] == [3, 1, 2]


def test_client_order_is_discarded_and_input_untouched(validator):
    raw = [stop(order=7), stop("p2", day=2, order=7)]

    result = validator.validate(TRIP, raw)

    assert [item["order"] for item in result.value] == [1, 2]
    assert raw[0]["order"] == 7
    assert raw[1]["order"] == 7


def test_duplicate_day_and_time_slots_are_allowed(validator):
    result = validator.validate(TRIP, [stop("p1"), stop("p2")])

    assert len(result.value) == 2


@pytest.mark.parametrize(
    "item, field",
    [
        (stop(day=0), "itinerary[0].day"),
        (stop(day=400), "itinerary[0].day"),
        (stop(nights=-1), "itinerary[0].nights"),
        (stop(nights=31), "itinerary[0].nights"),
        (stop(time_of_day="noon"), "itinerary[0].timeOfDay"),
        (stop(place=None), "itinerary[0].place"),
        (stop(place="  "), "itinerary[0].place"),
        (stop(day="2"), "itinerary[0].day"),
        (stop(nights=1.5), "itinerary[0].nights"),
    ],
)
def test_out_of_bounds_item_is_rejected(validator, item, field):
    with pytest.raises(ValidationError) as exc_info:
        validator.validate(TRIP, [item])

    assert field in exc_info.value.field_errors


def test_errors_are_keyed_by_item_position(validator):
    with pytest.raises(ValidationError) as exc_info:
        validator.validate(TRIP, [stop(), stop(day=366), stop(time_of_day="evening")])

    assert set(exc_info.value.field_errors) == {"itinerary[1].day", "itinerary[2].timeOfDay"}


@pytest.mark.parametrize("raw", [[], None])
def test_empty_itinerary_is_rejected(validator, raw):
    with pytest.raises(ValidationError) as exc_info:
        validator.validate(TRIP, raw)

    assert exc_info.value.field_errors == {"itinerary": ["At least one destination is required"]}


def test_bounds_are_inclusive(validator):
    result = validator.validate(TRIP, [stop(day=1, nights=0), stop(day=365, nights=30)])

    assert [item["order"] for item in result.value] == [1, 2]


def test_day_beyond_trip_length_is_only_a_warning(validator):
    result = validator.validate(TRIP, [stop(day=1, nights=2), stop(day=9, nights=2)])

    assert len(result.value) == 2
    assert any("itinerary[1].day" in warning for warning in result.warnings)


def test_nights_mismatch_is_only_a_warning(validator):
    result = validator.validate(TRIP, [stop(nights=1)])

    assert result.has_warnings
    assert "Itinerary nights add up to 1" in result.warnings[0]


def test_consistent_itinerary_has_no_warnings(validator):
    result = validator.validate(TRIP, [stop(day=1, nights=2), stop("p2", day=3, nights=2)])

    assert result.warnings == []


def test_reindex_returns_new_items():
    items = [{"place": "a", "order": 5}, {"place": "b"}]

    reindexed = reindex(items)

    assert [item["order"] for item in reindexed] == [1, 2]
    assert items[0]["order"] == 5
    assert "order" not in items[1]


class TestEnsureFutureStart:
    today = date(2030, 3, 1)

    def test_today_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            ensure_future_start(datetime(2030, 3, 1, 23, 0, tzinfo=timezone.utc), today=self.today)

        assert "tripDetails.startDate" in exc_info.value.field_errors

    def test_past_is_rejected(self):
        with pytest.raises(ValidationError):
            ensure_future_start(datetime(2030, 2, 27), today=self.today)

    def test_tomorrow_is_accepted(self):
        ensure_future_start(datetime(2030, 3, 2, tzinfo=timezone.utc), today=self.today)

    def test_compared_in_utc(self):
        # 01:00 on the 2nd in UTC+5:30 is still the 1st in UTC
        colombo = timezone(timedelta(hours=5, minutes=30))
        with pytest.raises(ValidationError):
            ensure_future_start(datetime(2030, 3, 2, 1, 0, tzinfo=colombo), today=self.today)
