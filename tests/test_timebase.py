from datetime import date, datetime, timedelta, timezone

import pytest

from orbit import DateTime, InvalidDateError, calendar_date, coerce_time, day_number


def test_j2000_julian_date():
    t = DateTime.from_calendar(2000, 1, 1, 12, 0, 0)
    assert t.julian_date == 2451545.0
    assert t.day_fraction == 0.5


def test_day_number_matches_proleptic_ordinal():
    # Day number is JD - 1721409.5 and date.toordinal() is JD - 1721424.5,
    # so the day number runs 15 ahead of the ordinal
    d = date(1900, 3, 1)
    end = date(2100, 2, 28)
    while d <= end:
        dn = day_number(d.year, d.month, d.day)
        assert dn == d.toordinal() + 15, d
        assert calendar_date(dn) == (d.year, d.month, d.day), d
        d += timedelta(days=1)


def test_january_zero_is_last_day_of_previous_year():
    assert day_number(2014, 1, 0) == day_number(2013, 12, 31)


@pytest.mark.parametrize("fields", [
    (1900, 3, 1, 0, 0, 0),
    (1957, 10, 4, 19, 28, 34),
    (2000, 2, 29, 23, 59, 59),
    (2014, 1, 20, 22, 23, 4),
    (2024, 12, 31, 12, 0, 1),
    (2100, 2, 28, 23, 59, 59),
])
def test_calendar_round_trip(fields):
    assert DateTime.from_calendar(*fields).to_calendar() == fields


def test_time_of_day_round_trip_to_the_second():
    for seconds in range(0, 86400, 7):
        h, rem = divmod(seconds, 3600)
        m, s = divmod(rem, 60)
        t = DateTime.from_calendar(2019, 7, 14, h, m, s)
        assert t.to_calendar() == (2019, 7, 14, h, m, s)


def test_ascii_format():
    t = DateTime.from_calendar(2014, 1, 20, 22, 23, 4)
    assert t.ascii() == "2014/01/20 22:23:04"
    assert str(t) == "2014/01/20 22:23:04"


def test_parse_round_trip():
    t = DateTime.parse("2021/06/01 05:06:07")
    assert t.to_calendar() == (2021, 6, 1, 5, 6, 7)
    assert DateTime.parse(str(t)) == t


def test_parse_rejects_garbage():
    with pytest.raises(InvalidDateError):
        DateTime.parse("yesterday")


@pytest.mark.parametrize("fields", [
    (2020, 13, 1, 0, 0, 0),
    (2020, 0, 1, 0, 0, 0),
    (2021, 2, 29, 0, 0, 0),
    (2020, 4, 31, 0, 0, 0),
    (2020, 1, 1, 24, 0, 0),
    (2020, 1, 1, 0, 60, 0),
    (2020, 1, 1, 0, 0, 60),
    (2020, 1, 1, -1, 0, 0),
    (1900, 2, 28, 0, 0, 0),
    (2100, 3, 1, 0, 0, 0),
])
def test_invalid_calendar_fields(fields):
    with pytest.raises(InvalidDateError):
        DateTime.from_calendar(*fields)


def test_invalid_date_error_is_value_error():
    with pytest.raises(ValueError):
        DateTime.from_calendar(2020, 2, 30)


def test_add_carries_into_day_number():
    t = DateTime.from_calendar(2020, 12, 31, 18, 0, 0)
    later = t.add(0.5)
    assert later.to_calendar() == (2021, 1, 1, 6, 0, 0)
    assert 0.0 <= later.day_fraction < 1.0


def test_add_negative_borrows_from_day_number():
    t = DateTime.from_calendar(2020, 1, 1, 1, 0, 0)
    earlier = t.add(-0.25)
    assert earlier.to_calendar() == (2019, 12, 31, 19, 0, 0)
    assert 0.0 <= earlier.day_fraction < 1.0


def test_add_does_not_mutate():
    t = DateTime.from_calendar(2020, 1, 1)
    t.add(3.5)
    assert t.to_calendar() == (2020, 1, 1, 0, 0, 0)


@pytest.mark.parametrize("a, b", [
    (0.3, 0.9),
    (1.75, -2.5),
    (-0.0001, 0.0001),
    (123.456, 7.89),
    (-10.1, -0.95),
])
def test_add_is_additive(a, b):
    t = DateTime.from_calendar(2016, 5, 17, 8, 30, 0)
    stepwise = t.add(a).add(b)
    direct = t.add(a + b)
    assert stepwise.elapsed_days(direct) == pytest.approx(0.0, abs=1e-9)
    for value in (stepwise, direct):
        assert 0.0 <= value.day_fraction < 1.0


def test_round_up_to_next_step():
    t = DateTime.from_calendar(2020, 5, 5, 12, 0, 5)
    assert t.round_up(10 / 86400).to_calendar() == (2020, 5, 5, 12, 0, 10)


def test_round_up_on_boundary_advances_full_step():
    t = DateTime.from_calendar(2020, 5, 5, 12, 0, 0)
    assert t.round_up(0.25).to_calendar() == (2020, 5, 5, 18, 0, 0)


def test_round_up_crosses_midnight():
    t = DateTime.from_calendar(2020, 5, 5, 23, 59, 55)
    rounded = t.round_up(10 / 86400)
    assert rounded.to_calendar() == (2020, 5, 6, 0, 0, 0)
    assert 0.0 <= rounded.day_fraction < 1.0


def test_round_up_rejects_non_positive_step():
    with pytest.raises(ValueError):
        DateTime.from_calendar(2020, 5, 5).round_up(0.0)


def test_elapsed_days_and_ordering():
    a = DateTime.from_calendar(2020, 1, 1, 0, 0, 0)
    b = DateTime.from_calendar(2020, 1, 2, 12, 0, 0)
    assert b.elapsed_days(a) == pytest.approx(1.5)
    assert a.elapsed_days(b) == pytest.approx(-1.5)
    assert a < b


def test_constructor_normalizes_fraction():
    t = DateTime(100, 2.25)
    assert t.day_number == 102
    assert t.day_fraction == pytest.approx(0.25)
    t = DateTime(100, -0.25)
    assert t.day_number == 99
    assert t.day_fraction == pytest.approx(0.75)


def test_from_datetime_converts_to_utc():
    cest = timezone(timedelta(hours=2))
    t = DateTime.from_datetime(datetime(2022, 8, 1, 2, 30, 15, tzinfo=cest))
    assert t.to_calendar() == (2022, 8, 1, 0, 30, 15)


def test_from_datetime_keeps_microseconds():
    t = DateTime.from_datetime(datetime(2022, 8, 1, 0, 0, 0, 500000))
    assert t.day_fraction == pytest.approx(0.5 / 86400)


def test_to_datetime():
    t = DateTime.from_calendar(2022, 8, 1, 10, 11, 12)
    assert t.to_datetime() == datetime(2022, 8, 1, 10, 11, 12, tzinfo=timezone.utc)


def test_value_is_immutable():
    t = DateTime.from_calendar(2022, 8, 1)
    with pytest.raises(AttributeError):
        t.day_number = 5


def test_coerce_time():
    t = DateTime.from_calendar(2022, 8, 1, 10, 11, 12)
    assert coerce_time(t) is t
    assert coerce_time(datetime(2022, 8, 1, 10, 11, 12)) == t
    assert isinstance(coerce_time(None), DateTime)
    with pytest.raises(TypeError):
        coerce_time("2022/08/01 10:11:12")
