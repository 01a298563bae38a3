from datetime import date, datetime

import pytest

from src.models.growth.age import compute_age, to_date
from src.models.growth.errors import ValidationError


class TestComputeAge:
    def test_two_calendar_years_is_not_two(self):
        age = compute_age("2020-01-01", "2022-01-01")
        # 731 days over a 365.28-day year
        assert age == pytest.approx(731 / 30.44 / 12)
        assert age != 2.0

    def test_accepts_dates_and_datetimes(self):
        a = compute_age(date(2015, 6, 1), datetime(2020, 6, 1, 23, 59))
        b = compute_age("2015-06-01", "2020-06-01")
        assert a == b

    def test_same_day(self):
        assert compute_age("2020-03-01", "2020-03-01") == 0.0

    def test_negative_before_birth(self):
        assert compute_age("2020-03-01", "2020-02-01") < 0


class TestToDate:
    def test_iso_datetime_string(self):
        assert to_date("2021-04-05T10:00:00+09:00") == date(2021, 4, 5)

    @pytest.mark.parametrize("value", [None, "", "   ", "not-a-date", 20200101])
    def test_invalid(self, value):
        with pytest.raises(ValidationError):
            to_date(value)
