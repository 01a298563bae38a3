import math

import pytest

from src.models.growth.errors import InvalidValueError
from src.models.growth.interpolate import bracket, interpolate
from src.models.growth.normalization import LMSRow

TABLES = [("male", "height"), ("female", "height"), ("male", "weight"), ("female", "weight")]


class TestInterpolate:
    @pytest.mark.parametrize("sex,metric", TABLES)
    def test_exact_row_returned_unchanged(self, store, sex, metric):
        table = store.get_table(sex, metric)
        for row in table.rows:
            assert interpolate(table, row.age) == row

    @pytest.mark.parametrize("sex,metric", TABLES)
    def test_clamped_outside_table(self, store, sex, metric):
        table = store.get_table(sex, metric)
        assert interpolate(table, -1) == table.rows[0]
        assert interpolate(table, 999) == table.rows[-1]
        assert interpolate(table, 17.9) == table.rows[-1]

    def test_linear_blend(self, store):
        table = store.get_table("male", "height")
        row = interpolate(table, 5.25)
        assert isinstance(row, LMSRow)
        assert row.age == 5.25
        assert row.L == pytest.approx((0.542 + 0.366) / 2)
        assert row.M == pytest.approx((106.8 + 110.1) / 2)
        assert row.S == pytest.approx((0.0403 + 0.0410) / 2)

    def test_fraction_uses_bracket_width(self, store):
        table = store.get_table("female", "weight")
        # 0.25-wide bracket between 1.5 and 1.75
        row = interpolate(table, 1.6)
        fraction = (1.6 - 1.5) / 0.25
        assert row.M == pytest.approx(9.82 + fraction * (10.4 - 9.82))

    def test_continuous_near_rows(self, store):
        table = store.get_table("male", "weight")
        below = interpolate(table, 10 - 1e-9)
        above = interpolate(table, 10 + 1e-9)
        assert below.M == pytest.approx(31.4, abs=1e-6)
        assert above.M == pytest.approx(31.4, abs=1e-6)

    @pytest.mark.parametrize("age", [math.nan, math.inf, -math.inf])
    def test_non_finite_age(self, store, age):
        with pytest.raises(InvalidValueError):
            interpolate(store.get_table("male", "height"), age)


class TestBracket:
    def test_monotonic(self, store):
        ages = store.get_table("male", "height").ages
        prev = (0, 0)
        for i in range(0, 1800):
            cur = bracket(ages, i / 100)
            assert cur >= prev
            assert ages[cur[0]] <= i / 100 + 1e-12 or cur == (0, 0)
            prev = cur

    def test_ties_hit_single_row(self, store):
        ages = store.get_table("male", "height").ages
        assert bracket(ages, 2.0) == (8, 8)
        assert bracket(ages, 2.1) == (8, 9)
        assert bracket(ages, 0.0) == (0, 0)
        assert bracket(ages, 17.5) == (39, 39)
