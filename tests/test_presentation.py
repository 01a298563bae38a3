from datetime import date

import pytest

from app.services.measurement_session import ChildInfo
from app.services.presentation import chart_filename, format_sd, sd_status


class TestSdStatus:
    @pytest.mark.parametrize(
        "sd,metric,expected",
        [
            (0.0, "height", "normal"),
            (2.0, "height", "normal"),
            (-2.0, "weight", "normal"),
            (-2.3, "height", "caution"),
            (2.5, "height", "caution"),
            (-2.6, "height", "alert"),
            (2.1, "weight", "alert"),
            (-3.4, "weight", "alert"),
            (None, "height", "unknown"),
        ],
    )
    def test_classes(self, sd, metric, expected):
        assert sd_status(sd, metric) == expected


class TestFormat:
    def test_format_sd(self):
        assert format_sd(1.1) == "+1.1 SD"
        assert format_sd(0.0) == "0.0 SD"
        assert format_sd(-2.3) == "-2.3 SD"
        assert format_sd(None) == "-"

    def test_chart_filename(self):
        child = ChildInfo(patient_id="", full_name="Taro Yamada")
        assert chart_filename(child, date(2024, 5, 6)) == "growth_chart_0_Taro Yamada_2024-05-06.svg"
        child = ChildInfo(patient_id="A-7", full_name="")
        assert chart_filename(child, date(2024, 5, 6)) == "growth_chart_A-7__2024-05-06.svg"
