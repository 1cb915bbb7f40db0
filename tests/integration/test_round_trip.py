"""
农历换算全范围测试

遍历 1901-02-19 到 2101-01-28 的每一天，验证公历 -> 农历 -> 公历 能还原，
并校验每个闰月都能被正确解析。
"""

from __future__ import annotations

from datetime import timedelta

import pytest

from xtools.calendar import ConsistencyError, LunarConverter, LunarDate, lunar_table
from xtools.calendar.lunar import LUNAR_MONTH_NAMES, MAX_DATE, MIN_DATE


@pytest.mark.integration
class TestRoundTrip:
    """测试全范围往返换算。"""

    def test_every_day_round_trips(self, converter: LunarConverter) -> None:
        day = MIN_DATE
        previous: LunarDate | None = None
        while day < MAX_DATE:
            lunar = converter.solar_to_lunar_date(day)
            assert converter.lunar_to_solar(str(lunar)) == day, f"{day} -> {lunar}"

            # 相邻两天的农历日期要么日加一，要么跨到下个月的初一
            if previous is not None and lunar.day != 1:
                assert (lunar.year, lunar.month, lunar.is_leap) == (
                    previous.year,
                    previous.month,
                    previous.is_leap,
                )
                assert lunar.day == previous.day + 1

            previous = lunar
            day += timedelta(days=1)

        assert previous == LunarDate(2100, 12, False, 29)

    def test_new_year_of_every_lunar_year(self, converter: LunarConverter) -> None:
        first = MIN_DATE
        for year in range(lunar_table.MIN_YEAR, lunar_table.MAX_YEAR + 1):
            assert converter.solar_to_lunar(first) == f"{year}年正月初一"
            first += timedelta(days=lunar_table.year_length(year))
        assert first == MAX_DATE


@pytest.mark.integration
class TestLeapMonths:
    """测试每个闰月的一致性。"""

    @pytest.mark.parametrize(
        "year",
        [y for y in range(lunar_table.MIN_YEAR, lunar_table.MAX_YEAR + 1) if lunar_table.leap_month(y)],
    )
    def test_leap_month_first_day(self, converter: LunarConverter, year: int) -> None:
        leap = lunar_table.leap_month(year)
        name = LUNAR_MONTH_NAMES[leap - 1]

        solar = converter.lunar_to_solar(f"{year}年闰{name}月初一")
        regular = converter.lunar_to_solar(f"{year}年{name}月初一")
        assert solar - regular == timedelta(days=lunar_table.month_length(year, leap))

        other = LUNAR_MONTH_NAMES[leap % 12]
        with pytest.raises(ConsistencyError):
            converter.lunar_to_solar(f"{year}年闰{other}月初一")

    def test_leap_year_count(self) -> None:
        leap_years = [y for y in range(1901, 2101) if lunar_table.leap_month(y)]
        assert len(leap_years) == 73
        assert 2033 in leap_years
