"""
time_tools 模块单元测试

测试日期格式化、解析以及工作日/节假日判断。
"""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from xtools.holidays import DayType, HolidayCalendar
from xtools.time_tools import (
    date_of_time,
    date_type,
    format_hm,
    format_hms,
    format_md,
    format_weekday,
    format_ymd,
    format_ymdhms,
    parse_ymd,
    parse_ymdhms,
)


@pytest.mark.unit
class TestFormatting:
    """测试格式化函数。"""

    def test_formats(self) -> None:
        dt = datetime(2024, 2, 10, 8, 5, 9)
        assert format_ymdhms(dt) == "2024-02-10 08:05:09"
        assert format_ymd(dt) == "2024-02-10"
        assert format_md(dt) == "02-10"
        assert format_hms(dt) == "08:05:09"
        assert format_hm(dt) == "08:05"

    @pytest.mark.parametrize(
        "day, expected",
        [(date(2024, 2, 10), "星期六"), (date(2024, 2, 11), "星期日"), (date(2024, 2, 12), "星期一")],
    )
    def test_format_weekday(self, day: date, expected: str) -> None:
        assert format_weekday(day) == expected


@pytest.mark.unit
class TestParsing:
    """测试解析函数。"""

    def test_parse_ymd(self) -> None:
        assert parse_ymd("2024-02-10") == date(2024, 2, 10)
        assert parse_ymd(" 2024-02-10 ") == date(2024, 2, 10)

    def test_parse_ymdhms_with_tz(self) -> None:
        tz = ZoneInfo("Asia/Shanghai")
        dt = parse_ymdhms("2024-02-10 08:05:09", tz)
        assert dt == datetime(2024, 2, 10, 8, 5, 9, tzinfo=tz)

    def test_parse_ymdhms_naive(self) -> None:
        assert parse_ymdhms("2024-02-10 08:05:09").tzinfo is None

    @pytest.mark.parametrize("text", ["2024/02/10", "2024-13-01", "abc"])
    def test_parse_invalid(self, text: str) -> None:
        with pytest.raises(ValueError):
            parse_ymd(text)

    def test_date_of_time_keeps_tz(self) -> None:
        tz = ZoneInfo("Asia/Shanghai")
        dt = datetime(2024, 2, 10, 23, 59, 59, 999, tzinfo=tz)
        assert date_of_time(dt) == datetime(2024, 2, 10, tzinfo=tz)


@pytest.mark.unit
class TestDateType:
    """测试工作日/公休日/节假日判断。"""

    def test_statutory_holiday(self) -> None:
        assert date_type(date(2017, 10, 1)) == DayType.HOLIDAY

    def test_adjusted_workday_on_weekend(self) -> None:
        # 2017-09-30 是周六，调休上班
        assert date_type(date(2017, 9, 30)) == DayType.WORKDAY

    def test_adjusted_restday_on_weekday(self) -> None:
        # 2017-10-05 是周四，调休放假
        assert date_type(date(2017, 10, 5)) == DayType.RESTDAY

    def test_unlisted_day_in_covered_year(self) -> None:
        assert date_type(date(2016, 1, 4)) == DayType.WORKDAY
        assert date_type(date(2016, 1, 2)) == DayType.RESTDAY

    def test_fallback_outside_table(self) -> None:
        assert date_type(date(2018, 10, 1)) == DayType.WORKDAY
        assert date_type(date(2018, 10, 6)) == DayType.RESTDAY

    def test_datetime_input(self) -> None:
        assert date_type(datetime(2017, 10, 1, 12, 0)) == DayType.HOLIDAY

    def test_custom_calendar(self, custom_holiday_file: Path) -> None:
        calendar = HolidayCalendar.from_yaml(custom_holiday_file)
        assert date_type(date(2030, 2, 4), calendar) == DayType.HOLIDAY
        # 默认数据中的年份不再生效，按星期推断
        assert date_type(date(2017, 10, 1), calendar) == DayType.RESTDAY

    def test_day_type_values(self) -> None:
        assert DayType.WORKDAY == 1
        assert DayType.RESTDAY == 2
        assert DayType.HOLIDAY == 3
        assert DayType.HOLIDAY.label == "节假日"
