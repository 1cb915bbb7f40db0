"""
公历 ↔ 农历换算

以 1901-02-19（农历 1901 年正月初一）为基准日，逐年、逐月扣减天数得到农历日期；
反向换算时把农历年月日折算成距基准日的天数。

农历日期字符串格式，例 1：1992年八月初六，例 2：2033年闰冬月廿八。
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from . import lunar_table
from .errors import ConsistencyError, FormatError, OutOfRangeError, RangeError

logger = logging.getLogger(__name__)

# 可接受的最早公历日期，农历 1901 年正月初一
MIN_DATE = date(1901, 2, 19)
# 可接受的最迟公历日期（不含）
MAX_DATE = date(2101, 1, 29)

DEFAULT_TIMEZONE = ZoneInfo("Asia/Shanghai")

LUNAR_MONTH_NAMES = ("正", "二", "三", "四", "五", "六", "七", "八", "九", "十", "冬", "腊")
LUNAR_DAY_DIGITS = ("一", "二", "三", "四", "五", "六", "七", "八", "九")
LUNAR_DAY_TENS = ("初", "十", "廿")
SPECIAL_DAY_NAMES = {10: "初十", 20: "二十", 30: "三十"}

LUNAR_PATTERN = re.compile(
    r"((19|20|21)\d{2})年(闰)?(正|二|三|四|五|六|七|八|九|十|冬|腊)月"
    r"((初|十|廿)(一|二|三|四|五|六|七|八|九)|初十|二十|三十)"
)


def day_name(day: int) -> str:
    """农历日的中文写法，如 1 -> 初一，20 -> 二十，21 -> 廿一"""
    if day in SPECIAL_DAY_NAMES:
        return SPECIAL_DAY_NAMES[day]
    return LUNAR_DAY_TENS[day // 10] + LUNAR_DAY_DIGITS[day % 10 - 1]


def _parse_day_name(text: str) -> int:
    for day, name in SPECIAL_DAY_NAMES.items():
        if text == name:
            return day
    return LUNAR_DAY_TENS.index(text[0]) * 10 + LUNAR_DAY_DIGITS.index(text[1]) + 1


@dataclass(frozen=True)
class LunarDate:
    """农历日期"""

    year: int
    month: int  # 1 表示正月
    is_leap: bool
    day: int  # 1 表示初一

    @property
    def month_name(self) -> str:
        prefix = "闰" if self.is_leap else ""
        return f"{prefix}{LUNAR_MONTH_NAMES[self.month - 1]}月"

    @property
    def day_name(self) -> str:
        return day_name(self.day)

    def __str__(self) -> str:
        return f"{self.year}年{self.month_name}{self.day_name}"


def check_lunar_date(year: int, month: int, day: int, is_leap: bool) -> None:
    """
    检查农历年、月、日和是否闰月是否合法。

    Raises:
        RangeError: 年、月、日超出范围
        ConsistencyError: 标记了闰月但该年该月不是闰月
    """
    if year < lunar_table.MIN_YEAR or year > lunar_table.MAX_YEAR:
        raise RangeError(f"非法农历年份: {year}")
    if month < 1 or month > 12:
        raise RangeError(f"非法农历月份: {month}")
    if is_leap and lunar_table.leap_month(year) != month:
        raise ConsistencyError(f"农历{year}年{month}月不是闰月")
    if day < 1 or day > lunar_table.month_length(year, month, is_leap):
        raise RangeError(f"非法农历天数: {day}")


def parse_lunar(text: str) -> LunarDate:
    """
    解析农历日期字符串并校验。

    Raises:
        FormatError: 字符串格式不正确
        RangeError / ConsistencyError: 见 check_lunar_date
    """
    match = LUNAR_PATTERN.fullmatch(text)
    if not match:
        raise FormatError(f"农历日期格式不正确，例1：1992年八月初六。例2：2033年闰冬月廿八。实际: {text!r}")

    year = int(match.group(1))
    is_leap = match.group(3) is not None
    month = LUNAR_MONTH_NAMES.index(match.group(4)) + 1
    day = _parse_day_name(match.group(5))

    check_lunar_date(year, month, day, is_leap)
    return LunarDate(year, month, is_leap, day)


class LunarConverter:
    """
    公历与农历互转。

    数据表是只读的模块级常量，转换器本身不持有可变状态，可在多线程间共享。
    """

    def __init__(self, timezone: ZoneInfo = DEFAULT_TIMEZONE):
        self.timezone = timezone

    def _to_date(self, value: date | datetime) -> date:
        """带时区的 datetime 先换算到参考时区，再取当天日期"""
        if isinstance(value, datetime):
            if value.tzinfo is not None:
                value = value.astimezone(self.timezone)
            return value.date()
        return value

    def solar_to_lunar_date(self, value: date | datetime) -> LunarDate:
        """
        公历转农历。

        Raises:
            OutOfRangeError: 日期不在 [1901-02-19, 2101-01-29) 内
        """
        solar = self._to_date(value)
        if solar < MIN_DATE or solar >= MAX_DATE:
            raise OutOfRangeError(f"要转换的公历超出范围: {solar.isoformat()}")

        # 与基准日相差的天数，开头那天算，结尾那天不算
        offset = (solar - MIN_DATE).days

        lunar_year = lunar_table.MIN_YEAR
        while True:
            year_days = lunar_table.year_length(lunar_year)
            if offset < year_days:
                break
            offset -= year_days
            lunar_year += 1

        lunar_month = 0
        is_leap = False
        for month, leap, month_days in lunar_table.months(lunar_year):
            if offset < month_days:
                lunar_month, is_leap = month, leap
                break
            offset -= month_days

        result = LunarDate(lunar_year, lunar_month, is_leap, offset + 1)
        logger.debug(f"公历 {solar.isoformat()} -> 农历 {result}")
        return result

    def solar_to_lunar(self, value: date | datetime) -> str:
        """公历转农历字符串，例：2033年闰冬月廿八"""
        return str(self.solar_to_lunar_date(value))

    def lunar_date_to_solar(self, lunar: LunarDate) -> date:
        """农历日期转公历，会先做合法性校验"""
        check_lunar_date(lunar.year, lunar.month, lunar.day, lunar.is_leap)

        offset = 0
        for year in range(lunar_table.MIN_YEAR, lunar.year):
            offset += lunar_table.year_length(year)

        leap = lunar_table.leap_month(lunar.year)
        for month in range(1, lunar.month):
            offset += lunar_table.month_length(lunar.year, month)
            if month == leap:
                offset += lunar_table.month_length(lunar.year, month, True)

        # 闰月排在同名的正常月之后
        if lunar.is_leap:
            offset += lunar_table.month_length(lunar.year, lunar.month)

        offset += lunar.day - 1
        solar = MIN_DATE + timedelta(days=offset)
        logger.debug(f"农历 {lunar} -> 公历 {solar.isoformat()}")
        return solar

    def lunar_to_solar(self, text: str) -> date:
        """农历字符串转公历日期"""
        return self.lunar_date_to_solar(parse_lunar(text))


_default_converter = LunarConverter()


def solar_to_lunar(value: date | datetime) -> str:
    """使用默认转换器（Asia/Shanghai）将公历转为农历字符串"""
    return _default_converter.solar_to_lunar(value)


def solar_to_lunar_date(value: date | datetime) -> LunarDate:
    return _default_converter.solar_to_lunar_date(value)


def lunar_to_solar(text: str) -> date:
    """使用默认转换器将农历字符串转为公历日期"""
    return _default_converter.lunar_to_solar(text)


def lunar_date_to_solar(lunar: LunarDate) -> date:
    return _default_converter.lunar_date_to_solar(lunar)
