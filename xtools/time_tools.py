"""
常用时间函数

格式化/解析函数都是无状态的，每次调用各自使用 strftime/strptime，
不缓存、不共享格式化对象，可以在任意线程中直接调用。
"""

from __future__ import annotations

import logging
from datetime import date, datetime, tzinfo
from functools import lru_cache

from .holidays import DayType, HolidayCalendar

logger = logging.getLogger(__name__)

YMDHMS = "%Y-%m-%d %H:%M:%S"
YMD = "%Y-%m-%d"
MD = "%m-%d"
HMS = "%H:%M:%S"
HM = "%H:%M"

WEEKDAY_NAMES = ("星期一", "星期二", "星期三", "星期四", "星期五", "星期六", "星期日")


def format_ymdhms(dt: datetime) -> str:
    return dt.strftime(YMDHMS)


def format_ymd(day: date) -> str:
    return day.strftime(YMD)


def format_md(day: date) -> str:
    return day.strftime(MD)


def format_hms(dt: datetime) -> str:
    return dt.strftime(HMS)


def format_hm(dt: datetime) -> str:
    return dt.strftime(HM)


def format_weekday(day: date) -> str:
    """星期几的中文写法，如 星期一"""
    return WEEKDAY_NAMES[day.weekday()]


def parse_ymdhms(text: str, tz: tzinfo | None = None) -> datetime:
    """解析 yyyy-MM-dd HH:mm:ss，给定 tz 时返回带时区的 datetime"""
    dt = datetime.strptime(text.strip(), YMDHMS)
    return dt.replace(tzinfo=tz) if tz is not None else dt


def parse_ymd(text: str) -> date:
    """解析 yyyy-MM-dd"""
    return datetime.strptime(text.strip(), YMD).date()


def date_of_time(dt: datetime) -> datetime:
    """任意时刻所在当天的 00:00:00，保留时区"""
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


@lru_cache(maxsize=1)
def _default_calendar() -> HolidayCalendar:
    return HolidayCalendar.default()


def date_type(day: date, calendar: HolidayCalendar | None = None) -> DayType:
    """
    获取某一天的类型：工作日、公休日、节假日。

    先查节假日表；表中没有这一天（或没有这一年）时，周一到周五算工作日，其余算公休日。

    Args:
        day: 要查询的日期（datetime 只看日期部分）
        calendar: 节假日数据，默认使用包内自带的数据
    """
    if isinstance(day, datetime):
        day = day.date()
    calendar = calendar or _default_calendar()

    found = calendar.lookup(day)
    if found is not None:
        return found

    if not calendar.covers(day.year):
        logger.debug(f"节假日表未覆盖 {day.year} 年，按星期推断")
    return DayType.WORKDAY if day.weekday() < 5 else DayType.RESTDAY
