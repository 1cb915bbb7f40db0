"""
节假日数据

按年份保存法定节假日、调休放假和调休上班的日期（MM-DD）。
数据以 YAML 文件提供，默认使用包内自带的 2000-2017 年数据，
也可以通过 HolidayCalendar.from_yaml 换成其它数据源。
"""

from __future__ import annotations

import importlib.resources as pkg_resources
import logging
from datetime import date, datetime
from enum import IntEnum
from pathlib import Path
from typing import Any, Mapping

import yaml

logger = logging.getLogger(__name__)

DEFAULT_DATA_FILE = "holidays.yaml"


class DayType(IntEnum):
    """某一天的类型"""

    WORKDAY = 1  # 工作日
    RESTDAY = 2  # 公休日
    HOLIDAY = 3  # 节假日

    @property
    def label(self) -> str:
        return {1: "工作日", 2: "公休日", 3: "节假日"}[self.value]


# YAML 中的键名 -> 日期类型
_SECTION_TYPES = {
    "workday": DayType.WORKDAY,
    "restday": DayType.RESTDAY,
    "holiday": DayType.HOLIDAY,
}


class HolidayDataError(ValueError):
    """节假日数据文件格式错误"""

    pass


def _check_month_day(year: int, value: Any) -> str:
    """校验形如 01-31 的日期，2000 年是闰年，02-29 总能通过"""
    try:
        if not isinstance(value, str):
            raise ValueError(value)
        parsed = datetime.strptime(f"2000-{value}", "%Y-%m-%d")
    except ValueError as e:
        raise HolidayDataError(f"{year} 年存在非法日期: {value!r}") from e
    if parsed.strftime("%m-%d") != value:
        raise HolidayDataError(f"{year} 年的日期必须写成 MM-DD: {value!r}")
    return value


class HolidayCalendar:
    """年份 -> {日期类型 -> MM-DD 集合} 的只读查表"""

    def __init__(self, data: Mapping[int, Mapping[DayType, frozenset[str]]]):
        self._data = {year: dict(sections) for year, sections in data.items()}

    @classmethod
    def from_mapping(cls, raw: Any) -> "HolidayCalendar":
        """从 yaml.safe_load 的结果构建，校验年份和段落名"""
        if not isinstance(raw, dict):
            raise HolidayDataError("节假日数据顶层必须是 年份 -> 数据 的映射")

        data: dict[int, dict[DayType, frozenset[str]]] = {}
        for year, sections in raw.items():
            try:
                year_num = int(year)
            except (TypeError, ValueError) as e:
                raise HolidayDataError(f"非法年份: {year!r}") from e
            if not isinstance(sections, dict):
                raise HolidayDataError(f"{year_num} 年的数据必须是映射")

            parsed: dict[DayType, frozenset[str]] = {}
            for name, days in sections.items():
                day_type = _SECTION_TYPES.get(name)
                if day_type is None:
                    raise HolidayDataError(f"{year_num} 年存在未知段落: {name!r}")
                if days is None:
                    days = []
                if not isinstance(days, list):
                    raise HolidayDataError(f"{year_num} 年的 {name} 必须是 MM-DD 列表")
                parsed[day_type] = frozenset(_check_month_day(year_num, d) for d in days)
            data[year_num] = parsed

        return cls(data)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "HolidayCalendar":
        """从 YAML 文件加载"""
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise HolidayDataError(f"解析节假日文件失败 {path}: {e}") from e

        calendar = cls.from_mapping(raw)
        logger.info(f"节假日数据已加载: {path} ({len(calendar.years)} 年)")
        return calendar

    @classmethod
    def default(cls) -> "HolidayCalendar":
        """包内自带的 2000-2017 年数据"""
        resource = pkg_resources.files("xtools") / "data" / DEFAULT_DATA_FILE
        raw = yaml.safe_load(resource.read_text(encoding="utf-8"))
        return cls.from_mapping(raw)

    @property
    def years(self) -> list[int]:
        return sorted(self._data)

    def covers(self, year: int) -> bool:
        return year in self._data

    def lookup(self, day: date) -> DayType | None:
        """查表得到日期类型，表中没有这一天时返回 None"""
        sections = self._data.get(day.year)
        if sections is None:
            return None

        key = day.strftime("%m-%d")
        for day_type in DayType:
            if key in sections.get(day_type, ()):
                return day_type
        return None
