"""农历换算相关的异常"""

from __future__ import annotations


class LunarError(ValueError):
    """农历换算错误的基类"""

    pass


class OutOfRangeError(LunarError):
    """公历日期或农历年份超出 1901-2100 的数据表范围"""

    pass


class RangeError(OutOfRangeError):
    """解析出的农历年、月、日不在合法范围内"""

    pass


class FormatError(LunarError):
    """农历日期字符串格式不正确"""

    pass


class ConsistencyError(LunarError):
    """标记了闰月，但该年的闰月并不是这个月"""

    pass
