"""农历数据表 (1901-2100)

数据来源于香港天文台公历农历对照表。

每年一个整数：
- 低 4 位：闰月月份（0 表示无闰月）
- bit 15..4：正月到腊月的大小（1 -> 30 天，0 -> 29 天）
- bit 16 (0x10000)：闰月大小（1 -> 30 天，0 -> 29 天）
"""

from __future__ import annotations

from typing import Iterator

from .errors import ConsistencyError, OutOfRangeError, RangeError

MIN_YEAR = 1901
MAX_YEAR = 2100

LUNAR_INFO = (
    0x04AE0, 0x0A570, 0x054D5, 0x0D260, 0x0D950, 0x16554, 0x056A0, 0x09AD0, 0x055D2, 0x04AE0,  # 1901-1910
    0x0A5B6, 0x0A4D0, 0x0D250, 0x1D255, 0x0B540, 0x0D6A0, 0x0ADA2, 0x095B0, 0x14977, 0x04970,  # 1911-1920
    0x0A4B0, 0x0B4B5, 0x06A50, 0x06D40, 0x1AB54, 0x02B60, 0x09570, 0x052F2, 0x04970, 0x06566,  # 1921-1930
    0x0D4A0, 0x0EA50, 0x06E95, 0x05AD0, 0x02B60, 0x186E3, 0x092E0, 0x1C8D7, 0x0C950, 0x0D4A0,  # 1931-1940
    0x1D8A6, 0x0B550, 0x056A0, 0x1A5B4, 0x025D0, 0x092D0, 0x0D2B2, 0x0A950, 0x0B557, 0x06CA0,  # 1941-1950
    0x0B550, 0x15355, 0x04DA0, 0x0A5B0, 0x14573, 0x052B0, 0x0A9A8, 0x0E950, 0x06AA0, 0x0AEA6,  # 1951-1960
    0x0AB50, 0x04B60, 0x0AAE4, 0x0A570, 0x05260, 0x0F263, 0x0D950, 0x05B57, 0x056A0, 0x096D0,  # 1961-1970
    0x04DD5, 0x04AD0, 0x0A4D0, 0x0D4D4, 0x0D250, 0x0D558, 0x0B540, 0x0B6A0, 0x195A6, 0x095B0,  # 1971-1980
    0x049B0, 0x0A974, 0x0A4B0, 0x0B27A, 0x06A50, 0x06D40, 0x0AF46, 0x0AB60, 0x09570, 0x04AF5,  # 1981-1990
    0x04970, 0x064B0, 0x074A3, 0x0EA50, 0x06B58, 0x055C0, 0x0AB60, 0x096D5, 0x092E0, 0x0C960,  # 1991-2000
    0x0D954, 0x0D4A0, 0x0DA50, 0x07552, 0x056A0, 0x0ABB7, 0x025D0, 0x092D0, 0x0CAB5, 0x0A950,  # 2001-2010
    0x0B4A0, 0x0BAA4, 0x0AD50, 0x055D9, 0x04BA0, 0x0A5B0, 0x15176, 0x052B0, 0x0A930, 0x07954,  # 2011-2020
    0x06AA0, 0x0AD50, 0x05B52, 0x04B60, 0x0A6E6, 0x0A4E0, 0x0D260, 0x0EA65, 0x0D530, 0x05AA0,  # 2021-2030
    0x076A3, 0x096D0, 0x04AFB, 0x04AD0, 0x0A4D0, 0x1D0B6, 0x0D250, 0x0D520, 0x0DD45, 0x0B5A0,  # 2031-2040
    0x056D0, 0x055B2, 0x049B0, 0x0A577, 0x0A4B0, 0x0AA50, 0x1B255, 0x06D20, 0x0ADA0, 0x14B63,  # 2041-2050
    0x09370, 0x049F8, 0x04970, 0x064B0, 0x168A6, 0x0EA50, 0x06B20, 0x1A6C4, 0x0AAE0, 0x0A2E0,  # 2051-2060
    0x0D2E3, 0x0C960, 0x0D557, 0x0D4A0, 0x0DA50, 0x05D55, 0x056A0, 0x0A6D0, 0x055D4, 0x052D0,  # 2061-2070
    0x0A9B8, 0x0A950, 0x0B4A0, 0x0B6A6, 0x0AD50, 0x055A0, 0x0ABA4, 0x0A5B0, 0x052B0, 0x0B273,  # 2071-2080
    0x06930, 0x07337, 0x06AA0, 0x0AD50, 0x14B55, 0x04B60, 0x0A570, 0x054E4, 0x0D160, 0x0E968,  # 2081-2090
    0x0D520, 0x0DAA0, 0x16AA6, 0x056D0, 0x04AE0, 0x0A9D4, 0x0A2D0, 0x0D150, 0x0F252, 0x0D520,  # 2091-2100
)


def _year_data(year: int) -> int:
    if year < MIN_YEAR or year > MAX_YEAR:
        raise OutOfRangeError(f"农历年份超出范围 {MIN_YEAR}-{MAX_YEAR}: {year}")
    return LUNAR_INFO[year - MIN_YEAR]


def leap_month(year: int) -> int:
    """该年闰几月，无闰月返回 0"""
    return _year_data(year) & 0xF


def month_length(year: int, month: int, is_leap: bool = False) -> int:
    """
    农历某年某月的天数。

    Args:
        year: 农历年份
        month: 农历月份，1 表示正月
        is_leap: 是否是闰月

    Raises:
        OutOfRangeError: 年份不在数据表内
        RangeError: 月份不在 1-12
        ConsistencyError: 要求闰月，但该年该月不是闰月
    """
    data = _year_data(year)
    if month < 1 or month > 12:
        raise RangeError(f"非法农历月份: {month}")
    if is_leap:
        if (data & 0xF) != month:
            raise ConsistencyError(f"农历{year}年{month}月不是闰月")
        return 30 if (data & 0x10000) else 29
    return 30 if (data & (0x10000 >> month)) else 29


def year_length(year: int) -> int:
    """农历某年的总天数"""
    data = _year_data(year)
    if data & 0xF:
        return 29 * 13 + bin(data & 0x1FFF0).count("1")
    return 29 * 12 + bin(data & 0xFFF0).count("1")


def months(year: int) -> Iterator[tuple[int, bool, int]]:
    """
    按顺序遍历一年中的每个月 (月份, 是否闰月, 天数)，闰月紧跟在同名月之后。

    Raises:
        OutOfRangeError: 年份不在数据表内，调用时立即抛出
    """
    return _iter_months(year, leap_month(year))


def _iter_months(year: int, leap: int) -> Iterator[tuple[int, bool, int]]:
    for month in range(1, 13):
        yield month, False, month_length(year, month)
        if month == leap:
            yield month, True, month_length(year, month, True)
