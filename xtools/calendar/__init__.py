"""农历数据表与公历农历换算"""

from .errors import ConsistencyError, FormatError, LunarError, OutOfRangeError, RangeError
from .lunar import (
    LunarConverter,
    LunarDate,
    lunar_date_to_solar,
    lunar_to_solar,
    parse_lunar,
    solar_to_lunar,
    solar_to_lunar_date,
)

__all__ = [
    "ConsistencyError",
    "FormatError",
    "LunarConverter",
    "LunarDate",
    "LunarError",
    "OutOfRangeError",
    "RangeError",
    "lunar_date_to_solar",
    "lunar_to_solar",
    "parse_lunar",
    "solar_to_lunar",
    "solar_to_lunar_date",
]
