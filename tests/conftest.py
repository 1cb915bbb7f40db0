"""
测试共享 Fixtures

提供所有测试模块共享的配置、转换器和测试数据。
"""

from __future__ import annotations

from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from xtools.calendar import LunarConverter
from xtools.config import Config
from xtools.holidays import HolidayCalendar

# ═══════════════════════════════════════════════════════════
# 配置 Fixtures
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def test_config() -> Config:
    """创建测试配置。"""
    return Config(
        timezone=ZoneInfo("Asia/Shanghai"),
        holiday_file=None,
        log_level="INFO",
    )


# ═══════════════════════════════════════════════════════════
# 农历 Fixtures
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def converter(test_config: Config) -> LunarConverter:
    """创建使用上海时区的转换器。"""
    return LunarConverter(test_config.timezone)


@pytest.fixture
def known_dates() -> list[tuple[str, str]]:
    """已知的公历/农历对照。"""
    return [
        ("1901-02-19", "1901年正月初一"),
        ("2000-02-05", "2000年正月初一"),
        ("2017-07-23", "2017年闰六月初一"),
        ("2017-10-04", "2017年八月十五"),
        ("2020-05-23", "2020年闰四月初一"),
        ("2023-01-22", "2023年正月初一"),
        ("2023-03-22", "2023年闰二月初一"),
        ("2024-02-10", "2024年正月初一"),
        ("2024-06-10", "2024年五月初五"),
        ("2024-09-17", "2024年八月十五"),
        ("2026-02-13", "2025年腊月廿六"),
        ("2026-02-17", "2026年正月初一"),
        ("2033-12-22", "2033年闰冬月初一"),
        ("2034-01-18", "2033年闰冬月廿八"),
        ("2034-02-18", "2033年腊月三十"),
    ]


# ═══════════════════════════════════════════════════════════
# 节假日 Fixtures
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def holiday_calendar() -> HolidayCalendar:
    """包内自带的节假日数据。"""
    return HolidayCalendar.default()


@pytest.fixture
def custom_holiday_file(tmp_path: Path) -> Path:
    """写一个只有 2030 年数据的自定义节假日文件。"""
    path = tmp_path / "holidays.yaml"
    path.write_text(
        "2030:\n"
        '  workday: ["02-09"]\n'
        '  restday: ["02-06", "02-07"]\n'
        '  holiday: ["01-01", "02-03", "02-04", "02-05"]\n',
        encoding="utf-8",
    )
    return path


# ═══════════════════════════════════════════════════════════
# HTTP Fixtures
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def sample_png_file(tmp_path: Path) -> Path:
    """写一个模拟 PNG 文件。"""
    path = tmp_path / "photo.png"
    path.write_bytes(b"\x89PNG\r\n\x1a\n" + b"\x00" * 16)
    return path
