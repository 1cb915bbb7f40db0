from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .calendar import LunarConverter, LunarDate, LunarError
from .calendar import lunar_table
from .config import Config
from .holidays import HolidayCalendar, HolidayDataError
from .time_tools import date_type, format_weekday, format_ymd, parse_ymd

app = typer.Typer(help="xtools：农历换算、节假日查询等常用时间工具")
console = Console()

logger = logging.getLogger(__name__)


def _load_config() -> Config:
    config = Config.from_env()
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=config.log_level_value,
    )
    logger.debug(f"配置加载完成: 时区 {config.timezone.key}, 节假日文件 {config.holiday_file or '内置'}")
    return config


def _parse_day(text: str | None, config: Config) -> date:
    if not text:
        return datetime.now(tz=config.timezone).date()
    try:
        return parse_ymd(text)
    except ValueError:
        console.print(f"[red]日期格式不正确，应为 yyyy-MM-dd: {text}[/red]")
        raise typer.Exit(1)


def _holiday_calendar(config: Config) -> HolidayCalendar:
    if config.holiday_file is None:
        return HolidayCalendar.default()
    return HolidayCalendar.from_yaml(config.holiday_file)


@app.command()
def lunar(day: Optional[str] = typer.Argument(None, help="公历日期 yyyy-MM-dd，默认今天")):
    """公历转农历"""
    config = _load_config()
    solar = _parse_day(day, config)
    converter = LunarConverter(config.timezone)
    try:
        console.print(converter.solar_to_lunar(solar))
    except LunarError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


@app.command()
def solar(text: str = typer.Argument(..., help="农历日期，如 2033年闰冬月廿八")):
    """农历转公历"""
    config = _load_config()
    converter = LunarConverter(config.timezone)
    try:
        result = converter.lunar_to_solar(text)
    except LunarError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    console.print(f"{format_ymd(result)} {format_weekday(result)}")


@app.command()
def daytype(day: Optional[str] = typer.Argument(None, help="公历日期 yyyy-MM-dd，默认今天")):
    """查询某天是工作日、公休日还是节假日"""
    config = _load_config()
    solar_day = _parse_day(day, config)
    try:
        calendar = _holiday_calendar(config)
    except (OSError, HolidayDataError) as e:
        console.print(f"[red]加载节假日数据失败: {e}[/red]")
        raise typer.Exit(1)

    result = date_type(solar_day, calendar)
    if not calendar.covers(solar_day.year):
        console.print(f"[yellow]节假日数据未覆盖 {solar_day.year} 年，按星期推断[/yellow]")
    console.print(f"{format_ymd(solar_day)} {format_weekday(solar_day)} {result.label}")


@app.command()
def months(year: int = typer.Argument(..., help="农历年份 1901-2100")):
    """列出农历某年的所有月份"""
    config = _load_config()
    converter = LunarConverter(config.timezone)
    try:
        month_list = list(lunar_table.months(year))
        first_day = converter.lunar_date_to_solar(LunarDate(year, 1, False, 1))
    except LunarError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"农历 {year} 年（{lunar_table.year_length(year)} 天）")
    table.add_column("月份")
    table.add_column("天数", justify="right")
    table.add_column("初一（公历）")

    for month, is_leap, length in month_list:
        name = LunarDate(year, month, is_leap, 1).month_name
        table.add_row(name, str(length), format_ymd(first_day))
        first_day += timedelta(days=length)

    console.print(table)


if __name__ == "__main__":
    app()
