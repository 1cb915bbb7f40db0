"""
集中配置管理

从环境变量 / .env 文件加载配置项，并提供默认值。
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

DEFAULT_TZ = "Asia/Shanghai"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Config:
    """不可变配置对象，一次加载、全局使用。"""

    # 农历换算使用的参考时区
    timezone: ZoneInfo = field(default_factory=lambda: ZoneInfo(DEFAULT_TZ))
    # 自定义节假日数据文件，None 表示使用包内数据
    holiday_file: Path | None = None
    log_level: str = "INFO"

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)

    @classmethod
    def from_env(cls, env_path: str | Path | None = None, load_dotenv_file: bool = True) -> "Config":
        """从 .env 文件 + 环境变量构建 Config 实例。"""
        if env_path:
            load_dotenv(env_path, override=True)
        elif load_dotenv_file:
            # 优先级:
            # 1. 当前目录 .xtools/.env
            # 2. 当前目录 .env
            # 3. ~/.xtools/.env
            candidates = [
                Path.cwd() / ".xtools" / ".env",
                Path.cwd() / ".env",
                Path.home() / ".xtools" / ".env",
            ]
            for candidate in candidates:
                if candidate.exists():
                    load_dotenv(candidate, override=True)
                    break

        # 时区
        tz_name = os.getenv("XTOOLS_TZ", DEFAULT_TZ).strip()
        try:
            tz = ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, ValueError):
            print(f"[WARN] 无法识别时区 '{tz_name}'，回退到 {DEFAULT_TZ}")
            tz = ZoneInfo(DEFAULT_TZ)

        raw_file = os.getenv("XTOOLS_HOLIDAY_FILE", "").strip()
        holiday_file = Path(raw_file).expanduser() if raw_file else None

        level = os.getenv("XTOOLS_LOG_LEVEL", "INFO").strip().upper()
        if level not in LOG_LEVELS:
            print(f"[WARN] 无法识别日志级别 '{level}'，回退到 INFO")
            level = "INFO"

        return cls(timezone=tz, holiday_file=holiday_file, log_level=level)
