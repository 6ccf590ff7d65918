# shard-rewards-backend/app/utils/__init__.py
"""
ユーティリティモジュール
"""

from .time_utils import (
    now_ms,
    hours_to_ms,
    ms_to_datetime,
    ms_to_iso,
    format_duration_ms,
    UTC,
)
