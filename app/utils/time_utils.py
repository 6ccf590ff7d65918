# shard-rewards-backend/app/utils/time_utils.py
"""
時刻関連のユーティリティ関数

台帳上の時刻はすべて UTC のエポックミリ秒で保持する。
"""

import time
from datetime import datetime, timedelta
from pytz import utc

UTC = utc


def now_ms() -> int:
    """現在時刻（エポックミリ秒）"""
    return int(time.time() * 1000)


def hours_to_ms(hours: float) -> int:
    return int(timedelta(hours=hours).total_seconds() * 1000)


def ms_to_datetime(ms: int) -> datetime:
    """エポックミリ秒を UTC の datetime に変換"""
    return datetime.fromtimestamp(ms / 1000, tz=UTC)


def ms_to_iso(ms: int) -> str:
    return ms_to_datetime(ms).isoformat()


def format_duration_ms(ms: int) -> str:
    """残り時間を "3h 05m" のような文字列にする（1分未満は切り上げ）"""
    total_minutes = max((ms + 59_999) // 60_000, 0)
    hours, minutes = divmod(total_minutes, 60)
    if hours:
        return f"{hours}h {minutes:02d}m"
    return f"{minutes}m"
