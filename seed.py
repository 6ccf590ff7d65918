# shard-rewards-backend/seed.py
"""
引き換えコードをスナップショットに直接登録するスクリプト（サーバー停止中に実行）

    python seed.py                      # DEFAULT_REDEEM_CODES + CODES_DATA を登録
    python seed.py LAUNCH2025:500:global_once
"""

import logging
import sys

from dotenv import load_dotenv

load_dotenv()

from app.core.config import settings  # noqa: E402
from app.db.models import RedeemCode, UsageMode  # noqa: E402
from app.db.registry import AccountRegistry  # noqa: E402
from app.db.store import JsonStore  # noqa: E402

logger = logging.getLogger("seed")

# --- 定数定義 ---
# 追加で登録したいコード: (コード, 報酬, 利用形態)
CODES_DATA = [
    ("ZENYXONTOP", 200, UsageMode.PER_ACCOUNT),
]


def parse_args(argv):
    """ "CODE:AMOUNT[:MODE]" 形式の引数を (コード, 報酬, 利用形態) に変換 """
    entries = []
    for arg in argv:
        bad = SystemExit(f"Bad code spec: {arg!r} (expected CODE:AMOUNT[:MODE])")
        parts = arg.split(":")
        if len(parts) not in (2, 3):
            raise bad
        code = parts[0].strip().upper()
        try:
            amount = int(parts[1])
            mode = UsageMode(parts[2]) if len(parts) == 3 else UsageMode.PER_ACCOUNT
        except ValueError:
            raise bad
        if not code or amount <= 0:
            raise bad
        entries.append((code, amount, mode))
    return entries


def seed_codes(path, entries) -> AccountRegistry:
    registry = AccountRegistry.from_store(JsonStore(path), settings.DEFAULT_REDEEM_CODES)
    codes = {code: RedeemCode(amount=amount, usage_mode=mode) for code, amount, mode in entries}
    with registry.transaction():
        registry.commit(codes=codes)
    logger.info("Seeding complete! ✅ (%d codes in catalog)", len(registry.list_codes()))
    return registry


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seed_codes(settings.DATA_FILE, CODES_DATA + parse_args(sys.argv[1:]))
