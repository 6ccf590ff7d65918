# shard-rewards-backend/app/db/database.py

import logging

from app.core.config import settings  # 設定は config から読み込む
from app.db.registry import AccountRegistry
from app.db.store import JsonStore

logger = logging.getLogger(__name__)

# プロセス内で1つだけ持つ台帳（初回アクセス時に読み込む）
_registry = None


def init_registry(path=None) -> AccountRegistry:
    """
    スナップショットを読み込んで台帳を作り直す.
    読み込みに失敗しても空の台帳で起動する。
    """
    global _registry
    store = JsonStore(path or settings.DATA_FILE)
    _registry = AccountRegistry.from_store(store, settings.DEFAULT_REDEEM_CODES)
    logger.info("✅ Registry ready (%d accounts)", len(_registry))
    return _registry


def get_registry() -> AccountRegistry:
    """
    台帳を取得するための依存関係.
    """
    if _registry is None:
        return init_registry()
    return _registry
