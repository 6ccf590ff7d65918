# shard-rewards-backend/app/services/redeem_service.py
"""
引き換えコードのビジネスロジック
- コードの引き換え（アカウントごと1回 / 全体で1回）
- 管理者によるコード登録
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from app.core.errors import (
    AlreadyRedeemed,
    Forbidden,
    InvalidInput,
    MissingFields,
    UnknownOrExpiredCode,
)
from app.db.models import RedeemCode, UsageMode
from app.db.registry import AccountRegistry
from app.services.auth_service import consteq, require_account

logger = logging.getLogger(__name__)


@dataclass
class RedeemResult:
    code: str
    amount: int
    shard_balance: int


def normalize_code(code: Optional[str]) -> str:
    """前後の空白を除いて大文字に揃える"""
    return (code or "").strip().upper()


def redeem(registry: AccountRegistry, username: str, token: str, code: str) -> RedeemResult:
    """
    コードを引き換えてシャードを付与する。
    残高・引き換え履歴・カタログの消費は1回の保存でまとめて反映する。
    """
    with registry.transaction():
        account = require_account(registry, username, token)

        normalized = normalize_code(code)
        if not normalized:
            raise MissingFields("Code is required")

        entry = registry.get_code(normalized)
        if entry is None:
            raise UnknownOrExpiredCode()

        if normalized in account.redeemed_codes:
            raise AlreadyRedeemed()

        if entry.is_consumed:
            raise UnknownOrExpiredCode()

        account.shard_balance += entry.amount
        account.redeemed_codes.add(normalized)

        changed_codes = {}
        if entry.usage_mode == UsageMode.GLOBAL_ONCE:
            entry.consumed_by = account.username
            changed_codes[normalized] = entry

        registry.commit(accounts=[account], codes=changed_codes)

    logger.info("🎟️ %s redeemed %s (+%d)", account.username, normalized, entry.amount)
    return RedeemResult(code=normalized, amount=entry.amount, shard_balance=account.shard_balance)


def check_admin(admin_secret: Optional[str], configured_secret: Optional[str]) -> None:
    """管理者シークレットが未設定なら管理APIは無効（開放ではない）"""
    if not configured_secret:
        raise Forbidden("Admin API is disabled")
    if not admin_secret or not consteq(admin_secret, configured_secret):
        raise Forbidden()


def _parse_amount(amount) -> int:
    if isinstance(amount, bool):
        raise InvalidInput("Amount must be a positive integer")
    if isinstance(amount, float) and amount.is_integer():
        amount = int(amount)
    if not isinstance(amount, int) or amount <= 0:
        raise InvalidInput("Amount must be a positive integer")
    return amount


def add_code(
    registry: AccountRegistry,
    admin_secret: Optional[str],
    configured_secret: Optional[str],
    code: str,
    amount,
    usage_mode=UsageMode.PER_ACCOUNT,
) -> RedeemCode:
    """
    カタログにコードを登録する（既存コードは上書きし、消費状態もリセット）。
    """
    check_admin(admin_secret, configured_secret)

    normalized = normalize_code(code)
    if not normalized:
        raise InvalidInput("Code is required")
    amount = _parse_amount(amount)
    try:
        mode = UsageMode(usage_mode or UsageMode.PER_ACCOUNT)
    except ValueError:
        raise InvalidInput(f"Unknown usage mode: {usage_mode}")

    entry = RedeemCode(amount=amount, usage_mode=mode)
    with registry.transaction():
        registry.commit(codes={normalized: entry})

    logger.info("🛠️ Code %s registered (%d shards, %s)", normalized, amount, mode.value)
    return entry


def list_codes(
    registry: AccountRegistry,
    admin_secret: Optional[str],
    configured_secret: Optional[str],
) -> Dict[str, RedeemCode]:
    check_admin(admin_secret, configured_secret)
    return registry.list_codes()
