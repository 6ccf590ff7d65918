# shard-rewards-backend/app/services/quest_service.py
"""
クエスト報酬のビジネスロジック

クエストごとに最後に受け取った時刻を記録し、
クールダウン（デフォルト12時間）が明けるまでは再度受け取れない。
クールダウンは受け取り時に判定する（タイマーは使わない）。
"""

import logging
from dataclasses import dataclass
from typing import Optional

from app.core.config import settings
from app.core.errors import CooldownActive, InvalidInput
from app.db.registry import AccountRegistry
from app.services.auth_service import require_account
from app.utils.time_utils import format_duration_ms, hours_to_ms, now_ms as current_ms

logger = logging.getLogger(__name__)


@dataclass
class QuestClaimResult:
    quest_id: str
    reward: int
    shard_balance: int
    next_claim_at_ms: int


def cooldown_ms() -> int:
    return hours_to_ms(settings.QUEST_COOLDOWN_HOURS)


def parse_reward(reward) -> int:
    """報酬は0以上の整数（100.0 のような整数値の float は許可）"""
    if isinstance(reward, bool):
        raise InvalidInput("Reward must be a non-negative number")
    if isinstance(reward, float) and reward.is_integer():
        reward = int(reward)
    if not isinstance(reward, int) or reward < 0:
        raise InvalidInput("Reward must be a non-negative number")
    return reward


def claim_quest(
    registry: AccountRegistry,
    username: str,
    token: str,
    quest_id: str,
    reward,
    now_ms: Optional[int] = None,
) -> QuestClaimResult:
    with registry.transaction():
        account = require_account(registry, username, token)

        quest_id = (quest_id or "").strip() if isinstance(quest_id, str) else ""
        if not quest_id:
            raise InvalidInput("Quest id is required")
        reward = parse_reward(reward)

        now = current_ms() if now_ms is None else now_ms
        window = cooldown_ms()
        last_claim = account.quest_claims.get(quest_id)

        # 直近の受け取りからクールダウン内なら拒否
        if last_claim is not None and now - last_claim < window:
            remaining = last_claim + window - now
            raise CooldownActive(
                f"Quest {quest_id} is on cooldown, try again in {format_duration_ms(remaining)}"
            )

        account.shard_balance += reward
        # 記録済みの時刻より戻ることはない
        account.quest_claims[quest_id] = max(now, last_claim or 0)
        registry.commit(accounts=[account])

    logger.info("🏆 %s claimed quest %s (+%d)", account.username, quest_id, reward)
    return QuestClaimResult(
        quest_id=quest_id,
        reward=reward,
        shard_balance=account.shard_balance,
        next_claim_at_ms=account.quest_claims[quest_id] + window,
    )
