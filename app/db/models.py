from enum import Enum
from typing import Dict, Optional, Set

from pydantic import BaseModel, Field, field_serializer


# --- 1. Account Model ---
class Account(BaseModel):
    username: str
    # bcrypt ハッシュ（平文は保存しない）
    credential_hash: str
    # 現在のセッショントークン（未ログインなら None）
    session_token: Optional[str] = None

    # ゲーム内通貨（シャード）: マイナスにはならない
    shard_balance: int = Field(default=0, ge=0)

    # 引き換え済みコード（正規化済み）
    redeemed_codes: Set[str] = Field(default_factory=set)
    # クエストID -> 最終受け取り時刻（エポックミリ秒）
    quest_claims: Dict[str, int] = Field(default_factory=dict)

    created_at: int = 0

    @field_serializer("redeemed_codes")
    def _sorted_codes(self, codes: Set[str]):
        # スナップショットの差分が見やすいように並べて保存
        return sorted(codes)


# --- 2. Redeem Code Model ---
class UsageMode(str, Enum):
    PER_ACCOUNT = "per_account"  # 各アカウント1回ずつ
    GLOBAL_ONCE = "global_once"  # 誰か1人が使ったら終了


class RedeemCode(BaseModel):
    amount: int = Field(gt=0)
    usage_mode: UsageMode = UsageMode.PER_ACCOUNT
    # GLOBAL_ONCE のコードを使ったユーザー
    consumed_by: Optional[str] = None

    @property
    def is_consumed(self) -> bool:
        return self.usage_mode == UsageMode.GLOBAL_ONCE and self.consumed_by is not None


# --- 3. Snapshot (保存ファイル全体) ---
class Snapshot(BaseModel):
    version: int = 1
    accounts: Dict[str, Account] = Field(default_factory=dict)
    codes: Dict[str, RedeemCode] = Field(default_factory=dict)
