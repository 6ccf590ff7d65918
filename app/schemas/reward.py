from pydantic import BaseModel
from typing import Any, Optional


class RedeemRequest(BaseModel):
    username: Optional[str] = None
    token: Optional[str] = None
    code: Optional[str] = None


class RedeemResponse(BaseModel):
    message: str
    code: str
    amount: int
    shard_balance: int


class QuestClaimRequest(BaseModel):
    username: Optional[str] = None
    token: Optional[str] = None
    quest_id: Optional[str] = None
    reward: Any = None  # 数値チェックはサービス側で行う


class QuestClaimResponse(BaseModel):
    message: str
    quest_id: str
    reward: int
    shard_balance: int
    next_claim_at: Optional[str] = None  # ISO8601文字列
