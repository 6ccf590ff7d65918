from pydantic import BaseModel
from typing import Optional


# --- リクエストスキーマ ---
class CredentialsRequest(BaseModel):
    """サインアップ・ログイン共通"""
    username: Optional[str] = None
    secret: Optional[str] = None


# --- レスポンススキーマ ---
class SessionResponse(BaseModel):
    token: str
    shard_balance: int


class BalanceResponse(BaseModel):
    username: str
    shard_balance: int
