# shard-rewards-backend/app/api/v1/endpoints/auth.py
"""
認証 API エンドポイント
- サインアップ
- ログイン（トークン再発行）
- シャード残高の確認
"""

from fastapi import APIRouter, Depends, Header

from app.db.database import get_registry
from app.db.registry import AccountRegistry
from app.schemas.auth import BalanceResponse, CredentialsRequest, SessionResponse
from app.services import auth_service


router = APIRouter()


@router.post("/signup", response_model=SessionResponse)
def signup(
    req: CredentialsRequest,
    registry: AccountRegistry = Depends(get_registry),
):
    """新規アカウントを作成し、セッショントークンを返す"""
    account = auth_service.signup(registry, req.username, req.secret)
    return SessionResponse(token=account.session_token, shard_balance=account.shard_balance)


@router.post("/login", response_model=SessionResponse)
def login(
    req: CredentialsRequest,
    registry: AccountRegistry = Depends(get_registry),
):
    """ログインごとに新しいトークンを発行する（古いトークンは無効）"""
    account = auth_service.login(registry, req.username, req.secret)
    return SessionResponse(token=account.session_token, shard_balance=account.shard_balance)


@router.get("/balance/{username}", response_model=BalanceResponse)
def read_balance(
    username: str,
    registry: AccountRegistry = Depends(get_registry),
    # トークンは "X-Session-Token" ヘッダーで受け取る
    x_session_token: str | None = Header(default=None),
):
    balance = auth_service.get_balance(registry, username, x_session_token)
    return BalanceResponse(username=username, shard_balance=balance)
