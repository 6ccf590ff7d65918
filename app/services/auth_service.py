# shard-rewards-backend/app/services/auth_service.py
"""
認証まわりのビジネスロジック
- サインアップ / ログイン
- セッショントークンの発行と検証

パスワードのハッシュ計算は重いので、台帳のロックの外で行う。
"""

import hmac
import logging
import secrets

import bcrypt

from app.core.config import settings
from app.core.errors import (
    InvalidCredentials,
    MissingFields,
    UnauthorizedAccount,
    UsernameTaken,
)
from app.db.models import Account
from app.db.registry import AccountRegistry
from app.utils.time_utils import now_ms

logger = logging.getLogger(__name__)

# bcrypt が扱えるのは先頭72バイトまで
BCRYPT_MAX_BYTES = 72


def consteq(a: str, b: str) -> bool:
    return hmac.compare_digest(a.encode(), b.encode())


def normalize_username(username) -> str:
    return username.strip() if isinstance(username, str) else ""


def _secret_bytes(secret: str) -> bytes:
    return secret.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_secret(secret: str) -> str:
    return bcrypt.hashpw(
        _secret_bytes(secret), bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    ).decode("utf-8")


def verify_secret(secret: str, credential_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_secret_bytes(secret), credential_hash.encode("utf-8"))
    except ValueError:
        # bcrypt 形式でないハッシュ
        return False


# ユーザーが存在しないときも同じ計算量にするためのダミー
_DUMMY_HASH = None


def _dummy_hash() -> str:
    global _DUMMY_HASH
    if _DUMMY_HASH is None:
        _DUMMY_HASH = hash_secret(secrets.token_hex(16))
    return _DUMMY_HASH


def new_session_token() -> str:
    return secrets.token_urlsafe(32)


def signup(registry: AccountRegistry, username: str, secret: str) -> Account:
    """アカウントを作成し、セッショントークンを発行する"""
    username = normalize_username(username)
    if not username or not (secret or "").strip():
        raise MissingFields("Username and secret are required")

    credential_hash = hash_secret(secret)

    with registry.transaction():
        if registry.has_account(username):
            raise UsernameTaken()

        account = Account(
            username=username,
            credential_hash=credential_hash,
            session_token=new_session_token(),
            shard_balance=0,
            created_at=now_ms(),
        )
        registry.commit(accounts=[account])

    logger.info("🆕 Account created: %s", username)
    return account


def login(registry: AccountRegistry, username: str, secret: str) -> Account:
    """
    認証に成功したら新しいトークンを発行する。
    ユーザー不在とパスワード違いは同じエラーにする。
    """
    username = normalize_username(username)
    secret = secret or ""

    # ハッシュ照合はロックの外
    candidate = registry.get_account(username) if username else None
    if candidate is None:
        verify_secret(secret, _dummy_hash())
        logger.info("🔒 Login failed for %r", username)
        raise InvalidCredentials()

    if not verify_secret(secret, candidate.credential_hash):
        logger.info("🔒 Login failed for %r", username)
        raise InvalidCredentials()

    with registry.transaction():
        # 照合中にアカウントが差し替わっていないか確認してから更新
        account = registry.get_account(username)
        if account is None or account.credential_hash != candidate.credential_hash:
            raise InvalidCredentials()

        account.session_token = new_session_token()
        registry.commit(accounts=[account])

    return account


def verify(registry: AccountRegistry, username: str, token: str) -> bool:
    """アカウントが存在し、トークンが完全一致するか"""
    username = normalize_username(username)
    if not username or not token:
        return False
    account = registry.get_account(username)
    if account is None or account.session_token is None:
        return False
    return consteq(account.session_token, token)


def require_account(registry: AccountRegistry, username: str, token: str) -> Account:
    """トークン検証済みのアカウント（コピー）を返す。失敗なら UnauthorizedAccount"""
    if not verify(registry, username, token):
        raise UnauthorizedAccount()
    return registry.get_account(normalize_username(username))


def get_balance(registry: AccountRegistry, username: str, token: str) -> int:
    return require_account(registry, username, token).shard_balance
