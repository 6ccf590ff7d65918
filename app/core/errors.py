# shard-rewards-backend/app/core/errors.py
"""
アプリ全体で使うエラー定義

サービス層はここで定義した例外を送出し、main.py の例外ハンドラが
{"error": メッセージ, "kind": 種別} の形でクライアントに返す。
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    MISSING_FIELDS = "MissingFields"
    USERNAME_TAKEN = "UsernameTaken"
    INVALID_CREDENTIALS = "InvalidCredentials"
    UNAUTHORIZED_ACCOUNT = "UnauthorizedAccount"
    UNKNOWN_OR_EXPIRED_CODE = "UnknownOrExpiredCode"
    ALREADY_REDEEMED = "AlreadyRedeemed"
    COOLDOWN_ACTIVE = "CooldownActive"
    INVALID_INPUT = "InvalidInput"
    FORBIDDEN = "Forbidden"
    PERSISTENCE_UNAVAILABLE = "PersistenceUnavailable"


class RewardError(Exception):
    """全エラーの基底クラス"""

    kind: ErrorKind = ErrorKind.INVALID_INPUT
    status_code: int = 400
    default_message: str = "Invalid request"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_payload(self) -> dict:
        return {"error": self.message, "kind": self.kind.value}


class MissingFields(RewardError):
    kind = ErrorKind.MISSING_FIELDS
    default_message = "Missing fields"


class UsernameTaken(RewardError):
    kind = ErrorKind.USERNAME_TAKEN
    status_code = 409
    default_message = "Username already taken"


class InvalidCredentials(RewardError):
    # ユーザー不在とパスワード違いを区別しない
    kind = ErrorKind.INVALID_CREDENTIALS
    status_code = 401
    default_message = "Invalid username or secret"


class UnauthorizedAccount(RewardError):
    kind = ErrorKind.UNAUTHORIZED_ACCOUNT
    status_code = 401
    default_message = "Invalid user or session token"


class UnknownOrExpiredCode(RewardError):
    kind = ErrorKind.UNKNOWN_OR_EXPIRED_CODE
    default_message = "Invalid or expired code"


class AlreadyRedeemed(RewardError):
    kind = ErrorKind.ALREADY_REDEEMED
    status_code = 409
    default_message = "Code already redeemed"


class CooldownActive(RewardError):
    kind = ErrorKind.COOLDOWN_ACTIVE
    status_code = 429
    default_message = "Cooldown not finished"


class InvalidInput(RewardError):
    kind = ErrorKind.INVALID_INPUT
    default_message = "Invalid input"


class Forbidden(RewardError):
    kind = ErrorKind.FORBIDDEN
    status_code = 403
    default_message = "Forbidden"


class PersistenceUnavailable(RewardError):
    kind = ErrorKind.PERSISTENCE_UNAVAILABLE
    status_code = 503
    default_message = "Storage is unavailable, please retry later"
