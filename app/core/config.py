# shard-rewards-backend/app/core/config.py

import os
from dotenv import load_dotenv

# .envファイルを読み込む（ローカル開発用）
# 本番環境ではファイルがないため無視されます
load_dotenv()


def parse_code_list(raw: str) -> dict:
    """
    "CODE:AMOUNT,CODE2:AMOUNT" 形式の文字列を {コード: 報酬額} に変換する。
    壊れたエントリは読み飛ばす。
    """
    codes = {}
    for entry in (raw or "").split(","):
        if ":" not in entry:
            continue
        code, amount = entry.split(":", 1)
        code = code.strip().upper()
        try:
            value = int(amount.strip())
        except ValueError:
            continue
        if code and value > 0:
            codes[code] = value
    return codes


class Settings:
    # API設定
    API_V1_STR: str = "/api/v1"

    # 永続化: アカウント台帳のスナップショット (JSON)
    DATA_FILE: str = os.getenv("DATA_FILE", "data/accounts.json")

    # 管理者用シークレット（未設定なら管理APIは無効）
    ADMIN_SECRET: str = os.getenv("ADMIN_SECRET", "")

    # クエスト報酬のクールダウン（時間）
    QUEST_COOLDOWN_HOURS: int = int(os.getenv("QUEST_COOLDOWN_HOURS", "12"))

    # パスワードハッシュ (bcrypt) のコスト
    BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

    # 起動時にカタログへ登録する引き換えコード
    DEFAULT_REDEEM_CODES: dict = parse_code_list(
        os.getenv("DEFAULT_REDEEM_CODES", "ZENYXONTOP:200")
    )

    # CORS設定
    CORS_ORIGINS: list = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
        if origin.strip()
    ]

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # DEBUG mode
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"


# 設定インスタンスを作成してエクスポート
settings = Settings()
