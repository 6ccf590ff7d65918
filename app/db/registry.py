# shard-rewards-backend/app/db/registry.py
"""
メモリ上のアカウント台帳

読み込み -> 変更 -> 保存 のライフサイクルをこのクラスが持つ。
サービス層は get_account() でコピーを受け取り、変更後に commit() で反映する。
commit() は保存に成功してからメモリ上の台帳を差し替えるので、
保存に失敗した変更は見えない。
"""

import threading
from contextlib import contextmanager
from typing import Dict, Iterable, Optional

from app.db.models import Account, RedeemCode, Snapshot, UsageMode
from app.db.store import JsonStore


class AccountRegistry:
    def __init__(self, store: JsonStore, snapshot: Optional[Snapshot] = None):
        self._store = store
        snapshot = snapshot or Snapshot()
        self._accounts: Dict[str, Account] = dict(snapshot.accounts)
        self._codes: Dict[str, RedeemCode] = dict(snapshot.codes)
        # 読み込み→変更→保存をひとまとまりにするためのロック
        self._lock = threading.RLock()

    @classmethod
    def from_store(
        cls, store: JsonStore, default_codes: Optional[Dict[str, int]] = None
    ) -> "AccountRegistry":
        """スナップショットから台帳を作り、未登録のデフォルトコードを追加する"""
        registry = cls(store, store.load())
        for code, amount in (default_codes or {}).items():
            registry._codes.setdefault(code, RedeemCode(amount=amount, usage_mode=UsageMode.PER_ACCOUNT))
        return registry

    @contextmanager
    def transaction(self):
        with self._lock:
            yield self

    # --- 参照 ---
    def has_account(self, username: str) -> bool:
        return username in self._accounts

    def get_account(self, username: str) -> Optional[Account]:
        """アカウントのコピーを返す（直接書き換えても台帳には影響しない）"""
        account = self._accounts.get(username)
        return account.model_copy(deep=True) if account else None

    def get_code(self, code: str) -> Optional[RedeemCode]:
        entry = self._codes.get(code)
        return entry.model_copy() if entry else None

    def list_codes(self) -> Dict[str, RedeemCode]:
        return {code: entry.model_copy() for code, entry in self._codes.items()}

    def __len__(self) -> int:
        return len(self._accounts)

    # --- 更新 ---
    def commit(
        self,
        accounts: Iterable[Account] = (),
        codes: Optional[Dict[str, RedeemCode]] = None,
    ) -> None:
        """
        変更済みのアカウント・コードを保存し、成功したら台帳に反映する。
        保存に失敗した場合は PersistenceUnavailable が送出され、台帳は元のまま。
        """
        with self._lock:
            new_accounts = dict(self._accounts)
            for account in accounts:
                new_accounts[account.username] = account
            new_codes = dict(self._codes)
            new_codes.update(codes or {})

            self._store.save(Snapshot(accounts=new_accounts, codes=new_codes))

            self._accounts = new_accounts
            self._codes = new_codes
