# shard-rewards-backend/app/db/store.py
"""
アカウント台帳の永続化（JSONファイル1枚にスナップショットとして保存）
"""

import logging
import os
import tempfile
import threading
from pathlib import Path

from pydantic import ValidationError

from app.core.errors import PersistenceUnavailable
from app.db.models import Snapshot

logger = logging.getLogger(__name__)


class JsonStore:
    def __init__(self, path):
        self.path = Path(path)
        # 書き込みは1本ずつ
        self._write_lock = threading.Lock()

    def load(self) -> Snapshot:
        """
        スナップショットを読み込む。
        ファイルが無い・壊れている場合は空の台帳を返す（起動は止めない）。
        """
        if not self.path.exists():
            logger.info("ℹ️ No snapshot at %s, starting with an empty registry", self.path)
            return Snapshot()

        try:
            raw = self.path.read_text(encoding="utf-8")
            snapshot = Snapshot.model_validate_json(raw)
        except (OSError, ValueError, ValidationError) as e:
            logger.warning("⚠️ Failed to load snapshot %s: %s", self.path, e)
            return Snapshot()

        logger.info(
            "✅ Loaded %d accounts and %d codes from %s",
            len(snapshot.accounts),
            len(snapshot.codes),
            self.path,
        )
        return snapshot

    def save(self, snapshot: Snapshot) -> None:
        """
        台帳全体を書き出す。
        同じディレクトリの一時ファイルに書いてから os.replace で差し替える。
        """
        payload = snapshot.model_dump_json(indent=2)

        with self._write_lock:
            tmp_path = None
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                fd, tmp_path = tempfile.mkstemp(
                    dir=str(self.path.parent), prefix=self.path.name, suffix=".tmp"
                )
                with os.fdopen(fd, "w", encoding="utf-8") as fp:
                    fp.write(payload)
                    fp.flush()
                    os.fsync(fp.fileno())
                os.replace(tmp_path, self.path)
                tmp_path = None
            except OSError as e:
                logger.error("❌ Failed to save snapshot %s: %s", self.path, e)
                raise PersistenceUnavailable() from e
            finally:
                if tmp_path is not None and os.path.exists(tmp_path):
                    os.unlink(tmp_path)
