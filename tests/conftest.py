from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.core.config import settings
from app.db.database import get_registry
from app.db.registry import AccountRegistry
from app.db.store import JsonStore
from app.main import app

ADMIN_SECRET = "test-admin-secret"


@pytest.fixture(autouse=True)
def quick_settings(monkeypatch):
    # テストでは bcrypt のコストを最小にする
    monkeypatch.setattr(settings, "BCRYPT_ROUNDS", 4)
    monkeypatch.setattr(settings, "QUEST_COOLDOWN_HOURS", 12)


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "accounts.json"


@pytest.fixture
def registry(data_file: Path) -> AccountRegistry:
    return AccountRegistry.from_store(JsonStore(data_file), {"ZENYXONTOP": 200})


@pytest.fixture
def client(registry, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_SECRET", ADMIN_SECRET)
    app.dependency_overrides[get_registry] = lambda: registry
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_secret() -> str:
    return ADMIN_SECRET
