import pytest

from app.core.errors import CooldownActive, InvalidInput, UnauthorizedAccount
from app.services import auth_service, quest_service
from app.utils.time_utils import hours_to_ms

T0 = 1_700_000_000_000
TWELVE_HOURS = hours_to_ms(12)


@pytest.fixture
def token(registry):
    return auth_service.signup(registry, "alice", "p1").session_token


def test_first_claim_succeeds(registry, token):
    result = quest_service.claim_quest(registry, "alice", token, "q1", 100, now_ms=T0)

    assert result.shard_balance == 100
    assert result.next_claim_at_ms == T0 + TWELVE_HOURS
    assert registry.get_account("alice").quest_claims == {"q1": T0}


def test_second_claim_within_cooldown_fails(registry, token):
    quest_service.claim_quest(registry, "alice", token, "q1", 100, now_ms=T0)

    with pytest.raises(CooldownActive):
        quest_service.claim_quest(registry, "alice", token, "q1", 100, now_ms=T0 + TWELVE_HOURS - 1)

    account = registry.get_account("alice")
    assert account.shard_balance == 100
    assert account.quest_claims["q1"] == T0


def test_claim_after_cooldown_succeeds(registry, token):
    quest_service.claim_quest(registry, "alice", token, "q1", 100, now_ms=T0)
    result = quest_service.claim_quest(registry, "alice", token, "q1", 100, now_ms=T0 + TWELVE_HOURS + 1)

    assert result.shard_balance == 200
    assert registry.get_account("alice").quest_claims["q1"] == T0 + TWELVE_HOURS + 1


def test_cooldown_is_per_quest(registry, token):
    quest_service.claim_quest(registry, "alice", token, "q1", 100, now_ms=T0)
    result = quest_service.claim_quest(registry, "alice", token, "q2", 30, now_ms=T0 + 1)
    assert result.shard_balance == 130


def test_clock_going_backwards_stays_on_cooldown(registry, token):
    quest_service.claim_quest(registry, "alice", token, "q1", 100, now_ms=T0)
    with pytest.raises(CooldownActive):
        quest_service.claim_quest(registry, "alice", token, "q1", 100, now_ms=T0 - 1000)
    assert registry.get_account("alice").quest_claims["q1"] == T0


@pytest.mark.parametrize("reward", [-1, "100", None, True, 2.5, [1]])
def test_invalid_reward(registry, token, reward):
    with pytest.raises(InvalidInput):
        quest_service.claim_quest(registry, "alice", token, "q1", reward, now_ms=T0)
    assert registry.get_account("alice").shard_balance == 0


@pytest.mark.parametrize("quest_id", ["", "   ", None])
def test_invalid_quest_id(registry, token, quest_id):
    with pytest.raises(InvalidInput):
        quest_service.claim_quest(registry, "alice", token, quest_id, 100, now_ms=T0)


def test_zero_reward_still_starts_cooldown(registry, token):
    quest_service.claim_quest(registry, "alice", token, "q1", 0, now_ms=T0)
    with pytest.raises(CooldownActive):
        quest_service.claim_quest(registry, "alice", token, "q1", 0, now_ms=T0 + 1)


def test_integral_float_reward_is_accepted(registry, token):
    result = quest_service.claim_quest(registry, "alice", token, "q1", 100.0, now_ms=T0)
    assert result.reward == 100


def test_claim_requires_token(registry, token):
    with pytest.raises(UnauthorizedAccount):
        quest_service.claim_quest(registry, "alice", "bad", "q1", 100, now_ms=T0)


def test_cooldown_follows_settings(registry, token, monkeypatch):
    from app.core.config import settings

    monkeypatch.setattr(settings, "QUEST_COOLDOWN_HOURS", 1)
    quest_service.claim_quest(registry, "alice", token, "q1", 10, now_ms=T0)
    result = quest_service.claim_quest(registry, "alice", token, "q1", 10, now_ms=T0 + hours_to_ms(1))
    assert result.shard_balance == 20
