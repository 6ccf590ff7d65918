from fastapi import APIRouter, Depends

from app.db.database import get_registry
from app.db.registry import AccountRegistry
from app.schemas.reward import (
    QuestClaimRequest,
    QuestClaimResponse,
    RedeemRequest,
    RedeemResponse,
)
from app.services.quest_service import claim_quest
from app.services.redeem_service import redeem
from app.utils.time_utils import ms_to_iso


router = APIRouter()


@router.post("/redeem", response_model=RedeemResponse)
def redeem_code(req: RedeemRequest, registry: AccountRegistry = Depends(get_registry)):
    result = redeem(registry, req.username, req.token, req.code)
    return RedeemResponse(
        message=f"Redeemed {result.amount} Aether Shards!",
        code=result.code,
        amount=result.amount,
        shard_balance=result.shard_balance,
    )


@router.post("/quests/claim", response_model=QuestClaimResponse)
def claim_quest_reward(
    req: QuestClaimRequest, registry: AccountRegistry = Depends(get_registry)
):
    # クールダウン中は CooldownActive (429) が返る
    result = claim_quest(registry, req.username, req.token, req.quest_id, req.reward)
    return QuestClaimResponse(
        message=f"Quest complete! +{result.reward} Aether Shards",
        quest_id=result.quest_id,
        reward=result.reward,
        shard_balance=result.shard_balance,
        next_claim_at=ms_to_iso(result.next_claim_at_ms),
    )
