# shard-rewards-backend/app/api/v1/endpoints/admin.py
"""
管理者用 API エンドポイント
ADMIN_SECRET が未設定のときはすべて 403 を返す。
"""

from fastapi import APIRouter, Depends, Header

from app.core.config import settings
from app.db.database import get_registry
from app.db.registry import AccountRegistry
from app.schemas.admin import AddCodeRequest, AddCodeResponse, CodeListResponse, CodeOut
from app.services.redeem_service import add_code, list_codes, normalize_code


router = APIRouter()


@router.post("/codes", response_model=AddCodeResponse)
def create_code(req: AddCodeRequest, registry: AccountRegistry = Depends(get_registry)):
    """引き換えコードを登録する（同じコードは上書き）"""
    entry = add_code(
        registry,
        req.admin_secret,
        settings.ADMIN_SECRET,
        req.code,
        req.amount,
        req.usage_mode,
    )
    code = normalize_code(req.code)
    return AddCodeResponse(
        message=f"Code {code} added",
        code=code,
        amount=entry.amount,
        usage_mode=entry.usage_mode,
    )


@router.get("/codes", response_model=CodeListResponse)
def read_codes(
    registry: AccountRegistry = Depends(get_registry),
    x_admin_secret: str | None = Header(default=None),
):
    codes = list_codes(registry, x_admin_secret, settings.ADMIN_SECRET)
    return CodeListResponse(
        codes=[
            CodeOut(code=code, **entry.model_dump())
            for code, entry in sorted(codes.items())
        ]
    )
