from pydantic import BaseModel
from typing import Any, List, Optional

from app.db.models import UsageMode


class AddCodeRequest(BaseModel):
    admin_secret: Optional[str] = None
    code: Optional[str] = None
    amount: Any = None
    usage_mode: Optional[str] = UsageMode.PER_ACCOUNT.value


class CodeOut(BaseModel):
    code: str
    amount: int
    usage_mode: UsageMode
    consumed_by: Optional[str] = None


class AddCodeResponse(BaseModel):
    message: str
    code: str
    amount: int
    usage_mode: UsageMode


class CodeListResponse(BaseModel):
    codes: List[CodeOut]
