# shard-rewards-backend/app/main.py

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# 必要なモジュール
from app.api.v1.api import api_router
from app.core.config import settings
from app.core.errors import InvalidInput, RewardError
from app.db.database import init_registry

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Shard Rewards API", version="1.0.0", debug=settings.DEBUG)


@app.on_event("startup")
def startup_event():
    # スナップショットが読めなくても空の台帳で起動する
    init_registry()


# --- エラーハンドラ ---
@app.exception_handler(RewardError)
async def handle_reward_error(request: Request, exc: RewardError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    # 壊れたリクエストボディも InvalidInput として返す
    logger.debug("Rejected request to %s: %s", request.url.path, exc.errors())
    error = InvalidInput("Malformed request body")
    return JSONResponse(status_code=error.status_code, content=error.to_payload())


# --- CORS設定 ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- ルーター ---
app.include_router(api_router, prefix=settings.API_V1_STR)


# --- 簡易エンドポイント ---
@app.get("/api/v1/ping")
def ping():
    return {"status": "success"}


@app.get("/")
def read_root():
    return {"message": "Shard Rewards backend is running"}
