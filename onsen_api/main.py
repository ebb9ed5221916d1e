"""FastAPI アプリケーション"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import API_HOST, API_PORT, LOG_LEVEL
from .database import init_db
from .routes.onsens import router as onsens_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """起動時にロギング設定・テーブル作成"""
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        init_db()
        logger.info("DB: Tables ready")
    except Exception as e:
        logger.error(f"DB init failed: {e}")
        raise
    yield


app = FastAPI(
    title="Onsen Search API",
    description="温泉カタログの近隣検索API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS（開発用に全許可、本番では制限する）
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(onsens_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("onsen_api.main:app", host=API_HOST, port=API_PORT)
