import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routers import pipeline, shoes
from config import settings
from models import init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    init_db()
    if not settings.airtable_api_key:
        logger.warning("AIRTABLE_API_KEY is not set; syncs will fail until it is configured")
    yield

app = FastAPI(
    title=settings.app_name,
    description="Running-shoe specs extracted from review articles",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(shoes.router, prefix="/api/v1/shoes", tags=["shoes"])
app.include_router(pipeline.router, prefix="/api/v1/pipeline", tags=["pipeline"])


@app.get("/")
async def root():
    return {
        "name": settings.app_name,
        "version": "0.1.0",
        "status": "running",
    }


@app.get("/health")
async def health():
    return {"status": "healthy"}
