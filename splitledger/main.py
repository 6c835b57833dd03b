from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from splitledger.api.v1.api import api_router
from splitledger.core.config import settings
from splitledger.core.logging_config import configure_logging, get_logger
from splitledger.db.mongo import close_mongo_connection, connect_to_mongo
from splitledger.db.session import build_ledger_service

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(level=settings.LOG_LEVEL, json_output=settings.LOG_JSON)
    if settings.STORAGE_BACKEND == "mongo":
        await connect_to_mongo()
    app.state.ledger_service = build_ledger_service()
    logger.info("Ledger service started", extra={"backend": settings.STORAGE_BACKEND})
    yield
    await app.state.ledger_service.flush()
    if settings.STORAGE_BACKEND == "mongo":
        await close_mongo_connection()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    description=settings.DESCRIPTION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/")
async def root():
    return {"message": "Welcome to Split Ledger API"}

app.include_router(api_router, prefix=settings.API_V1_STR)
