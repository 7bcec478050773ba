from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .database import engine, Base
from .routers import calculator, converter, settings as settings_router

logger = logging.getLogger("fieldcalc")

# Create tables (settings table only — no calculation history is kept)
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title=settings.APP_NAME,
    description="Jobsite material ordering + field measurement conversions",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(settings_router.router, prefix="/api")
app.include_router(calculator.router, prefix="/api")
app.include_router(converter.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "fieldcalc"}


@app.on_event("startup")
def log_startup():
    logger.info("%s started (database: %s)", settings.APP_NAME, settings.DATABASE_URL.split("://")[0])
