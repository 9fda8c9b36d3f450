import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from goalcoach.api.router import api_router
from goalcoach.core import init_database, settings
from goalcoach.core.db import dispose_engine
from goalcoach.core.errors import register_exception_handlers

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="GoalCoach - SMART goals and wellness recommendations")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(api_router, prefix="/api")


@app.on_event("startup")
async def startup_event():
    await init_database()
    logger.info("GoalCoach started (environment=%s)", settings.ENVIRONMENT)


@app.on_event("shutdown")
async def shutdown_event():
    await dispose_engine()


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/")
async def root():
    return {
        "app": "GoalCoach",
        "message": "SMART goals, progress tracking and personalized recommendations",
        "links": {
            "Docs": "/docs",
            "ReDoc": "/redoc",
            "Health": "/health",
        },
    }
