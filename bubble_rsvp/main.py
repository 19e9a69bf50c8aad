import logging
from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from bubble_rsvp.config.database import init_db, run_upgrade
from bubble_rsvp.config.logging import setup_logging
from bubble_rsvp.config.settings import settings
from bubble_rsvp.routers.healthz.router import router as healthz_router
from bubble_rsvp.rsvps.dependencies import get_workbook
from bubble_rsvp.rsvps.routers import router as rsvps_router

logger = logging.getLogger(__name__)


def prepare_storage() -> None:
    if settings.RUN_MIGRATIONS_ON_STARTUP:
        run_upgrade()
    else:
        init_db()
    touched = get_workbook().ensure_layout()
    if touched:
        logger.info("Set up sheets: %s", ", ".join(store.value for store in touched))


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    await run_in_threadpool(prepare_storage)
    yield


if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        profiles_sample_rate=settings.SENTRY_PROFILES_SAMPLE_RATE,
        integrations=[
            StarletteIntegration(transaction_style="endpoint"),
            FastApiIntegration(transaction_style="endpoint"),
        ],
        send_default_pii=False,
    )

app = FastAPI(
    title="Bubble RSVP API",
    description="API for collecting RSVPs and keeping the guest and dietary lists in sync",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(healthz_router, prefix="/healthz", tags=["Healthz"])
app.include_router(rsvps_router, tags=["RSVPs"])


@app.get("/", tags=["Root"])
async def root():
    return {"message": f"Welcome to the {settings.app_name} API"}
