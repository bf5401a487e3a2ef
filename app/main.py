import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.db.session import engine
from app.db.verification_store import InMemoryVerificationStore
from app.models.account import Base
from app.services.code_verification_service import CodeVerificationService, policy_from_settings

logger = logging.getLogger(__name__)


def create_verification_service() -> CodeVerificationService:
    return CodeVerificationService(
        InMemoryVerificationStore(),
        policy_from_settings(settings),
        secret=settings.auth_code_secret,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")

    # Start cleanup scheduler
    cleanup_task = None
    if settings.verification_sweep_enabled:
        from app.scheduling.cleanup import start_cleanup_scheduler

        cleanup_task = asyncio.create_task(
            start_cleanup_scheduler(
                app.state.verification_service, settings.verification_sweep_interval_seconds
            )
        )
    else:
        logger.info("Verification sweep disabled (VERIFICATION_SWEEP_ENABLED=false)")

    yield

    # Shutdown
    if cleanup_task is not None:
        cleanup_task.cancel()
    await engine.dispose()


app = FastAPI(
    title="Zanari",
    description="Account email verification backend for the Zanari UI toolkit",
    version="1.0.0",
    lifespan=lifespan,
)

# Verification state lives for the lifetime of the process
app.state.verification_service = create_verification_service()

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Exception handlers
from app.core.exceptions import register_exception_handlers  # noqa: E402

register_exception_handlers(app)

# Routers
from app.api.v1.auth import router as auth_router  # noqa: E402

app.include_router(auth_router)

# Admin router: only registered when ADMIN_TOKEN is set
if settings.admin_token:
    from app.api.v1.admin import router as admin_router  # noqa: E402

    app.include_router(admin_router)


@app.get("/api/health")
async def health():
    return {"status": "ok"}
