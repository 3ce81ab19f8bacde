import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.database import SessionLocal, init_db
from app.core.error_handlers import register_error_handlers
from app.core.logging_config import setup_logging
from app.routes.auth import router as auth_router
from app.routes.customers import router as customers_router
from app.routes.health import router as health_router
from app.routes.orders import router as orders_router
from app.services.seed import seed_demo


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Only seed in development or when explicitly requested
    if settings.env == "dev" or os.getenv("FORCE_SEED") == "true":
        init_db()
        with SessionLocal() as db:
            seed_demo(db)
    yield


def create_app() -> FastAPI:
    setup_logging(settings.log_level)
    app = FastAPI(title="Customer Orders API", version="0.1.0", lifespan=lifespan)

    origins = settings.cors_origins
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_error_handlers(app)

    prefix = settings.api_prefix.rstrip("/")
    app.include_router(health_router, tags=["health"])
    app.include_router(auth_router, prefix=prefix, tags=["auth"])
    app.include_router(customers_router, prefix=f"{prefix}/customers", tags=["customers"])
    app.include_router(orders_router, prefix=f"{prefix}/orders", tags=["orders"])

    logger.info("Application created (env=%s, prefix=%r)", settings.env, prefix)
    return app


app = create_app()
