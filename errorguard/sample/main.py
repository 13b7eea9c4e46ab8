"""FastAPI entrypoint for the errorguard sample API."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from errorguard.core.config import ErrorGuardSettings
from errorguard.core.config import get_settings
from errorguard.core.logging import configure_logging
from errorguard.formatters.selection import FormatterSelection
from errorguard.middleware.registration import install_error_handling
from errorguard.sample.api.auth import router as auth_router
from errorguard.sample.api.demo import router as demo_router
from errorguard.sample.api.products import router as products_router
from errorguard.sample.api.users import router as users_router
from errorguard.sample.db import models as _models  # noqa: F401
from errorguard.sample.db.base import Base
from errorguard.sample.db.base import build_engine
from errorguard.sample.db.base import build_session_factory
from errorguard.sample.db.models import SEED_PRODUCTS
from errorguard.sample.db.repository import seed_products
from errorguard.sample.rate_limit import LoginAttemptTracker

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: ErrorGuardSettings = app.state.settings
    configure_logging(settings.log_level)
    logger.info("Starting sample API with settings=%s", settings.safe_for_logging())
    yield
    app.state.engine.dispose()


def create_app(
    *,
    settings: ErrorGuardSettings | None = None,
    formatter: FormatterSelection = None,
) -> FastAPI:
    """Build the sample API with its own database and login attempt store."""
    settings = settings or get_settings()

    app = FastAPI(title="errorguard sample", lifespan=lifespan)
    app.state.settings = settings

    engine = build_engine(settings.sample_database_url)
    Base.metadata.create_all(engine)
    session_factory = build_session_factory(engine)
    with session_factory() as session:
        seed_products(session, SEED_PRODUCTS)
        session.commit()

    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.login_attempts = LoginAttemptTracker()

    install_error_handling(app, formatter=formatter, settings=settings)

    app.include_router(demo_router)
    app.include_router(users_router)
    app.include_router(products_router)
    app.include_router(auth_router)

    @app.get("/")
    def index() -> dict[str, object]:
        """List the sample endpoint groups."""
        return {
            "message": "errorguard sample API",
            "endpoints": {
                "built_in_errors": "/api/demo",
                "custom_errors": "/api/custom",
                "users": "/api/users",
                "products": "/api/products",
                "auth": "/api/auth",
            },
        }

    return app


app = create_app()
