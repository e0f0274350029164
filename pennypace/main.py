import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pennypace.config import settings
from pennypace.core.errors import register_error_handlers
from pennypace.core.middleware import AccessLogMiddleware, RequestIDMiddleware
from pennypace.routers import budgets, categories, expenses, insights

logger = logging.getLogger("pennypace")

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(application: FastAPI):
    """Create database tables on startup if they don't exist."""
    from pennypace import models  # noqa: F401  (populates Base.metadata)
    from pennypace.dependencies import engine
    from pennypace.models.base import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables verified/created")
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    version=VERSION,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan,
)

# Middleware: order matters (last added = outermost = first to execute)
cors_kwargs = {
    "allow_origins": settings.cors_origins_list,
    "allow_credentials": True,
    "allow_methods": ["*"],
    "allow_headers": ["*"],
    "expose_headers": ["x-request-id"],
}
if settings.cors_allow_origin_regex:
    cors_kwargs["allow_origin_regex"] = settings.cors_allow_origin_regex
app.add_middleware(RequestIDMiddleware)
app.add_middleware(AccessLogMiddleware)
app.add_middleware(CORSMiddleware, **cors_kwargs)

# Error handlers
register_error_handlers(app)

# Routers
app.include_router(expenses.router)
app.include_router(categories.router)
app.include_router(budgets.router)
app.include_router(insights.router)


@app.get("/health")
async def health_check():
    return {"status": "ok", "app": settings.app_name, "version": VERSION}
