"""
FastAPI Album API Application.

Main application entry point that configures:
- CORS middleware
- API routers
- Relational and credential store lifecycle
- Logging system
- Exception handlers
- Prometheus metrics
"""
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from album_api.config import get_settings, validate_settings
from album_api.database import close_db, init_db
from album_api.exceptions import setup_exception_handlers
from album_api.middlewares.logging_middleware import LoggingMiddleware
from album_api.mongo import close_mongo, init_mongo
from album_api.routers import albums_router, health_router, photos_router, users_router
from album_api.utils.logger import log_error, log_info, setup_logging
from album_api.utils.prometheus_metrics import ready, setup_prometheus

settings = get_settings()

setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Startup: validate configuration (production only), create tables and
    the unique userID index. Shutdown: stop accepting traffic, close both
    stores.
    """
    if settings.is_production:
        config_errors = validate_settings(settings)
        if config_errors:
            error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in config_errors)
            log_error(
                "Startup failed: configuration validation errors",
                error_message=error_msg,
                event="lifecycle",
            )
            raise RuntimeError(error_msg)

    await init_db()
    await init_mongo()
    ready.set(1)
    log_info(
        "Application startup completed",
        event="lifecycle",
        version=settings.app_version,
        environment=settings.environment.value,
    )

    yield

    ready.set(0)
    log_info("Application shutdown initiated", event="lifecycle")
    await close_mongo()
    await close_db()
    log_info("Graceful shutdown completed", event="lifecycle")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
## Album API

Albums, photos and user accounts.

- **Albums**: paginated listing, create, detail with reviews and photos, replace, delete
- **Photos**: create, read, replace (album and owner are fixed)
- **Users**: registration, login, own profile and owned albums/photos

### Authentication
`/users/{userID}` routes require `Authorization: Bearer <token>` for that same user.
Use `POST /users/login` to get a token.
    """,
    openapi_tags=[
        {"name": "Albums", "description": "Album management"},
        {"name": "Photos", "description": "Photo management"},
        {"name": "Users", "description": "Registration, login and owned resources"},
    ],
    lifespan=lifespan,
)

setup_prometheus(app)
setup_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)

app.include_router(health_router)
app.include_router(albums_router)
app.include_router(photos_router)
app.include_router(users_router)


@app.get(
    "/",
    tags=["Root"],
    summary="API information",
)
async def root():
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
