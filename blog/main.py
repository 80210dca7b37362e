import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from blog.config import settings
from blog.database import Base, engine
from blog.exceptions import NotFoundError
from blog.logging_config import setup_logging
from blog.middleware import AuthGateMiddleware, TimingMiddleware
from blog.routers import accounts, articles, auth, views
from blog.sessions import SessionStore
from blog.templating import templates

import blog.models  # noqa: F401  (register tables on Base.metadata)

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    setup_logging()
    if settings.CREATE_TABLES_ON_STARTUP:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")
    yield
    # Shutdown
    await engine.dispose()

app = FastAPI(
    title="Blog",
    description="Blog with session login, a JSON API and server-rendered views",
    version=VERSION,
    lifespan=lifespan,
)

# Created here rather than in lifespan so ASGI test transports, which skip
# lifespan events, still get a store.
app.state.session_store = SessionStore(ttl_seconds=settings.SESSION_TTL_SECONDS)

# Middleware (last added runs first)
app.add_middleware(AuthGateMiddleware)
app.add_middleware(TimingMiddleware)

# Routers
app.include_router(articles.router)
app.include_router(accounts.router)
app.include_router(auth.router)
app.include_router(views.router)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    logger.info("Not found: %s %s", request.method, request.url.path)
    if request.url.path.startswith("/api/"):
        return JSONResponse(status_code=404, content={"detail": str(exc)})
    return templates.TemplateResponse(
        request,
        "error.html",
        {"status_code": 404, "message": str(exc), "session": getattr(request.state, "session", None)},
        status_code=404,
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    if request.url.path.startswith("/api/"):
        return await request_validation_exception_handler(request, exc)
    # Browser views: a bad id in the URL is a bad request, shown as a page.
    logger.info("Bad request: %s %s", request.method, request.url.path)
    return templates.TemplateResponse(
        request,
        "error.html",
        {"status_code": 400, "message": "Invalid request", "session": getattr(request.state, "session", None)},
        status_code=400,
    )


@app.get("/health")
async def health():
    return {"status": "healthy", "version": VERSION}
