import time
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.sessions import SessionMiddleware

from app.api.routes import pages
from app.core.config import settings
from app.core.logging_config import RequestLogger, get_logger, setup_logging
from app.core.middleware import SecurityHeadersMiddleware
from app.services.teacher_api import TeacherApiClient
from app.views import navigation

# Initialize logging first (auto-determines level based on environment)
setup_logging(
    app_name="teachers",
    log_level=settings.log_level,  # Empty = auto (DEBUG in dev, WARNING in prod)
    environment=settings.environment,
    enable_console=True,
    enable_file=settings.log_to_file,
)

logger = get_logger(__name__)
request_logger = RequestLogger(get_logger("teachers.requests"))


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.teacher_api = TeacherApiClient()
    logger.info(f"Teacher records console started | api={settings.teachers_api_url}")
    yield
    await app.state.teacher_api.aclose()
    logger.info("Teacher records console shutting down")


app = FastAPI(
    title=settings.app_name,
    description="Management console for teacher records",
    version="0.1.0",
    lifespan=lifespan,
)


# Global exception handler, logs full tracebacks for 500 errors
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Catch all unhandled exceptions, log full traceback, return 500."""
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: {exc}\n"
        f"{traceback.format_exc()}"
    )
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all HTTP requests with timing."""
    start_time = time.time()
    client_ip = request.client.host if request.client else "unknown"

    response = await call_next(request)

    duration_ms = (time.time() - start_time) * 1000
    request_logger.log_request(
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=duration_ms,
        client_ip=client_ip,
    )
    return response


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.secret_key,
    session_cookie="teachers_session",
    same_site="lax",
    https_only=settings.environment == "production",
)


@app.get("/health")
def health_check():
    logger.debug("Health check requested")
    return {"status": "healthy"}


app.include_router(pages.router)
logger.info("Page routes registered")


# Must stay last: any path not matched above goes back to the landing page
@app.api_route("/{full_path:path}", methods=["GET", "POST", "PUT", "DELETE"], include_in_schema=False)
async def redirect_unknown(full_path: str):
    return RedirectResponse(navigation.HOME, status_code=303)
