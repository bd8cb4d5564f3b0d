import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from practice_tracker.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)

from practice_tracker.api.routes import actions, auth
from practice_tracker.core.auth import TokenService
from practice_tracker.core.exceptions import Internal, PracticeTrackerError, translate_db_error
from practice_tracker.db.session import init_db


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings.validate_jwt_config()
    logger.info("Starting practice tracker (env=%s)", settings.app_env)
    await init_db()
    yield


limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit_default])

app = FastAPI(
    title="Practice Tracker API",
    description="Track daily practice actions: once-per-day completions and per-action stats",
    version="0.1.0",
    lifespan=lifespan,
)
app.state.token_service = TokenService.from_settings(settings)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()] if settings.cors_origins else ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PracticeTrackerError)
async def practice_tracker_error_handler(request: Request, exc: PracticeTrackerError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    err = translate_db_error(exc)
    return JSONResponse(status_code=err.status_code, content={"error": err.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    """Anything not translated above becomes the generic 500 body; details go to the log only."""
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    err = Internal()
    return JSONResponse(status_code=err.status_code, content={"error": err.message})


app.include_router(auth.router, prefix="/api")
app.include_router(actions.router, prefix="/api")

metrics_app = make_asgi_app()
app.mount("/metrics", metrics_app)


@app.get("/health")
@limiter.exempt
def health(request: Request):
    return {"status": "ok"}
