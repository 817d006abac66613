import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from resume_ia.api.router import api_router
from resume_ia.core.config import settings
from resume_ia.core.errors import ResumeIAError
from resume_ia.core.logging import configure_logging, ensure_request_id, request_id_ctx_var
from resume_ia.db.session import init_db
from resume_ia.services.llm_providers import get_provider

configure_logging(settings.log_level, service=settings.app_name)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # the model client is required; a missing key stops the process here
    get_provider()
    if settings.auto_create_tables:
        init_db()
    logger.info("Application started", extra={"environment": settings.environment, "llm_provider": settings.llm_provider})
    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

RATE_LIMIT_WINDOW_S = 60
_rate_limit_store: dict[str, list[float]] = {}


def _rate_limited(client_ip: str, now: float) -> bool:
    history = [t for t in _rate_limit_store.get(client_ip, []) if now - t < RATE_LIMIT_WINDOW_S]
    if len(history) >= settings.rate_limit_per_min:
        _rate_limit_store[client_ip] = history
        return True
    history.append(now)
    _rate_limit_store[client_ip] = history
    return False


@app.middleware("http")
async def request_context(request: Request, call_next):
    request_id = ensure_request_id(request.headers.get("X-Request-ID"))
    request_id_ctx_var.set(request_id)
    started = time.perf_counter()
    client_ip = request.client.host if request.client else "unknown"
    if settings.environment.lower() == "prod" and _rate_limited(client_ip, time.time()):
        logger.warning("Rate limit exceeded", extra={"client_ip": client_ip, "path": request.url.path})
        response = JSONResponse(status_code=429, content={"detail": "Trop de requêtes. Veuillez patienter une minute."})
    else:
        response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    logger.info(
        "Request handled",
        extra={
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "duration_ms": round((time.perf_counter() - started) * 1000, 1),
        },
    )
    return response


@app.exception_handler(ResumeIAError)
async def handle_app_error(request: Request, exc: ResumeIAError):
    if exc.status_code >= 500:
        logger.warning("Request failed", extra={"path": request.url.path, "error": exc.message, "status": exc.status_code})
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(api_router)
