import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from .api.exceptions import register_exception_handlers
from .api.routes import router as accounts_router, transfer_router
from .core.config import get_settings
from .core.db import init_db

settings = get_settings()
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger("bank_api")

@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("app.started", extra={"app_name": settings.app_name})
    yield
    logger.info("app.stopped")

app = FastAPI(title=settings.app_name, lifespan=lifespan)

@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        logger.exception(
            "request.failed",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": 500,
                "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
            },
        )
        raise
    logger.info(
        "request.completed",
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
        },
    )
    return response

app.include_router(accounts_router)
app.include_router(transfer_router)
register_exception_handlers(app)

@app.get("/health")
def read_health() -> dict[str, str]:
    return {"status": "ok"}
