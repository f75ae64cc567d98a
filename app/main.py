import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.calls.router import router as calls_router
from app.carriers.router import router as carriers_router
from app.config import VERSION, settings
from app.database import connect_db, disconnect_db
from app.loads.router import router as loads_router
from app.logging_config import configure_logging
from app.negotiations.router import router as negotiations_router

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await connect_db()
    logger.info("Carrier Sales API %s started", VERSION)
    yield
    await disconnect_db()


app = FastAPI(
    title="Carrier Sales API",
    version=VERSION,
    lifespan=lifespan,
    docs_url="/docs" if settings.DOCS_ENABLED else None,
    redoc_url="/redoc" if settings.DOCS_ENABLED else None,
    openapi_url="/openapi.json" if settings.DOCS_ENABLED else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",")],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        "%s %s %d %.1fms",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


app.include_router(loads_router)
app.include_router(negotiations_router)
app.include_router(carriers_router)
app.include_router(calls_router)


@app.get("/health")
async def health_check():
    return {"status": "ok", "version": VERSION}
