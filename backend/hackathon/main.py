from __future__ import annotations
import uuid
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from hackathon.config import settings
from hackathon.errors import DomainError
from hackathon.logging_setup import configure_logging
from hackathon.routes.system import router as system_router
from hackathon.routes.events import router as events_router
from hackathon.routes.teams import router as teams_router
from hackathon.routes.submissions import router as submissions_router
from hackathon.routes.votes import router as votes_router
import structlog

configure_logging()
log = structlog.get_logger()

@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info("startup", env=settings.environment, version=settings.app_version, git_sha=settings.git_sha)
    yield
    log.info("shutdown")

app = FastAPI(
    title=f"{settings.app_display_name} API",
    version=settings.app_version,
    lifespan=lifespan,
    description=f"{settings.app_display_name} API for event stages, voting and prize rankings",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.environment == "dev" else settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(system_router)
app.include_router(events_router)
app.include_router(teams_router)
app.include_router(submissions_router)
app.include_router(votes_router)

@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    log.info("request_rejected", path=request.url.path, error=type(exc).__name__, detail=str(exc))
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})

@app.middleware("http")
async def add_request_id(request: Request, call_next):
    rid = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = rid
    structlog.contextvars.bind_contextvars(request_id=rid)
    response: Response = await call_next(request)
    response.headers["X-Request-ID"] = rid
    structlog.contextvars.clear_contextvars()
    return response
