# apps/api/main.py

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from apps.api.routers import audit, documents, workflows
from apps.api.schemas import Health
from core.config import settings
from core.logging import configure_logging
from domain.errors import (
    CamError,
    InvalidDecisionError,
    InvalidStateError,
    MissingFileError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    MissingFileError: 400,
    InvalidDecisionError: 400,
    NotFoundError: 404,
    InvalidStateError: 409,
}

configure_logging()

app = FastAPI(title="CAM Intake API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CamError)
async def cam_error_handler(request: Request, exc: CamError) -> JSONResponse:
    code = next((c for t, c in ERROR_STATUS.items() if isinstance(exc, t)), 400)
    logger.warning("%s %s -> %d: %s", request.method, request.url.path, code, exc)
    return JSONResponse(status_code=code, content={"detail": str(exc)})


@app.get("/healthz", response_model=Health)
def healthz() -> Health:
    return Health(status="ok", service=settings.SERVICE_NAME, timestamp=datetime.now(timezone.utc))


app.include_router(documents.router)
app.include_router(workflows.router)
app.include_router(audit.router)
