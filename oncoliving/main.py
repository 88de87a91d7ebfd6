# oncoliving/main.py
from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from mangum import Mangum

from oncoliving.core.db import init_db
from oncoliving.core.errors import AnswerValidationError, DuplicateSubmission, WellnessError
from oncoliving.core.security import verify_api_key
from oncoliving.core.settings import settings
from oncoliving.models.schemas import QuizResponseOut
from oncoliving.routers import exercises, health, quizzes, responses

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# FastAPI app
# -----------------------------------------------------------------------------
API_PREFIX = "/api/oncoliving"

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    root_path=settings.FASTAPI_ROOT_PATH,
)

# -----------------------------------------------------------------------------
# CORS
# -----------------------------------------------------------------------------
if settings.ALLOW_ALL_CORS or settings.DEBUG:
    cors = {"allow_origins": ["*"], "allow_origin_regex": ".*"}
else:
    # the patient app in dev runs on any localhost port
    cors = {"allow_origins": settings.CORS_ORIGINS, "allow_origin_regex": r"http://(localhost|127\.0\.0\.1):\d+$"}

app.add_middleware(
    CORSMiddleware,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    max_age=86400,
    **cors,
)

# -----------------------------------------------------------------------------
# Register routers
# -----------------------------------------------------------------------------
_guarded = [Depends(verify_api_key)]

app.include_router(quizzes.router,   prefix=API_PREFIX, dependencies=_guarded)
app.include_router(responses.router, prefix=API_PREFIX, dependencies=_guarded)
app.include_router(exercises.router, prefix=API_PREFIX, dependencies=_guarded)
app.include_router(health.router,    prefix=API_PREFIX)

# -----------------------------------------------------------------------------
# Health
# -----------------------------------------------------------------------------
@app.get("/")
def root():
    return {
        "ok": True,
        "service": settings.PROJECT_NAME,
        "prefix": API_PREFIX,
        "docs": "/docs",
        "build": settings.BUILD_TAG,
    }


@app.get("/healthz")
def healthz():
    return {"ok": True}


# -----------------------------------------------------------------------------
# Error mapping
# -----------------------------------------------------------------------------
@app.exception_handler(WellnessError)
async def wellness_error_handler(request: Request, exc: WellnessError):
    body = exc.to_dict()
    if isinstance(exc, DuplicateSubmission) and exc.existing is not None:
        body["existing"] = QuizResponseOut.from_row(exc.existing).model_dump(mode="json")
    if not isinstance(exc, (AnswerValidationError, DuplicateSubmission)):
        logger.info("[api] %s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.code)
    return JSONResponse(status_code=exc.status_code, content=body)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("[api] unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"ok": False, "error": "internal_error", "detail": str(exc)},
    )

# -----------------------------------------------------------------------------
# Startup
# -----------------------------------------------------------------------------
@app.on_event("startup")
def on_startup():
    init_db()
    logger.info("[boot] %s %s ready (build %s)", settings.PROJECT_NAME, settings.VERSION, settings.BUILD_TAG)

# -----------------------------------------------------------------------------
# Lambda handler
# -----------------------------------------------------------------------------
handler = Mangum(app)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("oncoliving.main:app", host="127.0.0.1", port=8000, reload=settings.DEBUG)
