import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .config import settings
from .errors import TrainingActionError
from .routers import actions, attendance, courses, enrollments, payments, sessions

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

STATUS_BY_KIND = {
    "not_found": 404,
    "validation_error": 422,
    "conflict": 409,
    "internal_error": 500,
}

app = FastAPI(title="Training actions")

app.include_router(courses.router, prefix="/courses", tags=["courses"])
app.include_router(actions.router, prefix="/actions", tags=["actions"])
app.include_router(enrollments.router, prefix="/enrollments", tags=["enrollments"])
app.include_router(sessions.router, prefix="/sessions", tags=["sessions"])
app.include_router(attendance.router, prefix="/attendance", tags=["attendance"])
app.include_router(payments.router, prefix="/payments", tags=["payments"])


@app.exception_handler(TrainingActionError)
async def training_action_error_handler(request: Request, exc: TrainingActionError):
    return JSONResponse(
        status_code=STATUS_BY_KIND.get(exc.kind, 500),
        content={"kind": exc.kind, "title": exc.title, "detail": exc.message},
    )


@app.get("/")
async def root():
    return {"app": "training-actions"}
