import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm.exc import StaleDataError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import LOG_LEVEL
from app.core.errors import DomainError
from app.core.logging_middleware import LoggingMiddleware
from app.core.timeutil import utcnow
from app.db.init_db import init_db
from app.routers.assignments import router as assignments_router
from app.routers.auth import router as auth_router
from app.routers.courses import router as courses_router
from app.routers.documents import router as documents_router
from app.routers.industry_ratings import router as industry_ratings_router
from app.routers.lectures import router as lectures_router
from app.routers.mentorship import router as mentorship_router
from app.routers.progress import router as progress_router
from app.routers.tas import router as tas_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Course Platform")

# Middleware
app.add_middleware(LoggingMiddleware)


# Error handlers
@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(StaleDataError)
async def stale_data_handler(request: Request, exc: StaleDataError):
    logger.warning("Concurrent update rejected on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=409,
        content={"detail": "Resource was modified by another request, please retry"},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # a 404 raised by the router itself (no route matched) has the stock detail
    if exc.status_code == 404 and exc.detail == "Not Found":
        return JSONResponse(
            status_code=404,
            content={
                "error": "Route not found",
                "message": f"Cannot {request.method} {request.url.path}",
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "message": str(exc)},
    )


# Health check
@app.get("/health")
def health():
    return {
        "status": "OK",
        "message": "Course platform API is running",
        "timestamp": utcnow().isoformat(),
    }


# Startup event
@app.on_event("startup")
def on_startup():
    init_db()


# Include routers
app.include_router(auth_router, prefix="/auth", tags=["auth"])
app.include_router(courses_router, prefix="/courses", tags=["courses"])
app.include_router(industry_ratings_router, prefix="/courses", tags=["industry-ratings"])
app.include_router(lectures_router, prefix="/lectures", tags=["lectures"])
app.include_router(documents_router, prefix="/documents", tags=["documents"])
app.include_router(assignments_router, prefix="/assignments", tags=["assignments"])
app.include_router(mentorship_router, prefix="/mentorship", tags=["mentorship"])
app.include_router(progress_router, prefix="/progress", tags=["progress"])
app.include_router(tas_router, prefix="/tas", tags=["tas"])
