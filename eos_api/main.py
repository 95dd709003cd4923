"""FastAPI 애플리케이션 진입점. 미들웨어, 예외 핸들러, API 라우터, DB 수명주기를 등록합니다."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from eos_api.config import settings
from eos_api.database import Database
from eos_api.routers import auth, users, departments, jobs, tasks, comments

logger = logging.getLogger(__name__)

SERVICE_NAME = "EOS Task API"


def setup_logging() -> None:
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(format="%(asctime)s %(levelname)s [%(name)s] %(message)s", level=level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    database = Database(settings.DATABASE_URL)
    database.create_all()
    app.state.database = database
    logger.info("Connected to database")
    try:
        yield
    finally:
        database.dispose()


app = FastAPI(
    title=SERVICE_NAME,
    description="부서 단위 태스크/Job 계층 관리 API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail
    if exc.status_code == 404 and detail == "Not Found":
        detail = "Route not found"
    return JSONResponse(status_code=exc.status_code, content={"error": str(detail)}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        loc = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{loc}: {first.get('msg')}" if loc else str(first.get("msg"))
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = str(exc) if settings.DEBUG else "Internal server error"
    return JSONResponse(status_code=500, content={"error": message})


# Register all routers
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(departments.router)
app.include_router(jobs.router)
app.include_router(tasks.router)
app.include_router(comments.router)


@app.get("/api/health")
def health_check():
    return {"status": "ok", "service": SERVICE_NAME, "timestamp": datetime.utcnow().isoformat()}
