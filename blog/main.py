import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from blog.config import settings
from blog.database import Base, engine
from blog.exceptions import ReferentialIntegrityError, ValidationError
from blog.middleware import RequestLoggingMiddleware
from blog.routers import articles, comments
from blog.schemas import ValidationErrorResponse

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    if settings.CREATE_TABLES:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ready (%s)", settings.APP_ENV)
    yield
    # Shutdown
    await engine.dispose()

app = FastAPI(
    title="Blog API",
    description="Articles and comments with field validation and cascading deletes",
    version="1.0.0",
    lifespan=lifespan,
)

# Middleware
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(articles.router)
app.include_router(comments.router)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    body = ValidationErrorResponse(detail=str(exc), failures=exc.failures)
    return JSONResponse(status_code=422, content=body.model_dump())


@app.exception_handler(ReferentialIntegrityError)
async def referential_integrity_handler(request: Request, exc: ReferentialIntegrityError):
    return JSONResponse(
        status_code=409,
        content={"detail": str(exc), "article_id": exc.article_id},
    )


@app.get("/health")
async def health():
    return {"status": "healthy", "version": "1.0.0"}
