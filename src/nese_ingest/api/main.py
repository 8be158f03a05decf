"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from nese_ingest import __version__
from nese_ingest.api.routes import documents, health
from nese_ingest.errors import IngestionError, UnsupportedFormat, VisionTranscriptionFailed
from nese_ingest.logging import configure_logging, log


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    yield


app = FastAPI(
    title="nese-ingest",
    description="Document ingestion and scan recovery for NESE psychopedagogical reports",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(IngestionError)
async def ingestion_error_handler(request: Request, exc: IngestionError) -> JSONResponse:
    if isinstance(exc, UnsupportedFormat):
        code = status.HTTP_415_UNSUPPORTED_MEDIA_TYPE
    elif isinstance(exc, VisionTranscriptionFailed):
        code = status.HTTP_502_BAD_GATEWAY
    else:
        code = status.HTTP_422_UNPROCESSABLE_ENTITY
    log.warning("api.ingestion_error", path=request.url.path, error=exc.user_message, status=code)
    return JSONResponse(status_code=code, content={"detail": exc.user_message})


app.include_router(health.router, tags=["health"])
app.include_router(documents.router, prefix="/documents", tags=["documents"])
