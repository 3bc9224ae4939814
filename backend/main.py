import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import styles
from api.deps import get_editor_session
from core.config import ALLOWED_CORS_ORIGINS, LOAD_STYLE_ON_STARTUP

# Configure logging with environment variable support
# Set LOG_LEVEL=WARNING in production to reduce noise, DEBUG for verbose output
log_level = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


tags_metadata = [
    {
        "name": "style",
        "description": (
            "Edit the live map style: layers, paint/layout properties, zoom "
            "expressions, quick colors, search and export."
        ),
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    if LOAD_STYLE_ON_STARTUP:
        # A failed fetch leaves the session usable without a style
        get_editor_session().initialize()
    yield


app = FastAPI(
    title="Map Style Editor API",
    description="API for interactively editing map rendering styles",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

# CORS
if ALLOWED_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
else:
    # Fallback: allow all origins but disable credentials to satisfy CORS spec
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Include API routers
app.include_router(styles.router, prefix="/api")


@app.get("/")
async def root():
    return {"message": "Map Style Editor API is running"}


@app.get("/health")
async def health_check():
    session = get_editor_session()
    return {
        "status": "healthy",
        "message": "Map Style Editor API is running",
        "style_loaded": session.document is not None,
    }


# Exception handlers


@app.exception_handler(status.HTTP_400_BAD_REQUEST)
async def validation_exception_handler_400(request: Request, exc):
    exc_str = f"{exc}".replace("\n", " ").replace("   ", " ")
    logging.error(f"{request}: {exc_str}")
    content = {"status_code": 10400, "message": exc_str, "data": None}
    return JSONResponse(content=content, status_code=status.HTTP_400_BAD_REQUEST)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler_422(request: Request, exc: RequestValidationError):
    exc_str = f"{exc}".replace("\n", " ").replace("   ", " ")
    logging.error(f"{request}: {exc_str}")
    content = {"status_code": 10422, "message": exc_str, "data": None}
    return JSONResponse(content=content, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
