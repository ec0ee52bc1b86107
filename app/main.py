# app/main.py
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException
import logging
import sys
from app import config
from app.routers import upload, process, status as status_router

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

# Per module levels
logging.getLogger('app.services.project_manager').setLevel(logging.INFO)
logging.getLogger('app.services.blob_storage').setLevel(logging.INFO)
logging.getLogger('clip_generator').setLevel(logging.INFO)

# Create logger for this module
logger = logging.getLogger(__name__)

app = FastAPI(
    title="ClipForge API",
    description="Upload a video, describe what you want, get short clips back",
    version="1.0.0",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    max_age=600,  # Cache preflight requests for 10 minutes
)

def is_public_path(path: str) -> bool:
    """Exact match for the root, prefix match for everything else."""
    return path == "/" or any(
        path.startswith(public_path) for public_path in config.PUBLIC_PATHS if public_path != "/"
    )

# API Key middleware
@app.middleware("http")
async def api_key_middleware(request: Request, call_next):
    # Skip API key check for OPTIONS requests (preflight)
    if request.method == "OPTIONS":
        return await call_next(request)

    # No key configured means the API is open
    api_key = config.API_KEY
    if not api_key or is_public_path(request.url.path):
        return await call_next(request)

    request_api_key = request.headers.get("x-api-key")
    if not request_api_key or request_api_key != api_key:
        logger.warning(f"Rejected request to {request.url.path}: invalid or missing API key")
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"error": "Invalid or missing API key"}
        )

    return await call_next(request)

# Errors always reach clients as {"error": <message>}
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None)
    )

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request"}
    )

@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.url.path}: {str(exc)}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"}
    )

# Include routers
app.include_router(upload.router)
app.include_router(process.router)
app.include_router(status_router.router)

@app.on_event("startup")
async def startup_event():
    """Initialize services on application startup."""
    logger.info("Application started")

# Add root route for health checks
@app.get("/")
async def root():
    return JSONResponse({
        "status": "ok",
        "message": "API is running",
        "version": "1.0.0"
    })
