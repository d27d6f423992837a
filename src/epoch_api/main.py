import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .errors import ApiError
from .settings import Settings, get_settings
from .routers import epoch as epoch_router

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "epoch",
        "description": "Convert between Unix timestamps (seconds or milliseconds) and date strings.",
    },
]

app = FastAPI(
    title="Epoch API",
    description="Converts between human-readable dates and Unix epoch timestamps.",
    version="0.1.0",
    openapi_tags=openapi_tags,
)

_settings = get_settings()

# Configure CORS based on settings (.env -> CORS_ALLOW_ORIGINS), with '*' fallback
allow_all = (_settings.cors_allow_origins == ["*"]) or (len(_settings.cors_allow_origins) == 0)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if allow_all else _settings.cors_allow_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
)


# PUBLIC_INTERFACE
def configure_logging(settings: Settings) -> None:
    """Configure root logging once for the server process."""
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    """
    Return client errors as a flat JSON object.

    Response format:
        {"error": "Could not parse: not-a-date"}
    """
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


# PUBLIC_INTERFACE
@app.get("/", summary="Health Check", tags=["health"])
def health_check():
    """
    Health check endpoint.

    Returns:
        A JSON object indicating service health.
    """
    return {"message": "Healthy"}


app.include_router(epoch_router.router)
