import sys
import logging
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from dashboard_core.api.routes import router, SERVICE_NAME
from dashboard_core.api.metrics import router as metrics_router
from dashboard_core.core.config import get_settings
from dashboard_core.core.errors import ErrorCodes, error_body
from dashboard_core.core.logging import configure_logging
from dashboard_core.core.middleware import CorrelationIDMiddleware, TimeoutMiddleware
from dashboard_core.core.rate_limit import limiter, rate_limit_handler
from dashboard_core.core.security import SecurityHeadersMiddleware, validate_production_security

# Load environment variables
load_dotenv()

# Load and validate configuration
try:
    settings = get_settings()
except Exception as e:
    logging.basicConfig(level=logging.ERROR)
    logging.getLogger(__name__).error(f"Failed to load configuration: {e}")
    sys.exit(1)

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="askadb dashboard core",
    description="Chart suggestions for tabular query results",
    version="1.0.0"
)

# Store limiter and settings in app state for use in routes
app.state.limiter = limiter
app.state.settings = settings

app.add_exception_handler(RateLimitExceeded, rate_limit_handler)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Reject bodies that are not a JSON object with the standard 400 envelope."""
    correlation_id = getattr(request.state, 'correlation_id', 'unknown')
    errors = exc.errors()
    detail = errors[0].get("msg") if errors else None
    logger.warning(f"Request validation failed [{correlation_id}]: {detail}")
    return JSONResponse(
        status_code=400,
        content=error_body(ErrorCodes.INVALID_DATA_FORMAT, correlation_id, detail),
        headers={"X-Correlation-ID": correlation_id}
    )


# Add middleware in order (last added is first executed)
# 1. Correlation ID middleware
app.add_middleware(CorrelationIDMiddleware)

# 2. Compression middleware
app.add_middleware(GZipMiddleware, minimum_size=1000)

# 3. CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials="*" not in settings.allowed_origins_list,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Authorization", "X-Correlation-ID"],
    expose_headers=["X-Correlation-ID"]
)

# 4. Request timeout middleware
app.add_middleware(TimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)

# 5. Security headers middleware
app.add_middleware(SecurityHeadersMiddleware)

validate_production_security(settings.allowed_origins_list)

logger.info(f"CORS allowed origins: {settings.allowed_origins_list}")

app.include_router(router, prefix="/api")
app.include_router(metrics_router, prefix="/api")


@app.get("/")
async def root():
    return {"message": f"{SERVICE_NAME} is running"}

logger.info("Application started successfully")
