import logging
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from app.config import get_settings

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)
from app.api import estimator
from app.middleware.error_handlers import estimator_error_handler, request_validation_error_handler
from app.services.city_dataset import get_city_dataset
from app.services.exceptions import EstimatorError

# Initialize settings early for Sentry
settings = get_settings()

# Initialize Sentry (must be before FastAPI app creation for proper error capture)
if settings.sentry_dsn:
    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.sentry_environment,
        integrations=[FastApiIntegration(transaction_style="endpoint")],
        traces_sample_rate=1.0 if settings.debug else 0.2,
    )
    logger.info(f"Sentry initialized for environment: {settings.sentry_environment}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"Starting {settings.app_name}...")

    # Load the city dataset once; a missing or corrupt file stops startup
    dataset = get_city_dataset()
    logger.info(f"City dataset ready ({len(dataset):,} records)")

    yield
    # Shutdown
    logger.info("Shutting down...")


app = FastAPI(
    title="Service Revenue Estimator API",
    description="Estimates annual service-industry revenue potential for a target city from its surrounding service area",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_exception_handler(EstimatorError, estimator_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_error_handler)

# CORS middleware - origins from environment variable
cors_origins = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]
logger.info(f"CORS Origins configured: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Accept", "Content-Type", "Origin", "X-Requested-With"],
    max_age=600,
)

# Include routers
app.include_router(estimator.router, prefix="/api", tags=["Estimator"])


@app.get("/", tags=["Health"])
@app.get("/health", tags=["Health"])
@app.get("/api/health", tags=["Health"])
async def health_check():
    """Health check endpoint - available at /, /health, and /api/health"""
    return {"status": "healthy", "app": settings.app_name}
