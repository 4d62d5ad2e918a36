from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from consignment.config import get_settings
from consignment.api import balances, clients, products, health

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    logger.info("Starting up application...")
    logger.info(f"Using storage namespace '{settings.STORAGE_NAMESPACE}'")

    yield

    logger.info("Shutting down application...")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="""
    Record keeping for a consignment shop:

    - **Clients**: who holds which products, and how many
    - **Products**: the shop's catalog, with bulk import from spreadsheets
    - **Balances**: what each client owes for the products it holds

    ## Storage
    The client registry and the product catalog are each kept as a single
    JSON document in Redis and rewritten whole on every change.

    ## Consignment
    Handing a product to a client copies the catalog entry, so later
    catalog edits do not change what the client already holds. Handing the
    same product again adds to the held quantity.
    """,
    version=settings.APP_VERSION,
    license_info={
        "name": "MIT",
        "url": "https://opensource.org/licenses/MIT"
    },
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(health.router, prefix="/api/v1")
app.include_router(clients.router, prefix="/api/v1")
app.include_router(products.router, prefix="/api/v1")
app.include_router(balances.router, prefix="/api/v1")


@app.get("/", tags=["Root"])
def root():
    """Root endpoint with API information."""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "redoc": "/redoc",
        "health": "/api/v1/health"
    }
