"""
Storefront Cart Service

Holds shoppers' carts for the storefront UI and hands them to the
storefront REST API at checkout.
"""

import asyncio
import logging
from contextlib import asynccontextmanager, suppress

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables
load_dotenv()

from .core.config import settings
from .routes import cart_router, checkout_router
from .routes import dependencies
from .database.carts import CartDatabase, get_cart_db

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def sweep_idle_carts(db: CartDatabase, interval: float) -> None:
    """Drop idle cart sessions every `interval` seconds until cancelled"""
    while True:
        await asyncio.sleep(interval)
        db.cleanup_idle()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Storefront cart service starting up...")
    logger.info(f"Storefront API: {settings.api_url}")
    logger.info(f"API auth: {'enabled' if settings.api_auth_configured else 'disabled'}")

    db = app.dependency_overrides.get(get_cart_db, get_cart_db)()
    sweeper = asyncio.create_task(sweep_idle_carts(db, settings.cart_sweep_interval_seconds))

    yield

    sweeper.cancel()
    with suppress(asyncio.CancelledError):
        await sweeper

    logger.info("Storefront cart service shutting down...")
    if dependencies.api_client:
        await dependencies.api_client.close()
        dependencies.api_client = None


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Client-owned shopping carts for the storefront",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(cart_router)
app.include_router(checkout_router)


@app.get("/")
async def home():
    """Service index"""
    return {
        "message": "Storefront Cart API",
        "docs": "/docs",
        "endpoints": {
            "cart": "/api/cart",
            "checkout": "/api/checkout",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "storefront-cart"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
