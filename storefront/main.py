from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn
from datetime import datetime, UTC
import os

from .database import engine, Base
from .categories import category_router
from .products import product_router
from .search import search_router
from .config import get_settings
from .logging_config import app_logger
from .middleware import RequestLoggingMiddleware, ErrorHandlingMiddleware

app = FastAPI(title="Jewelry Storefront API")

# CORS middleware
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)

# Include routers
app.include_router(category_router, prefix="/api/categories", tags=["Categories"])
app.include_router(product_router, prefix="/api/products", tags=["Products"])
app.include_router(search_router, prefix="/api/search", tags=["Search"])

# Add middlewares
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(ErrorHandlingMiddleware)

@app.on_event("startup")
async def startup_event():
    # Create database tables
    Base.metadata.create_all(bind=engine)
    app_logger.info("Database tables created")

@app.get("/")
async def root():
    return {"message": "Welcome to the Jewelry Storefront API"}

@app.get("/health")
async def health_check():
    """
    Health check endpoint for monitoring.
    Returns basic application health metrics.
    """
    settings = get_settings()
    return {
        "status": "healthy",
        "timestamp": datetime.now(UTC).isoformat(),
        "version": "1.0.0",
        "environment": settings.ENVIRONMENT
    }

@app.get("/healthz")
def healthz():
    """
    Health check endpoint.
    Returns a simple status message.
    """
    return {"status": "ok"}

if __name__ == "__main__":
    port = int(os.environ.get("BACKEND_PORT", 8000))
    uvicorn.run("storefront.main:app", host="0.0.0.0", port=port, reload=False)
