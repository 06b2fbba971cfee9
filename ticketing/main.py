from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from ticketing.config import settings
from ticketing.fares import router as fares_router
from ticketing.search import router as search_router

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    description="Bus ticketing fare and search API",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(
    search_router,
    prefix=f"{settings.API_V1_STR}/bus-search",
    tags=["Bus Search"]
)

app.include_router(
    fares_router,
    prefix=settings.API_V1_STR,
    tags=["Fares"]
)

@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": settings.PROJECT_NAME,
        "version": "1.0.0",
        "docs": "/docs"
    }

@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
