from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .api.groceries import router as groceries_router
from .core.config import get_settings

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

settings = get_settings()
app = FastAPI(title="recipe-cart", version="0.1.0", description="Recipe to grocery list extraction")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(groceries_router)

@app.get("/api/health")
async def health_check():
    return {
        "status": "ok",
        "message": "recipe-cart API is running",
        "llm_provider": settings.llm_provider,
        "llm_configured": settings.llm_configured,
    }
