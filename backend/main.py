"""
Main FastAPI Application - Bandar Target Ranking

Ranks IDX tickers by how close their price already is to the target projected
from bandar accumulation and orderbook pressure.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
import logging

from routes.ranking import router as ranking_router

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

# Create FastAPI app
app = FastAPI(
    title="Bandar Ranking API",
    description="Bandar target ranking over Stockbit watchlists and IHSG indices",
    version="1.0.0"
)

# CORS middleware for Next.js frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# GZip compression for large ranking payloads (IDX80 runs)
app.add_middleware(GZipMiddleware, minimum_size=1000)


@app.get("/")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "online",
        "message": "Bandar Ranking API is running",
        "version": "1.0.0",
        "features": {
            "ranking": "Top% ranking over watchlist groups and static indices",
        }
    }


# Register all routers
app.include_router(ranking_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
