"""
Backend Routes Module

Exports the FastAPI routers of the ranking backend:

- ranking_router: Bandar target ranking over a watchlist group or static index

Usage:
    from routes import ranking_router

    app.include_router(ranking_router)
"""
from .ranking import router as ranking_router

__all__ = [
    "ranking_router",
]
