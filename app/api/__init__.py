"""
API Routers

All FastAPI routers for the revenue estimator backend.
"""

from app.api import estimator

__all__ = ["estimator"]
