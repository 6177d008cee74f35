"""
API route modules.

Contains FastAPI routers for the analysis endpoints.
"""

from redcf.api.routes import analysis

__all__ = ["analysis"]
