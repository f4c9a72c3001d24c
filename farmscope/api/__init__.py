"""
HTTP service for FarmScope

FastAPI application exposing the live advisory, category, listing and
pest detail endpoints.
"""

from farmscope.api.app import create_app
from farmscope.api.routes import router, get_config, get_fetcher

__all__ = ['create_app', 'router', 'get_config', 'get_fetcher']
