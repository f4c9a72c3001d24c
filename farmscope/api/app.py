"""
FastAPI Application Factory

Builds the service app: CORS for the frontend origins, the scraping
routes and the 400 envelope for missing request parameters.
"""

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from farmscope import __version__
from farmscope.core.base import MissingRequestParameter
from farmscope.core.config import AppConfig
from farmscope.core.logging import get_logger
from farmscope.api.routes import router


def setup_cors(app: FastAPI, allowed_origins: Optional[list] = None) -> None:
    """
    Setup CORS middleware.

    Args:
        app: FastAPI application instance
        allowed_origins: List of allowed origins. If None, allows all origins.
    """
    origins = allowed_origins or ["*"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    get_logger().info(f"CORS middleware configured with origins: {origins}")


async def missing_parameter_handler(request: Request, exc: MissingRequestParameter) -> JSONResponse:
    get_logger().warning(f"Rejected {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content={"success": False, "error": str(exc)})


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """
    Create the FastAPI application

    Args:
        config: Parsed configuration; defaults are used when omitted

    Returns:
        Configured FastAPI instance
    """
    config = config or AppConfig()

    app = FastAPI(
        title="FarmScope API",
        description="Live farm and pest advisories scraped from kisanmitra.net and pestoscope.com",
        version=__version__
    )
    app.state.config = config

    setup_cors(app, allowed_origins=config.server.cors_origins)
    app.add_exception_handler(MissingRequestParameter, missing_parameter_handler)
    app.include_router(router)

    return app
