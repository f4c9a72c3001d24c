"""
API Routes

Live scraping endpoints. Every request fetches the origin page, runs the
extractors and returns a JSON envelope; nothing is cached between requests.

Usage:
    from fastapi import FastAPI
    from farmscope.api.routes import router

    app = FastAPI()
    app.include_router(router)
"""

from typing import AsyncIterator, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from farmscope import __version__
from farmscope.core.base import FetchFailed, FetcherInterface, MissingRequestParameter
from farmscope.core.config import AppConfig
from farmscope.core.fetcher import Fetcher
from farmscope.core.logging import get_logger
from farmscope.sources.advisories import extract_advisories
from farmscope.sources.categories import extract_categories
from farmscope.sources.detail import extract_pest_detail
from farmscope.sources.items import category_url, extract_category_items
from farmscope.sources.sites import farm_profile, pest_profile

router = APIRouter(
    prefix="",
    tags=["farmscope"]
)


def get_config(request: Request) -> AppConfig:
    """Configuration the application was created with"""
    return request.app.state.config


async def get_fetcher(config: AppConfig = Depends(get_config)) -> AsyncIterator[FetcherInterface]:
    """Per-request fetcher, closed when the response has been produced"""
    async with Fetcher(config.fetch) as fetcher:
        yield fetcher


def failure(message: str, list_key: Optional[str] = 'data', status_code: int = 500) -> JSONResponse:
    """Error envelope; the list key keeps the success response's shape"""
    content = {"success": False, "error": message}
    if list_key:
        content[list_key] = []
    return JSONResponse(status_code=status_code, content=content)


@router.get("/health")
def health_check():
    """
    Health check endpoint for Docker and monitoring.

    Returns:
        dict: Health status
    """
    return {
        "status": "healthy",
        "service": "farmscope",
        "version": __version__
    }


@router.get("/api/farmer-scope")
async def farmer_scope(config: AppConfig = Depends(get_config),
                       fetcher: FetcherInterface = Depends(get_fetcher)):
    """
    Latest farm advisories from kisanmitra.net.

    Returns:
        dict: {success, count, advisories}
    """
    profile = farm_profile(config.sources, config.limits.farm_excerpt_length)
    try:
        html = await fetcher.fetch(profile.feed_url)
        advisories = extract_advisories(html, profile, limit=config.limits.advisory_limit)
    except Exception as e:
        get_logger().error(f"Error scraping farm advisories: {e}", exc_info=not isinstance(e, FetchFailed))
        return failure("Failed to fetch farm advisories", list_key="advisories")

    return {
        "success": True,
        "count": len(advisories),
        "advisories": [advisory.to_dict() for advisory in advisories]
    }


@router.get("/api/pest-scope")
async def pest_scope(config: AppConfig = Depends(get_config),
                     fetcher: FetcherInterface = Depends(get_fetcher)):
    """
    Latest pest advisories from pestoscope.com.

    Returns:
        dict: {success, count, advisories}
    """
    profile = pest_profile(config.sources, config.limits.pest_excerpt_length)
    try:
        html = await fetcher.fetch(profile.feed_url)
        advisories = extract_advisories(html, profile, limit=config.limits.advisory_limit)
    except Exception as e:
        get_logger().error(f"Error scraping pest advisories: {e}", exc_info=not isinstance(e, FetchFailed))
        return failure("Failed to fetch pest advisories", list_key="advisories")

    return {
        "success": True,
        "count": len(advisories),
        "advisories": [advisory.to_dict() for advisory in advisories]
    }


@router.get("/api/pest-scope/categories")
async def pest_categories(config: AppConfig = Depends(get_config),
                          fetcher: FetcherInterface = Depends(get_fetcher)):
    """
    Crop categories discovered on the pestoscope.com homepage, sorted by name.

    Returns:
        dict: {success, count, data}
    """
    base_url = config.sources.pest_base_url
    try:
        html = await fetcher.fetch(base_url)
        categories = extract_categories(html, base_url)
    except Exception as e:
        get_logger().error(f"Error scraping categories: {e}", exc_info=not isinstance(e, FetchFailed))
        return failure("Failed to fetch categories")

    return {
        "success": True,
        "count": len(categories),
        "data": [category.to_dict() for category in categories]
    }


@router.get("/api/pest-scope/category/{slug}")
async def pest_category(slug: str, config: AppConfig = Depends(get_config),
                        fetcher: FetcherInterface = Depends(get_fetcher)):
    """
    Pest listings of one category. An unknown category is an empty list.

    Returns:
        dict: {success, category, count, data}
    """
    base_url = config.sources.pest_base_url
    try:
        html = await fetcher.fetch(category_url(base_url, slug))
        items = extract_category_items(html, base_url)
    except FetchFailed as e:
        if e.status == 404:
            get_logger().info(f"Category not found: {slug}")
            items = []
        else:
            get_logger().error(f"Error scraping category {slug}: {e}")
            return failure("Failed to fetch category items")
    except Exception as e:
        get_logger().error(f"Error scraping category {slug}: {e}", exc_info=True)
        return failure("Failed to fetch category items")

    return {
        "success": True,
        "category": slug,
        "count": len(items),
        "data": [item.to_dict() for item in items]
    }


@router.get("/api/pest-scope/pest/{slug}")
async def pest_detail(slug: str, url: Optional[str] = None,
                      config: AppConfig = Depends(get_config),
                      fetcher: FetcherInterface = Depends(get_fetcher)):
    """
    Structured detail of one pest page.

    Args:
        slug: Identifier echoed back as the record id
        url: Absolute URL of the detail page (required)

    Returns:
        dict: {success, data}
    """
    if not url:
        raise MissingRequestParameter("url")

    limits = config.limits
    try:
        html = await fetcher.fetch(url)
        detail = extract_pest_detail(
            html,
            url=url,
            base_url=config.sources.pest_base_url,
            detail_id=slug,
            image_limit=limits.detail_image_limit,
            section_max_length=limits.section_max_length,
            min_content_length=limits.min_content_length
        )
    except Exception as e:
        get_logger().error(f"Error scraping pest details for {slug}: {e}", exc_info=not isinstance(e, FetchFailed))
        return failure("Failed to fetch pest details", list_key=None)

    return {
        "success": True,
        "data": detail.to_dict()
    }
