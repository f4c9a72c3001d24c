"""
Tests for the HTTP API

The per-request fetcher dependency is overridden with an in-memory fake,
so no request leaves the process.
"""

from typing import Dict, Optional, Union

import pytest
from fastapi.testclient import TestClient

from farmscope import __version__
from farmscope.api import create_app, get_fetcher
from farmscope.core.base import FetchFailed, FetcherInterface
from farmscope.core.config import AppConfig
from farmscope.core.logging import setup_logging

PEST_FEED = """
<article class="post">
  <header><h2 class="entry-title"><a href="https://pestoscope.com/pink-bollworm-alert/">Pink Bollworm Alert</a></h2></header>
  <span class="posted-on"><time datetime="2024-05-01T10:00:00+00:00">May 1, 2024</time></span>
  <span class="author"><a href="/author/admin/">Dr. Rao</a></span>
  <div class="entry-content"><p>Monitor cotton fields weekly.</p></div>
</article>
<article class="post">
  <header><h2><a href="/whitefly-outbreak/">Whitefly Outbreak</a></h2></header>
</article>
"""

HOMEPAGE = """
<a href="/product-category/wheat/">Wheat (4)</a>
<a href="/product-category/cotton/">Cotton (5)</a>
<a href="/product-category/cotton/">Cotton (5)</a>
"""

COTTON_LISTING = """
<li class="product">
  <a href="/product/aphids/" class="woocommerce-LoopProduct-link">
    <h2 class="woocommerce-loop-product__title">Aphids</h2>
  </a>
</li>
"""

APHIDS_DETAIL = """
<h1 class="product_title">Aphids</h1>
<div class="woocommerce-product-gallery__image"><img data-src="/img/aphids.jpg"></div>
<div id="tab-description">
  <p>Symptoms: Curling and yellowing of leaves, sticky honeydew on foliage.</p>
  <p>Management: Release ladybird beetles.</p>
</div>
"""


class FakeFetcher(FetcherInterface):
    """Serves canned pages; unknown URLs fail with 404"""

    def __init__(self, pages: Dict[str, Union[str, Exception]]):
        super().__init__({})
        self.pages = pages
        self.requested = []

    async def initialize(self) -> None:
        self._initialized = True

    async def cleanup(self) -> None:
        self._initialized = False

    async def fetch(self, url: str, headers: Optional[Dict[str, str]] = None) -> str:
        self.requested.append(url)
        page = self.pages.get(url)
        if page is None:
            raise FetchFailed(url, status=404)
        if isinstance(page, Exception):
            raise page
        return page


class TestAPI:

    @pytest.fixture(autouse=True)
    def setup_logging(self):
        setup_logging(level="DEBUG", log_file=None)

    @pytest.fixture
    def fetcher(self):
        return FakeFetcher({
            "https://pestoscope.com/category/pest-advisory/": PEST_FEED,
            "https://pestoscope.com": HOMEPAGE,
            "https://pestoscope.com/product-category/cotton/": COTTON_LISTING,
            "https://pestoscope.com/product-category/broken/": FetchFailed(
                "https://pestoscope.com/product-category/broken/", status=502
            ),
            "https://pestoscope.com/product/aphids/": APHIDS_DETAIL,
        })

    @pytest.fixture
    def client(self, fetcher):
        app = create_app(AppConfig())
        app.dependency_overrides[get_fetcher] = lambda: fetcher
        return TestClient(app)

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "farmscope", "version": __version__}

    def test_pest_scope(self, client):
        response = client.get("/api/pest-scope")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["count"] == 2
        first, second = body["advisories"]
        assert first["author"] == "Dr. Rao"
        assert first["date"] == "2024-05-01T10:00:00+00:00"
        assert second["link"] == "https://pestoscope.com/whitefly-outbreak/"
        assert second["author"] is None
        assert second["category"] == "Pest Advisory"
        assert second["excerpt"] == "Pest management advisory information available. Click to read more."

    def test_farmer_scope_failure(self, client):
        response = client.get("/api/farmer-scope")

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "Failed to fetch farm advisories",
            "advisories": []
        }

    def test_farmer_scope_zero_results_is_success(self, client, fetcher):
        fetcher.pages["https://www.kisanmitra.net/category/farm-advisories/"] = "<p>No posts yet</p>"

        response = client.get("/api/farmer-scope")

        assert response.status_code == 200
        assert response.json() == {"success": True, "count": 0, "advisories": []}

    def test_categories(self, client):
        response = client.get("/api/pest-scope/categories")

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 2
        assert [c["name"] for c in body["data"]] == ["Cotton", "Wheat"]
        assert body["data"][0]["slug"] == "cotton"

    def test_category_items(self, client):
        response = client.get("/api/pest-scope/category/cotton")

        assert response.status_code == 200
        body = response.json()
        assert body["category"] == "cotton"
        assert body["count"] == 1
        assert body["data"][0]["url"] == "https://pestoscope.com/product/aphids/"

    def test_unknown_category_is_empty(self, client):
        response = client.get("/api/pest-scope/category/unknown")

        assert response.status_code == 200
        assert response.json() == {"success": True, "category": "unknown", "count": 0, "data": []}

    def test_category_upstream_error(self, client):
        response = client.get("/api/pest-scope/category/broken")

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["data"] == []

    def test_pest_detail_requires_url(self, client, fetcher):
        response = client.get("/api/pest-scope/pest/aphids")

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "URL parameter is required"}
        assert fetcher.requested == []

    def test_pest_detail(self, client):
        response = client.get(
            "/api/pest-scope/pest/aphids",
            params={"url": "https://pestoscope.com/product/aphids/"}
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == "aphids"
        assert data["title"] == "Aphids"
        assert data["images"] == ["https://pestoscope.com/img/aphids.jpg"]
        assert data["symptoms"] == "Curling and yellowing of leaves, sticky honeydew on foliage."
        assert data["management"] == "Release ladybird beetles."

    def test_pest_detail_fetch_failure(self, client):
        response = client.get(
            "/api/pest-scope/pest/ghost",
            params={"url": "https://pestoscope.com/product/ghost/"}
        )

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Failed to fetch pest details"}

    def test_cors_allows_frontend_origin(self, client):
        response = client.get("/health", headers={"Origin": "http://localhost:3000"})
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
