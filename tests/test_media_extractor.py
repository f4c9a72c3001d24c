"""
Tests for Image Extractor Implementation

Tests gallery and body image collection, filtering, dedup and caps.
"""

import pytest

from farmscope.processors.document import parse_document
from farmscope.processors.media import ImageExtractor

BASE = "https://pestoscope.com"


class TestImageExtractor:
    """Test cases for ImageExtractor"""

    @pytest.fixture
    def document(self):
        return parse_document("""
        <div class="woocommerce-product-gallery__image"><img data-large-image="/img/main-large.jpg"></div>
        <div class="product-images"><img src="/img/alt.jpg"><img src="/img/brand-logo.png"></div>
        <div class="entry-content">
          <img src="/img/alt.jpg">
          <img data-lazy-src="/img/body.jpg">
          <img src="/img/author-avatar.jpg">
          <img src="data:image/svg+xml;base64,PHN2Zz4=">
        </div>
        """)

    def test_gallery_images_unfiltered(self, document):
        extractor = ImageExtractor(BASE)
        extractor.add_gallery_images(document)

        assert extractor.result() == [
            "https://pestoscope.com/img/main-large.jpg",
            "https://pestoscope.com/img/alt.jpg",
            "https://pestoscope.com/img/brand-logo.png"
        ]

    def test_content_images_filtered_and_deduplicated(self, document):
        extractor = ImageExtractor(BASE)
        extractor.add_gallery_images(document)
        extractor.add_content_images(document)

        images = extractor.result()
        assert images.count("https://pestoscope.com/img/alt.jpg") == 1
        assert images[-1] == "https://pestoscope.com/img/body.jpg"
        assert "https://pestoscope.com/img/author-avatar.jpg" not in images
        assert not any(image.startswith("data:") for image in images)

    def test_limit(self, document):
        extractor = ImageExtractor(BASE, limit=2)
        extractor.add_gallery_images(document)
        extractor.add_content_images(document)

        assert len(extractor.result()) == 2
        assert len(extractor.images) == 4

    def test_custom_selectors(self, document):
        extractor = ImageExtractor(BASE)
        extractor.add_content_images(document, ['.product-images img'])

        assert extractor.result() == ["https://pestoscope.com/img/alt.jpg"]
