"""
Tests for pest detail extraction

Covers gallery/body image collection, product meta fields, the
description text tiers and the labeled sections.
"""

import pytest

from farmscope.core.logging import setup_logging
from farmscope.processors.document import parse_document
from farmscope.sources.detail import extract_pest_detail, extract_sku, select_content_text

BASE = "https://pestoscope.com"
URL = "https://pestoscope.com/product/pink-bollworm/"

DETAIL_PAGE = """
<html><body>
<div class="woocommerce-product-gallery">
  <div class="woocommerce-product-gallery__image"><img data-src="/img/pest.jpg"></div>
  <div class="woocommerce-product-gallery__image"><img src="https://cdn.pestoscope.com/img/pest-2.jpg"></div>
</div>
<h1 class="product_title entry-title">Pink Bollworm</h1>
<div class="product_meta">
  <span class="sku_wrapper">SKU: <span class="sku">PB-001</span></span>
  <span class="posted_in">Category: <a href="/product-category/cotton/" rel="tag">Cotton</a></span>
</div>
<div class="woocommerce-Tabs-panel woocommerce-Tabs-panel--description" id="tab-description">
  <h2>Description</h2>
  <p>Caused by: Pectinophora gossypiella</p>
  <p>Problem Category: Insect Pest</p>
  <p>Symptoms: Rosette flowers and damaged bolls.</p>
  <p>Management: Use pheromone traps.</p>
  <p>Control: Spray recommended insecticide.</p>
</div>
</body></html>
"""


class TestExtractPestDetail:

    @pytest.fixture(autouse=True)
    def setup_logging(self):
        setup_logging(level="DEBUG", log_file=None)

    def test_structured_fields(self):
        detail = extract_pest_detail(DETAIL_PAGE, url=URL, base_url=BASE, detail_id="pink-bollworm")

        assert detail.id == "pink-bollworm"
        assert detail.title == "Pink Bollworm"
        assert detail.url == URL
        assert detail.category == "Cotton"
        assert detail.sku == "PB-001"
        assert detail.caused_by == "Pectinophora gossypiella"
        assert detail.problem_category == "Insect Pest"
        assert detail.symptoms == "Rosette flowers and damaged bolls."
        assert detail.comments == ""
        assert detail.management == "Use pheromone traps."
        assert detail.control == "Spray recommended insecticide."

    def test_gallery_images(self):
        detail = extract_pest_detail(DETAIL_PAGE, url=URL, base_url=BASE)

        assert detail.images == [
            "https://pestoscope.com/img/pest.jpg",
            "https://cdn.pestoscope.com/img/pest-2.jpg"
        ]

    def test_id_defaults_to_title_slug(self):
        detail = extract_pest_detail(DETAIL_PAGE, url=URL, base_url=BASE)
        assert detail.id == "pink-bollworm"

    def test_to_dict_keys(self):
        record = extract_pest_detail(DETAIL_PAGE, url=URL, base_url=BASE).to_dict()
        assert record['causedBy'] == "Pectinophora gossypiella"
        assert record['problemCategory'] == "Insect Pest"
        assert set(record) == {
            'id', 'title', 'images', 'causedBy', 'problemCategory', 'symptoms',
            'comments', 'management', 'control', 'sku', 'category', 'url'
        }

    def test_image_limit_and_content_filter(self):
        gallery = "".join(
            f'<div class="woocommerce-product-gallery__image"><img src="/img/g{i}.jpg"></div>'
            for i in range(8)
        )
        body = (
            '<div class="entry-content">'
            '<img src="/img/b1.jpg"><img src="/img/farm-icon.png"><img src="/img/g0.jpg">'
            '<img src="/img/b2.jpg"><img src="/img/b3.jpg"><img src="/img/b4.jpg">'
            '</div>'
        )
        detail = extract_pest_detail(f"<html><body>{gallery}{body}</body></html>", url=URL, base_url=BASE)

        assert len(detail.images) == 10
        assert "https://pestoscope.com/img/farm-icon.png" not in detail.images
        assert detail.images[8:] == ["https://pestoscope.com/img/b1.jpg", "https://pestoscope.com/img/b2.jpg"]

    def test_sku_falls_back_to_section_text(self):
        html = """
        <h1>Leaf Spot</h1>
        <div id="tab-description">
          <p>Symptoms: Brown circular spots with yellow halo on older leaves.</p>
          <p>SKU: LS-42</p>
        </div>
        """
        detail = extract_pest_detail(html, url=URL, base_url=BASE)

        assert detail.sku == "LS-42"
        assert detail.category is None
        assert detail.symptoms == "Brown circular spots with yellow halo on older leaves."

    def test_missing_everything(self):
        detail = extract_pest_detail("<html><body></body></html>", url=URL, base_url=BASE, detail_id="x")

        assert detail.id == "x"
        assert detail.title == ""
        assert detail.images == []
        assert detail.symptoms == ""
        assert detail.sku == ""


class TestContentTiers:

    def test_description_region_first(self):
        doc = parse_document(
            '<div id="tab-description">' + "Symptoms: description text " * 3 + '</div>'
            '<div class="entry-content">' + "Symptoms: entry text " * 5 + '</div>'
        )
        assert "description text" in select_content_text(doc)
        assert "entry text" not in select_content_text(doc)

    def test_short_description_falls_through(self):
        html = """
        <div id="tab-description">Short</div>
        <div class="other">Symptoms: Leaves curl upward and turn yellow over several weeks.</div>
        """
        doc = parse_document(html)
        assert "Leaves curl upward" in select_content_text(doc)

        detail = extract_pest_detail(html, url=URL, base_url=BASE)
        assert detail.symptoms == "Leaves curl upward and turn yellow over several weeks."

    def test_content_region_tier(self):
        doc = parse_document(
            '<div class="product-description">Management: remove and destroy infected plant debris.</div>'
        )
        assert select_content_text(doc).startswith("Management:")

    def test_extract_sku_ignores_bare_label(self):
        assert extract_sku(parse_document('<span class="sku">SKU</span>')) == ""
        assert extract_sku(parse_document('<span class="sku"> AB-1 </span>')) == "AB-1"
