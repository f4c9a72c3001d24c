"""
Tests for category listing extraction
"""

from farmscope.sources.items import category_url, extract_category_items

BASE = "https://pestoscope.com"

LISTING = """
<ul class="products">
  <li class="product">
    <a href="/product/aphids/" class="woocommerce-LoopProduct-link">
      <img src="/wp-content/uploads/aphids.jpg">
      <h2 class="woocommerce-loop-product__title">Aphids</h2>
      <span class="price">Rs 120</span>
    </a>
    <div class="woocommerce-product-details__short-description">Sap-sucking insects on tender shoots.</div>
  </li>
  <li class="product">
    <a href="https://pestoscope.com/product/aphids/" class="woocommerce-LoopProduct-link">
      <h2 class="woocommerce-loop-product__title">Aphids again</h2>
    </a>
  </li>
  <li class="product">
    <a href="/product/leaf-curl-virus/" aria-label="Visit product Leaf Curl Virus"></a>
  </li>
  <li class="product">
    <a href="/product/thrips/" title="Thrips"><img data-src="/img/thrips.jpg"></a>
  </li>
  <li class="product"><h2 class="woocommerce-loop-product__title">No link</h2></li>
</ul>
"""


def test_listing_items():
    items = extract_category_items(LISTING, BASE)

    assert [item.title for item in items] == ["Aphids", "Leaf Curl Virus", "Thrips"]

    aphids = items[0]
    assert aphids.id == "aphids"
    assert aphids.slug == "aphids"
    assert aphids.url == "https://pestoscope.com/product/aphids/"
    assert aphids.image == "https://pestoscope.com/wp-content/uploads/aphids.jpg"
    assert aphids.price == "Rs 120"
    assert aphids.excerpt == "Sap-sucking insects on tender shoots."


def test_title_fallbacks():
    items = {item.id: item for item in extract_category_items(LISTING, BASE)}

    assert items["leaf-curl-virus"].slug == "leaf-curl-virus"
    assert items["leaf-curl-virus"].image is None
    assert items["thrips"].image == "https://pestoscope.com/img/thrips.jpg"
    assert items["thrips"].price is None


def test_container_variants():
    article_listing = '<article class="product"><a href="/product/mites/"><h3>Mites</h3></a></article>'
    assert [item.id for item in extract_category_items(article_listing, BASE)] == ["mites"]

    bare_links = '<a class="woocommerce-LoopProduct-link" href="/product/jassids/"><h2>Jassids</h2></a>'
    assert [item.title for item in extract_category_items(bare_links, BASE)] == ["Jassids"]


def test_urls_unique():
    urls = [item.url for item in extract_category_items(LISTING, BASE)]
    assert len(urls) == len(set(urls))


def test_limit():
    assert len(extract_category_items(LISTING, BASE, limit=1)) == 1


def test_empty_category():
    assert extract_category_items('<p class="woocommerce-info">No products were found.</p>', BASE) == []


def test_to_dict():
    record = extract_category_items(LISTING, BASE)[0].to_dict()
    assert 'detail' not in record
    assert record['url'] == "https://pestoscope.com/product/aphids/"


def test_category_url():
    assert category_url(BASE, "cotton") == "https://pestoscope.com/product-category/cotton/"
