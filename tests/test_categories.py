"""
Tests for category discovery
"""

from farmscope.sources.categories import clean_category_name, extract_categories

BASE = "https://pestoscope.com"


def test_duplicate_links_collapse_to_one_category():
    html = """
    <ul class="product-categories">
      <li><a href="/product-category/cotton/">Cotton (5)</a></li>
      <li><a href="https://pestoscope.com/product-category/cotton/">Cotton (5)</a></li>
      <li><a href="/product-category/cotton/">Cotton (5)</a></li>
    </ul>
    """
    categories = extract_categories(html, BASE)

    assert len(categories) == 1
    assert categories[0].name == "Cotton"
    assert categories[0].slug == "cotton"
    assert categories[0].url == "https://pestoscope.com/product-category/cotton/"


def test_sorted_by_name():
    html = """
    <a href="/product-category/wheat/">Wheat</a>
    <a href="/product-category/apple/">apple</a>
    <a href="/product-category/banana/">Banana (2)</a>
    """
    assert [c.name for c in extract_categories(html, BASE)] == ["apple", "Banana", "Wheat"]


def test_prefix_image_and_filter_variants():
    html = """
    <a href="/product-category/rice/" aria-label="Rice">
      <img data-src="/img/rice.jpg"> Visit product category Rice (3)
    </a>
    <a href="/product-category/cotton/?orderby=price">Cotton</a>
    <a href="/product-category/cotton/#reviews">Cotton</a>
    <a href="/product-category/maize/"><img src="/img/maize.jpg"></a>
    <a href="/shop/">Shop</a>
    """
    categories = extract_categories(html, BASE)

    assert len(categories) == 1
    rice = categories[0]
    assert rice.name == "Rice"
    assert rice.slug == "rice"
    assert rice.image == "https://pestoscope.com/img/rice.jpg"
    assert rice.to_dict() == {
        'name': "Rice",
        'slug': "rice",
        'url': "https://pestoscope.com/product-category/rice/",
        'image': "https://pestoscope.com/img/rice.jpg"
    }


def test_no_categories():
    assert extract_categories("<html><body>Under maintenance</body></html>", BASE) == []


def test_clean_category_name():
    assert clean_category_name("  Chilli   (12) ") == "Chilli"
    assert clean_category_name("Visit product category Tomato") == "Tomato"
    assert clean_category_name("Brinjal") == "Brinjal"
