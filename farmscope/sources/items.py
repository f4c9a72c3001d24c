"""
Category Listing Extraction

Parses a WooCommerce category page into PestItem records, deduplicated
by absolute URL and kept in document order.
"""

import re
from typing import Iterator, List, Optional, Union

from bs4 import BeautifulSoup
from bs4.element import Tag

from farmscope.core.base import MissingRequiredField, PestItem
from farmscope.core.logging import get_logger
from farmscope.processors.assembler import assemble
from farmscope.processors.document import parse_document
from farmscope.processors.selectors import SelectorChain, attribute
from farmscope.utils.url import is_absolute, last_path_segment, normalize_url, resolve_image, slugify


PRODUCT_CONTAINERS = SelectorChain(
    '.product',
    '.woocommerce-LoopProduct-link',
)
PRODUCT_LINK = SelectorChain(
    'a.woocommerce-LoopProduct-link',
    'a.product-link',
    'a[href*="/product/"]',
    'a',
)
PRODUCT_TITLE = SelectorChain(
    '.woocommerce-loop-product__title',
    'h2',
    'h3',
    '.product-title',
)
PRODUCT_EXCERPT = SelectorChain(
    '.woocommerce-loop-product__excerpt',
    '.product-excerpt',
    '.woocommerce-product-details__short-description',
)
PRODUCT_PRICE = SelectorChain(
    '.price',
    '.woocommerce-Price-amount',
    '.amount',
)

ARIA_PREFIX_PATTERN = re.compile(r'^Visit product\s+', re.IGNORECASE)


def category_url(base_url: str, slug: str) -> str:
    """Listing URL of a category slug"""
    return normalize_url(f"/product-category/{slug}/", base_url)


def extract_category_items(html: Union[str, BeautifulSoup], base_url: str,
                           limit: Optional[int] = None) -> List[PestItem]:
    """
    Extract pest listings from a category page

    Args:
        html: Raw HTML or an already parsed document
        base_url: Origin used to absolutize links and images
        limit: Optional cap on the number of listings

    Returns:
        Unique listings in document order
    """
    document = html if isinstance(html, BeautifulSoup) else parse_document(html)

    items = assemble(_candidates(document, base_url), limit=limit, dedup_key=lambda item: item.url)
    get_logger().debug(f"Extracted {len(items)} category items")
    return items


def _candidates(document: BeautifulSoup, base_url: str) -> Iterator[PestItem]:
    for index, product in enumerate(PRODUCT_CONTAINERS.select(document)):
        try:
            yield _build_item(product, index, base_url)
        except MissingRequiredField as e:
            get_logger().debug(f"Dropping product {index}: {e}")


def _build_item(product: Tag, index: int, base_url: str) -> PestItem:
    link = product if product.name == 'a' else PRODUCT_LINK.first(product)

    url = normalize_url(attribute(link, 'href'), base_url)
    if not is_absolute(url):
        raise MissingRequiredField('link')

    title = _item_title(product, link)
    if not title:
        raise MissingRequiredField('title')

    return PestItem(
        id=last_path_segment(url) or f"pest-{index}",
        title=title,
        slug=slugify(title),
        url=url,
        image=resolve_image(product.find('img'), base_url),
        excerpt=PRODUCT_EXCERPT.text(product),
        price=PRODUCT_PRICE.text(product) or None
    )


def _item_title(product: Tag, link: Optional[Tag]) -> str:
    title = PRODUCT_TITLE.text(product)
    if title:
        return title

    title = attribute(link, 'title')
    if title:
        return title

    return ARIA_PREFIX_PATTERN.sub('', attribute(link, 'aria-label')).strip()
