"""
Category Discovery

WooCommerce renders crop categories as links to /product-category/<slug>/.
Every such link on the homepage becomes a Category, keyed by absolute URL
(first occurrence wins) and sorted by name for presentation.
"""

import re
from typing import Iterator, List, Union

from bs4 import BeautifulSoup

from farmscope.core.base import Category
from farmscope.core.logging import get_logger
from farmscope.processors.assembler import assemble
from farmscope.processors.document import parse_document
from farmscope.processors.selectors import attribute, element_text
from farmscope.utils.url import normalize_url, resolve_image


CATEGORY_MARKER = '/product-category/'
CATEGORY_LINK_SELECTOR = f'a[href*="{CATEGORY_MARKER}"]'
SLUG_PATTERN = re.compile(re.escape(CATEGORY_MARKER) + r'([^/?#]+)')

NAME_PREFIX_PATTERN = re.compile(r'^Visit product category\s+', re.IGNORECASE)
NAME_COUNT_PATTERN = re.compile(r'\s*\(\d+\)\s*$')


def clean_category_name(text: str) -> str:
    """Strip the 'Visit product category' prefix and a trailing '(5)' count"""
    name = ' '.join(text.split())
    name = NAME_PREFIX_PATTERN.sub('', name)
    name = NAME_COUNT_PATTERN.sub('', name)
    return name.strip()


def extract_categories(html: Union[str, BeautifulSoup], base_url: str) -> List[Category]:
    """
    Discover categories from the pest site homepage

    Args:
        html: Raw HTML or an already parsed document
        base_url: Origin used to absolutize links and images

    Returns:
        Unique categories sorted by name
    """
    document = html if isinstance(html, BeautifulSoup) else parse_document(html)

    categories = assemble(
        _candidates(document, base_url),
        dedup_key=lambda category: category.url,
        sort_key=lambda category: category.name.casefold()
    )
    get_logger().debug(f"Discovered {len(categories)} categories")
    return categories


def _candidates(document: BeautifulSoup, base_url: str) -> Iterator[Category]:
    for link in document.select(CATEGORY_LINK_SELECTOR):
        href = attribute(link, 'href')
        text = element_text(link)
        if not href or not text:
            continue

        # Sort/filter variants of the same category
        if '?' in href or '#' in href:
            continue

        slug_match = SLUG_PATTERN.search(href)
        if not slug_match:
            continue

        name = clean_category_name(text)
        if not name:
            continue

        yield Category(
            name=name,
            slug=slug_match.group(1),
            url=normalize_url(href, base_url),
            image=resolve_image(link.find('img'), base_url)
        )
