"""
Pest Detail Extraction

Parses a single WooCommerce product page: title, gallery and body images,
product category, SKU and the labeled free-text sections of the description.
"""

from typing import Optional, Union

from bs4 import BeautifulSoup

from farmscope.core.base import PestDetail
from farmscope.core.logging import get_logger
from farmscope.processors.document import parse_document
from farmscope.processors.media import ImageExtractor
from farmscope.processors.sections import DEFAULT_MAX_LENGTH, SectionParser
from farmscope.processors.selectors import SelectorChain, raw_text
from farmscope.utils.url import slugify


DETAIL_TITLE = SelectorChain(
    'h1.product_title',
    'h1.entry-title',
    '.product_title',
    'h1',
)
DETAIL_CATEGORY = SelectorChain(
    '.posted_in a',
    '.product-categories a',
    '.product_meta a[rel="tag"]',
)
SKU_ELEMENTS = SelectorChain(
    '.product_meta .sku_wrapper .sku',
    '.sku',
)

# Source-text tiers, best first
DESCRIPTION_REGION = SelectorChain(
    '#tab-description',
    '.woocommerce-Tabs-panel--description',
    '[id*="description"]',
)
CONTENT_REGION = SelectorChain(
    '.entry-content, .product-description, .woocommerce-product-details__short-description',
)

DEFAULT_IMAGE_LIMIT = 10
MIN_CONTENT_LENGTH = 50


def select_content_text(document: BeautifulSoup, min_length: int = MIN_CONTENT_LENGTH) -> str:
    """
    Pick the text block the sections are parsed from

    Description tab first, then the general content region, then the
    whole page, each accepted only when it has at least min_length chars.
    """
    logger = get_logger()

    for tier, chain in (('description', DESCRIPTION_REGION), ('content', CONTENT_REGION)):
        text = raw_text(chain.select(document))
        if len(text) >= min_length:
            logger.debug(f"Using {tier} region text ({len(text)} chars)")
            return text

    body = document.body or document
    text = body.get_text(' ')
    logger.debug(f"Using full page text ({len(text)} chars)")
    return text


def extract_sku(document: BeautifulSoup) -> str:
    """SKU from the product meta block, '' when absent or only the word 'sku'"""
    for element in SKU_ELEMENTS.select(document):
        text = ' '.join(element.get_text(' ').split())
        if text and text.lower().rstrip(':') != 'sku':
            return text
    return ''


def extract_pest_detail(html: Union[str, BeautifulSoup], url: str, base_url: str,
                        detail_id: Optional[str] = None,
                        image_limit: int = DEFAULT_IMAGE_LIMIT,
                        section_max_length: int = DEFAULT_MAX_LENGTH,
                        min_content_length: int = MIN_CONTENT_LENGTH) -> PestDetail:
    """
    Extract the structured detail of a pest page

    Args:
        html: Raw HTML or an already parsed document
        url: Absolute URL of the page
        base_url: Origin used to absolutize images
        detail_id: Identifier of the record (route slug); defaults to the title slug
        image_limit: Maximum number of images kept
        section_max_length: Cap applied to every free-text field
        min_content_length: Minimum length for a source-text tier to be used

    Returns:
        PestDetail with '' for every section not found
    """
    document = html if isinstance(html, BeautifulSoup) else parse_document(html)

    images = ImageExtractor(base_url, limit=image_limit)
    images.add_gallery_images(document)
    images.add_content_images(document)

    sections = SectionParser(max_length=section_max_length).parse(
        select_content_text(document, min_content_length)
    )

    sku = extract_sku(document) or sections['sku']
    title = DETAIL_TITLE.text(document)

    return PestDetail(
        id=detail_id or slugify(title),
        title=title,
        url=url,
        images=images.result(),
        caused_by=sections['causedBy'],
        problem_category=sections['problemCategory'],
        symptoms=sections['symptoms'],
        comments=sections['comments'],
        management=sections['management'],
        control=sections['control'],
        sku=sku[:section_max_length],
        category=DETAIL_CATEGORY.text(document) or None
    )
