"""
Document Parser

Loads raw HTML into a BeautifulSoup tree. Parsing is best-effort: malformed
or partial markup never raises, an unparseable input yields an empty document.
"""

from typing import Optional, Union

from bs4 import BeautifulSoup

from farmscope.core.logging import get_logger


def parse_document(html: Optional[Union[str, bytes]]) -> BeautifulSoup:
    """
    Parse HTML into a queryable document

    Args:
        html: Raw HTML text or bytes (encoding sniffed for bytes)

    Returns:
        BeautifulSoup document, empty if input is empty
    """
    if not html:
        return BeautifulSoup('', 'html.parser')

    try:
        return BeautifulSoup(html, 'html.parser')
    except Exception as e:
        # html.parser tolerates almost anything; this guards pathological input
        get_logger().warning(f"Unparseable HTML, using empty document: {e}")
        return BeautifulSoup('', 'html.parser')
