"""
Selector-Chain Extractor

Site themes differ in where they put titles, dates, authors and images, so
each field is located with an ordered chain of CSS selectors. Selectors are
tried strictly in priority order and the first non-empty match set wins.
"""

from typing import List, Optional, Sequence, Union

from bs4 import BeautifulSoup
from bs4.element import Tag

Node = Union[BeautifulSoup, Tag]


class SelectorChain:
    """Ordered list of CSS selectors tried until one matches"""

    def __init__(self, *selectors: str):
        if not selectors:
            raise ValueError("SelectorChain needs at least one selector")
        self.selectors = tuple(selectors)

    def select(self, root: Optional[Node]) -> List[Tag]:
        """Return all elements matched by the first selector that matches anything"""
        if root is None:
            return []

        for selector in self.selectors:
            matches = root.select(selector)
            if matches:
                return matches

        return []

    def first(self, root: Optional[Node]) -> Optional[Tag]:
        """Return the first element of the winning match set"""
        matches = self.select(root)
        return matches[0] if matches else None

    def text(self, root: Optional[Node]) -> str:
        """Whitespace-collapsed text of the first match, or ''"""
        return element_text(self.first(root))

    def __iter__(self):
        return iter(self.selectors)

    def __repr__(self) -> str:
        return f"SelectorChain{self.selectors!r}"


def extract_first(root: Optional[Node], selectors: Sequence[str]) -> List[Tag]:
    """Apply selectors in priority order and return the first non-empty result set"""
    return SelectorChain(*selectors).select(root)


def select_all(root: Optional[Node], selectors: Sequence[str]) -> List[Tag]:
    """Union of every selector's matches, in document order, without duplicates"""
    if root is None:
        return []
    return root.select(', '.join(selectors))


def element_text(element: Optional[Tag]) -> str:
    """Text content of an element with whitespace runs collapsed"""
    if element is None:
        return ''
    return ' '.join(element.get_text(' ').split())


def raw_text(elements: Sequence[Tag]) -> str:
    """
    Concatenated text of a match set

    Elements nested inside another matched element are skipped so their
    text is not counted twice.
    """
    # Tag equality is structural, so compare by identity
    matched = {id(element) for element in elements}
    outermost = [
        element for element in elements
        if not any(id(parent) in matched for parent in element.parents)
    ]
    return ''.join(element.get_text(' ') for element in outermost)


def attribute(element: Optional[Tag], name: str) -> str:
    """Stripped attribute value, '' when absent"""
    if element is None:
        return ''
    value = element.get(name)
    if isinstance(value, list):
        value = ' '.join(value)
    return (value or '').strip()


def closest(element: Tag, names: Sequence[str]) -> Optional[Tag]:
    """Nearest enclosing element (including itself) whose tag name is in names"""
    if element.name in names:
        return element
    return element.find_parent(list(names))
