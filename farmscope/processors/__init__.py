"""
Extraction building blocks for FarmScope

This package contains the site-independent pieces of the pipeline:
- HTML document parsing
- Selector chains
- Labeled section parsing
- Result assembly (dedup, sort, cap, excerpt truncation)
- Image extraction
"""

from farmscope.processors.document import parse_document
from farmscope.processors.selectors import SelectorChain, extract_first, select_all
from farmscope.processors.sections import SectionLabel, SectionParser, SECTION_LABELS, parse_sections
from farmscope.processors.assembler import assemble, dedup, truncate_excerpt
from farmscope.processors.media import ImageExtractor

__all__ = [
    'parse_document',
    'SelectorChain',
    'extract_first',
    'select_all',
    'SectionLabel',
    'SectionParser',
    'SECTION_LABELS',
    'parse_sections',
    'assemble',
    'dedup',
    'truncate_excerpt',
    'ImageExtractor'
]
