"""
Site-specific extractors for FarmScope

Advisory feeds, category discovery, category listings and pest detail
pages of kisanmitra.net and pestoscope.com.
"""

from farmscope.sources.sites import SiteProfile, KISANMITRA, PESTOSCOPE, farm_profile, pest_profile
from farmscope.sources.advisories import extract_advisories, extract_advisory_detail
from farmscope.sources.categories import extract_categories
from farmscope.sources.items import category_url, extract_category_items
from farmscope.sources.detail import extract_pest_detail

__all__ = [
    'SiteProfile',
    'KISANMITRA',
    'PESTOSCOPE',
    'farm_profile',
    'pest_profile',
    'extract_advisories',
    'extract_advisory_detail',
    'extract_categories',
    'category_url',
    'extract_category_items',
    'extract_pest_detail'
]
