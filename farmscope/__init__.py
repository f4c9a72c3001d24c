"""
FarmScope

Scrapes farm advisories from kisanmitra.net and pest information from
pestoscope.com, normalizes them into uniform JSON records, and serves
them live over HTTP or writes them as offline snapshots.

Features:
- Selector-chain extraction tuned to both sites' known DOM variants
- Absolute URL and lazy-loaded image normalization
- Labeled section parsing of pest detail pages
- Sequential, throttled batch traversal into JSON snapshots
- FastAPI endpoints with a uniform response envelope
- Configurable via YAML/JSON and environment variables
"""

__version__ = "0.1.0"
