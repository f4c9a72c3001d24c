"""
Storage components for FarmScope

Offline JSON snapshots of the scraped data.
"""

from .snapshot import SnapshotWriter, utc_timestamp

__all__ = ['SnapshotWriter', 'utc_timestamp']
