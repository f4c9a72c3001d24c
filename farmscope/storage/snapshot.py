"""
Snapshot Writer Implementation

Serializes a complete traversal to a single JSON file for offline browsing.
Each write replaces the previous file wholesale; nothing is merged.
"""

import json
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from farmscope.core.base import (
    Advisory,
    AdvisoryDetail,
    Category,
    PestItem,
    SnapshotWriterInterface,
    StorageError
)
from farmscope.core.logging import get_logger


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-05-01T10:00:00.000Z"""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).strftime('%Y-%m-%dT%H:%M:%S.') + f"{now.microsecond // 1000:03d}Z"


def advisory_snapshot(advisory: Advisory, detail: AdvisoryDetail) -> Dict[str, Any]:
    """Advisory record extended with its full content and images"""
    data = advisory.to_dict()
    data['fullContent'] = detail.full_content
    data['images'] = list(detail.images)
    return data


def category_snapshot(category: Category, pests: List[PestItem]) -> Dict[str, Any]:
    """Category record with its nested listings and their details"""
    data = category.to_dict()
    data['pests'] = [pest.to_dict(include_detail=True) for pest in pests]
    return data


class SnapshotWriter(SnapshotWriterInterface):
    """
    Writes snapshot documents into one output directory
    """

    def __init__(self, output_dir: str, clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc)):
        self.logger = get_logger()
        self.output_dir = Path(output_dir)
        self.clock = clock

    def build_pest_snapshot(self, categories: List[Dict[str, Any]],
                            advisories: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Pest dataset: category tree plus pest advisories"""
        return {
            'lastUpdated': utc_timestamp(self.clock()),
            'categories': categories,
            'advisories': advisories
        }

    def build_advisory_snapshot(self, advisories: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Farm advisory dataset"""
        return {
            'lastUpdated': utc_timestamp(self.clock()),
            'count': len(advisories),
            'advisories': advisories
        }

    def write(self, name: str, payload: Dict[str, Any]) -> str:
        """
        Write a snapshot document

        Args:
            name: File name inside the output directory
            payload: JSON-serializable snapshot

        Returns:
            Path of the written file
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        target = self.output_dir / name

        # Write beside the target and swap so readers never see a partial file
        fd, temp_path = tempfile.mkstemp(prefix=f".{name}.", dir=str(self.output_dir))
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            os.replace(temp_path, target)
        except (OSError, TypeError, ValueError) as e:
            Path(temp_path).unlink(missing_ok=True)
            raise StorageError(f"Failed to write snapshot {target}: {e}") from e

        self.logger.info(f"Saved snapshot to {target} ({target.stat().st_size / 1024:.2f} KB)")
        return str(target)
