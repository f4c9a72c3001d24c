"""
Snapshot Orchestrator Implementation

Runs the batch traversal: categories, then each category's listings, then
each listing's detail page, then the advisory feed and its articles. Fetches
are strictly sequential with a fixed pause between them; a failed unit is
logged and skipped and the traversal continues.
"""

import asyncio
import time
from typing import Any, Awaitable, Callable, Dict, List, Optional

from farmscope.core.base import (
    Advisory,
    AdvisoryDetail,
    BaseComponent,
    Category,
    FetchFailed,
    FetcherInterface,
    PestDetail,
    PestItem
)
from farmscope.core.config import AppConfig
from farmscope.core.fetcher import Fetcher
from farmscope.core.logging import get_logger, logging_manager
from farmscope.sources.advisories import extract_advisories, extract_advisory_detail
from farmscope.sources.categories import extract_categories
from farmscope.sources.detail import extract_pest_detail
from farmscope.sources.items import extract_category_items
from farmscope.sources.sites import SiteProfile, farm_profile, pest_profile
from farmscope.storage.snapshot import (
    SnapshotWriter,
    advisory_snapshot,
    category_snapshot
)


class SnapshotOrchestrator(BaseComponent):
    """
    Coordinates fetcher, extractors and snapshot writer for batch runs
    """

    def __init__(self, config: AppConfig, fetcher: Optional[FetcherInterface] = None,
                 writer: Optional[SnapshotWriter] = None,
                 sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep):
        super().__init__({'app': config})
        self.app_config = config
        self.logger = get_logger()
        self.fetcher = fetcher or Fetcher(config.fetch)
        self.writer = writer or SnapshotWriter(config.batch.output_dir)
        self.sleep = sleep
        self.errors: List[str] = []

    async def initialize(self) -> None:
        """Initialize the fetcher"""
        self.logger.info("Initializing snapshot orchestrator")
        await self.fetcher.initialize()
        self._initialized = True

    async def cleanup(self) -> None:
        """Clean up resources"""
        await self.fetcher.cleanup()
        self.logger.info("Snapshot orchestrator cleanup completed")

    async def run(self, datasets: List[str]) -> List[Dict[str, Any]]:
        """Generate each requested dataset and return their stats"""
        if not self._initialized:
            await self.initialize()

        results = []
        for dataset in datasets:
            if dataset == 'pest':
                results.append(await self.generate_pest_data())
            elif dataset == 'farmerscope':
                results.append(await self.generate_farmerscope_data())
            else:
                raise ValueError(f"Unknown dataset: {dataset}")
        return results

    async def generate_pest_data(self) -> Dict[str, Any]:
        """Scrape the category tree and pest advisories into pest-data.json"""
        start_time = time.time()
        self.errors = []
        limits = self.app_config.limits
        profile = pest_profile(self.app_config.sources, limits.pest_excerpt_length)

        self.logger.info("Starting pest data generation")
        categories = await self.collect_categories()

        category_data = []
        stats = {'dataset': 'pest', 'categories': len(categories), 'pests': 0,
                 'details_fetched': 0, 'details_failed': 0}

        for index, category in enumerate(categories, 1):
            logging_manager.log_progress(index, len(categories), f"Processing: {category.name}")
            pests = await self.collect_category_pests(category)
            await self._pause(self.app_config.batch.category_delay)

            for pest in pests:
                pest.detail = await self.collect_pest_detail(pest)
                if pest.detail:
                    stats['details_fetched'] += 1
                else:
                    stats['details_failed'] += 1
                await self._pause(self.app_config.batch.item_delay)

            stats['pests'] += len(pests)
            category_data.append(category_snapshot(category, pests))

        advisories = await self.collect_advisories(profile, limits.pest_advisory_snapshot_limit)
        stats['advisories'] = len(advisories)

        snapshot = self.writer.build_pest_snapshot(category_data, advisories)
        return self._finish(stats, snapshot, self.app_config.batch.pest_data_file, start_time)

    async def generate_farmerscope_data(self) -> Dict[str, Any]:
        """Scrape the farm advisory preview into farmerscope-advisories.json"""
        start_time = time.time()
        self.errors = []
        limits = self.app_config.limits
        profile = farm_profile(self.app_config.sources, limits.farm_excerpt_length)

        self.logger.info("Starting FarmerScope data generation")
        advisories = await self.collect_advisories(profile, limits.farm_advisory_preview_limit)

        stats = {'dataset': 'farmerscope', 'advisories': len(advisories)}
        snapshot = self.writer.build_advisory_snapshot(advisories)
        return self._finish(stats, snapshot, self.app_config.batch.farmerscope_file, start_time)

    async def collect_categories(self) -> List[Category]:
        """Discover categories; an unreachable homepage yields none"""
        base_url = self.app_config.sources.pest_base_url
        try:
            html = await self.fetcher.fetch(base_url)
        except FetchFailed as e:
            self._record_error(f"Categories: {e}")
            return []

        categories = extract_categories(html, base_url)
        self.logger.info(f"Found {len(categories)} categories")
        return categories

    async def collect_category_pests(self, category: Category) -> List[PestItem]:
        """Listings of one category; a failed fetch yields none"""
        try:
            html = await self.fetcher.fetch(category.url)
        except FetchFailed as e:
            self._record_error(f"Category {category.name}: {e}")
            return []

        pests = extract_category_items(html, self.app_config.sources.pest_base_url)
        self.logger.info(f"Found {len(pests)} pests in {category.name}")
        return pests

    async def collect_pest_detail(self, pest: PestItem) -> Optional[PestDetail]:
        """Detail of one listing, None when the page could not be fetched"""
        self.logger.debug(f"Fetching details for: {pest.title}")
        try:
            html = await self.fetcher.fetch(pest.url)
        except FetchFailed as e:
            self._record_error(f"Pest {pest.title}: {e}")
            return None

        limits = self.app_config.limits
        return extract_pest_detail(
            html,
            url=pest.url,
            base_url=self.app_config.sources.pest_base_url,
            detail_id=pest.id,
            image_limit=limits.detail_image_limit,
            section_max_length=limits.section_max_length,
            min_content_length=limits.min_content_length
        )

    async def collect_advisories(self, profile: SiteProfile, limit: int) -> List[Dict[str, Any]]:
        """Advisory feed with each article's full content"""
        try:
            html = await self.fetcher.fetch(profile.feed_url)
        except FetchFailed as e:
            self._record_error(f"Advisories ({profile.name}): {e}")
            return []

        advisories = extract_advisories(html, profile, limit=limit)
        self.logger.info(f"Found {len(advisories)} advisories on {profile.name}")

        results = []
        for index, advisory in enumerate(advisories):
            if index:
                await self._pause(self.app_config.batch.advisory_delay)
            detail = await self.collect_advisory_detail(advisory, profile)
            results.append(advisory_snapshot(advisory, detail))
        return results

    async def collect_advisory_detail(self, advisory: Advisory, profile: SiteProfile) -> AdvisoryDetail:
        """Full content of one advisory, falling back to its excerpt and lead image"""
        lead_images = [advisory.image] if advisory.image else []
        try:
            html = await self.fetcher.fetch(advisory.link)
        except FetchFailed as e:
            self._record_error(f"Advisory {advisory.title}: {e}")
            return AdvisoryDetail(full_content=advisory.excerpt, images=lead_images)

        detail = extract_advisory_detail(html, profile)
        if not detail.images:
            detail.images = lead_images
        self.logger.debug(
            f"Full content fetched for {advisory.title} "
            f"({len(detail.full_content)} chars, {len(detail.images)} images)"
        )
        return detail

    async def _pause(self, seconds: float) -> None:
        if seconds > 0:
            await self.sleep(seconds)

    def _record_error(self, message: str) -> None:
        self.errors.append(message)
        self.logger.warning(f"Skipping unit: {message}")

    def _finish(self, stats: Dict[str, Any], snapshot: Dict[str, Any], file_name: str,
                start_time: float) -> Dict[str, Any]:
        output_file = self.writer.write(file_name, snapshot)
        stats.update({
            'output_file': output_file,
            'last_updated': snapshot['lastUpdated'],
            'file_size': self.writer.output_dir.joinpath(file_name).stat().st_size,
            'duration': time.time() - start_time,
            'errors': list(self.errors)
        })
        logging_manager.generate_summary_report(stats)
        return stats
