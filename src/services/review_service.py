"""
Review Service.

Asynchronous facade used by the hotel detail page. Each call waits out a
simulated network latency, then delegates to the store or aggregator.
"""

import asyncio
import logging
from typing import Dict, List, Optional

from src.analytics.review_stats import ReviewStatsAggregator
from src.models.review import Review
from src.models.review_stats import ReviewStats
from src.registry.review_store import ReviewStore
import config.settings as settings

logger = logging.getLogger(__name__)


class ReviewService:
    """
    Async API over a ReviewStore.

    Latency is a suspension point only: concurrent calls may complete in
    any order relative to each other.
    """

    def __init__(
        self,
        store: ReviewStore,
        latency_scale: Optional[float] = None,
        latencies: Optional[Dict[str, float]] = None
    ):
        """
        Initialize review service.

        Args:
            store: Review store owned by the caller
            latency_scale: Multiplier for simulated latency (0 disables;
                default: settings.LATENCY_SCALE)
            latencies: Per-operation delay in seconds
                (default: settings.OPERATION_LATENCY_SECONDS)
        """
        self.store = store
        self.aggregator = ReviewStatsAggregator(store)
        self.latency_scale = settings.LATENCY_SCALE if latency_scale is None else latency_scale
        self.latencies = dict(settings.OPERATION_LATENCY_SECONDS if latencies is None else latencies)

        logger.info(f"Initialized ReviewService (latency_scale={self.latency_scale})")

    async def _simulate_latency(self, operation: str) -> None:
        delay = self.latencies.get(operation, 0) * self.latency_scale
        if delay > 0:
            await asyncio.sleep(delay)

    async def get_all_reviews(self) -> List[Review]:
        await self._simulate_latency("get_all_reviews")
        return self.store.list()

    async def get_review_by_id(self, review_id) -> Review:
        await self._simulate_latency("get_review_by_id")
        return self.store.get_by_id(review_id)

    async def get_hotel_reviews(self, hotel_id) -> List[Review]:
        await self._simulate_latency("get_hotel_reviews")
        return self.store.list_by_hotel(hotel_id)

    async def get_user_reviews(self, user_id) -> List[Review]:
        await self._simulate_latency("get_user_reviews")
        return self.store.list_by_user(user_id)

    async def create_review(self, review_data: Dict) -> Review:
        await self._simulate_latency("create_review")
        return self.store.create(review_data)

    async def update_review(self, review_id, update_data: Dict) -> Review:
        await self._simulate_latency("update_review")
        return self.store.update(review_id, update_data)

    async def delete_review(self, review_id) -> Review:
        await self._simulate_latency("delete_review")
        return self.store.delete(review_id)

    async def mark_helpful(self, review_id) -> Review:
        """Record one "helpful" vote for a review."""
        await self._simulate_latency("mark_helpful")
        return self.store.add_helpful_vote(review_id)

    async def get_review_stats(self, hotel_id) -> ReviewStats:
        await self._simulate_latency("get_review_stats")
        return self.aggregator.get_stats(hotel_id)

    async def get_hotel_review_page(self, hotel_id) -> Dict:
        """
        Fetch a hotel's reviews and stats concurrently, as the detail page does.

        Returns:
            {"reviews": [...], "stats": ReviewStats}
        """
        reviews, stats = await asyncio.gather(
            self.get_hotel_reviews(hotel_id),
            self.get_review_stats(hotel_id)
        )
        return {"reviews": reviews, "stats": stats}
