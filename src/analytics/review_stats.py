"""
Review Statistics Aggregator and Hotel Rating Report.

Reduces a hotel's reviews into summary statistics, and tabulates those
statistics across every hotel in the store.
"""

import logging
import math
import os
from collections import Counter
from datetime import datetime, timezone
from typing import Iterable, Optional

import pandas as pd

from src.models.review import Review
from src.models.review_stats import ReviewStats
from src.registry.review_store import ReviewStore
from src.utils.storage import StorageManager
import config.settings as settings

logger = logging.getLogger(__name__)

STAR_VALUES = range(settings.MAX_RATING, settings.MIN_RATING - 1, -1)  # 5..1


def round_half_up(value: float, decimals: int = 1) -> float:
    """Round with ties away from zero for positive values (2.25 -> 2.3)."""
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor


def empty_stats() -> ReviewStats:
    """Stats for a hotel with no reviews."""
    return ReviewStats(
        total_reviews=0,
        average_rating=0,
        rating_breakdown={star: 0 for star in STAR_VALUES},
        category_averages={category: 0 for category in settings.RATING_CATEGORIES}
    )


def compute_review_stats(reviews: Iterable[Review], hotel_id) -> ReviewStats:
    """
    Compute summary statistics for one hotel.

    Args:
        reviews: Review collection (any hotels; filtered here)
        hotel_id: Hotel to summarize (int or string)

    Returns:
        ReviewStats. average_rating is rounded half-up to one decimal;
        category averages are unrounded.

    A review whose overall_rating is outside 1-5 still counts toward
    total_reviews and the average, but lands in no breakdown bucket.
    """
    hotel_id = str(hotel_id)
    hotel_reviews = [r for r in reviews if r.hotel_id == hotel_id]

    if not hotel_reviews:
        return empty_stats()

    total = len(hotel_reviews)
    average = sum(r.overall_rating for r in hotel_reviews) / total

    rating_counts = Counter(r.overall_rating for r in hotel_reviews)
    rating_breakdown = {star: rating_counts.get(star, 0) for star in STAR_VALUES}

    bucketed = sum(rating_breakdown.values())
    if bucketed != total:
        logger.warning(
            f"Hotel {hotel_id}: {total - bucketed} of {total} reviews have an "
            f"overall rating outside {settings.MIN_RATING}-{settings.MAX_RATING}"
        )

    category_averages = {
        category: sum(getattr(r, field_name) for r in hotel_reviews) / total
        for category, field_name in settings.RATING_CATEGORIES.items()
    }

    return ReviewStats(
        total_reviews=total,
        average_rating=round_half_up(average, 1),
        rating_breakdown=rating_breakdown,
        category_averages=category_averages
    )


class ReviewStatsAggregator:
    """
    Computes ReviewStats from the store's current contents.
    Nothing is cached; every call sees the latest collection.
    """

    def __init__(self, store: ReviewStore):
        self.store = store

    def get_stats(self, hotel_id) -> ReviewStats:
        stats = compute_review_stats(self.store.list_by_hotel(hotel_id), hotel_id)
        logger.debug(
            f"Stats for hotel {hotel_id}: {stats.total_reviews} reviews, "
            f"average {stats.average_rating}"
        )
        return stats


class HotelRatingReport:
    """
    Tabulates review statistics for every hotel in the store.
    """

    COLUMNS = (
        ['Hotel', 'Reviews', 'Average']
        + [f"{star}★" for star in STAR_VALUES]
        + [category.capitalize() for category in settings.RATING_CATEGORIES]
    )

    def __init__(self, aggregator: ReviewStatsAggregator, storage: StorageManager):
        """
        Initialize rating report.

        Args:
            aggregator: Stats aggregator bound to the review store
            storage: Storage manager for report output
        """
        self.aggregator = aggregator
        self.storage = storage

    def build_table(self) -> pd.DataFrame:
        """
        Build one row per hotel, sorted by average then review count (descending).
        """
        rows = []
        for hotel_id in self.aggregator.store.hotel_ids():
            stats = self.aggregator.get_stats(hotel_id)

            row = {
                'Hotel': hotel_id,
                'Reviews': stats.total_reviews,
                'Average': stats.average_rating
            }
            for star in STAR_VALUES:
                row[f"{star}★"] = stats.rating_breakdown[star]
            for category, value in stats.category_averages.items():
                row[category.capitalize()] = round(value, settings.REPORT_CATEGORY_DECIMALS)

            rows.append(row)

        if not rows:
            logger.warning("No reviews in store, creating empty rating report")
            return pd.DataFrame(columns=self.COLUMNS)

        df = pd.DataFrame(rows, columns=self.COLUMNS)
        df = df.sort_values(['Average', 'Reviews'], ascending=False).reset_index(drop=True)
        return df

    def generate_report(self, report_date: Optional[str] = None) -> str:
        """
        Write the rating table as CSV plus a metadata JSON sidecar.

        Args:
            report_date: Date stamp for file names, YYYY-MM-DD (default: today, UTC)

        Returns:
            Path to generated CSV file
        """
        generated_at = datetime.now(timezone.utc)
        report_date = report_date or generated_at.strftime("%Y-%m-%d")

        df = self.build_table()

        output_path = os.path.join(self.storage.output_root, f"hotel_ratings_{report_date}.csv")
        df.to_csv(output_path, index=False)

        total_reviews = int(df['Reviews'].sum()) if not df.empty else 0
        logger.info(
            f"Rating report saved to {output_path} "
            f"({len(df)} hotels, {total_reviews} reviews)"
        )

        metadata = {
            "report_date": report_date,
            "total_hotels": len(df),
            "total_reviews": total_reviews,
            "generated_at": generated_at.isoformat().replace("+00:00", "Z")
        }
        self.storage.save_json(metadata, f"hotel_ratings_{report_date}_metadata.json")

        return output_path
